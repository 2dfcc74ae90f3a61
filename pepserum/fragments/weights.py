"""Fragment molecular weights with bond-specific corrections.

Weight of a fragment:

    sum(residue masses over all ranges) + water
    + for every bridge with >= 2 attachments inside the fragment:
        fixed_delta + per_attachment_delta * n_enclosed

with, per bond type:

    DISULFIDE  fixed = -2 H           per_attachment = 0
    AMIDE      fixed = -H2O           per_attachment = 0
    DFBP       fixed = +DFBP          per_attachment = -HF
    CUSTOM     fixed = +custom weight per_attachment = -HF

A bridge with fewer than two enclosed attachments is severed and contributes
nothing. Water is added once even for two-piece fragments.

Key optimizations:
1. Numba JIT compilation with prange over fragments
2. Fragments and bridges packed into fixed-width integer arrays
3. Pre-allocated output array (no dynamic memory allocation)
"""

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numba
import numpy as np

from ..bonds import BondType
from ..mass_table import DEFAULT_MASS_TABLE, MassTable
from .enumerator import Fragment

logger = logging.getLogger(__name__)


# =============================================================================
# Bond Corrections
# =============================================================================

def bridge_correction_terms(
    bond_type: BondType,
    mass_table: MassTable,
    custom_weight: Optional[float] = None,
) -> Tuple[float, float]:
    """Mass correction of one intact bridge.

    Parameters
    ----------
    bond_type : BondType
        Chemistry of the bridge
    mass_table : MassTable
        Source of water, hydrogen, reagent and leaving-group masses
    custom_weight : float, optional
        Bridging-moiety weight for CUSTOM

    Returns
    -------
    fixed_delta : float
        Applied once when the bridge is intact
    per_attachment_delta : float
        Multiplied by the number of enclosed attachment points
    """
    if bond_type is BondType.DISULFIDE:
        # Oxidative S-S formation releases two hydrogens
        return -2.0 * mass_table.hydrogen_mass, 0.0
    elif bond_type is BondType.AMIDE:
        # Condensation releases one water per amide bond
        return -mass_table.water_mass, 0.0
    elif bond_type is BondType.DFBP:
        return mass_table.dfbp_mass, -mass_table.leaving_group_mass
    elif bond_type is BondType.CUSTOM:
        if custom_weight is None:
            raise ValueError("CUSTOM bridges need a custom weight")
        return float(custom_weight), -mass_table.leaving_group_mass
    else:
        raise ValueError(f"No bridge correction for bond type {bond_type}")


# =============================================================================
# Packing Helpers
# =============================================================================

def pack_fragments(fragments: Sequence[Fragment]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Pack fragment ranges into arrays for the Numba kernel.

    Returns
    -------
    piece_starts, piece_ends : np.ndarray (int64), shape (n_fragments, max_pieces)
        Inclusive range bounds, padded with -1
    n_pieces : np.ndarray (int64), shape (n_fragments,)
        Number of ranges per fragment
    """
    n = len(fragments)
    width = max((len(f.ranges) for f in fragments), default=1)

    piece_starts = np.full((n, width), -1, dtype=np.int64)
    piece_ends = np.full((n, width), -1, dtype=np.int64)
    n_pieces = np.empty(n, dtype=np.int64)

    for k, fragment in enumerate(fragments):
        n_pieces[k] = len(fragment.ranges)
        for p, (start, end) in enumerate(fragment.ranges):
            piece_starts[k, p] = start
            piece_ends[k, p] = end

    return piece_starts, piece_ends, n_pieces


def pack_bridges(
    bridges: Iterable,
    mass_table: MassTable,
    custom_weight: Optional[float] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Pack bridge attachments and correction terms into arrays.

    Returns
    -------
    bridge_arms : np.ndarray (int64), shape (n_bridges, max_arms)
        Attachment positions, padded with -1
    bridge_arm_counts : np.ndarray (int64)
    bridge_fixed : np.ndarray (float64)
    bridge_per_arm : np.ndarray (float64)
    """
    bridges = list(bridges)
    width = max((len(b.attachments) for b in bridges), default=2)

    bridge_arms = np.full((len(bridges), width), -1, dtype=np.int64)
    bridge_arm_counts = np.zeros(len(bridges), dtype=np.int64)
    bridge_fixed = np.zeros(len(bridges), dtype=np.float64)
    bridge_per_arm = np.zeros(len(bridges), dtype=np.float64)

    for k, bridge in enumerate(bridges):
        bridge_arm_counts[k] = len(bridge.attachments)
        bridge_arms[k, :len(bridge.attachments)] = bridge.attachments
        bridge_fixed[k], bridge_per_arm[k] = bridge_correction_terms(
            bridge.bond_type, mass_table, custom_weight
        )

    return bridge_arms, bridge_arm_counts, bridge_fixed, bridge_per_arm


# =============================================================================
# Core Weight Calculation (Numba-Compiled)
# =============================================================================

@numba.njit(parallel=True, cache=True)
def compute_fragment_weights(
    residue_masses: np.ndarray,
    piece_starts: np.ndarray,
    piece_ends: np.ndarray,
    n_pieces: np.ndarray,
    bridge_arms: np.ndarray,
    bridge_arm_counts: np.ndarray,
    bridge_fixed: np.ndarray,
    bridge_per_arm: np.ndarray,
    water_mass: float,
) -> np.ndarray:
    """Compute fragment weights (Numba-compiled, parallel over fragments).

    Parameters
    ----------
    residue_masses : np.ndarray (float64)
        Mass of each backbone position
    piece_starts, piece_ends, n_pieces : np.ndarray
        Packed fragments from pack_fragments()
    bridge_arms, bridge_arm_counts, bridge_fixed, bridge_per_arm : np.ndarray
        Packed bridges from pack_bridges()
    water_mass : float
        Terminus correction, added once per fragment

    Returns
    -------
    weights : np.ndarray (float64)
        Weight of each fragment, in input order

    Performance
    -----------
    O(n_fragments × (range length + n_bridges × arms × pieces))
    """
    n_fragments = len(n_pieces)
    n_bridges = len(bridge_arm_counts)
    weights = np.empty(n_fragments, dtype=np.float64)

    for f in numba.prange(n_fragments):
        total = 0.0
        for p in range(n_pieces[f]):
            for r in range(piece_starts[f, p], piece_ends[f, p] + 1):
                total += residue_masses[r]

        # Free termini
        total += water_mass

        for b in range(n_bridges):
            enclosed = 0
            for a in range(bridge_arm_counts[b]):
                position = bridge_arms[b, a]
                for p in range(n_pieces[f]):
                    if piece_starts[f, p] <= position and position <= piece_ends[f, p]:
                        enclosed += 1
                        break
            # Severed bridges are not weighed
            if enclosed >= 2:
                total += bridge_fixed[b] + bridge_per_arm[b] * enclosed

        weights[f] = total

    return weights


def _check_ranges(fragments: Sequence[Fragment], length: int) -> None:
    for fragment in fragments:
        for start, end in fragment.ranges:
            if not 0 <= start <= end < length:
                raise ValueError(
                    f"Fragment {fragment} has range [{start}, {end}] outside a peptide of length {length}"
                )


def measure_weights(
    peptide,
    fragments: Sequence[Fragment],
    mass_table: Optional[MassTable] = None,
) -> Dict[Fragment, float]:
    """Weigh every fragment of a peptide.

    Parameters
    ----------
    peptide : Peptide
        Peptide the fragments were enumerated from
    fragments : Sequence[Fragment]
        Fragments from enumerate_fragments()
    mass_table : MassTable, optional
        Masses to use (default: average masses)

    Returns
    -------
    weights : Dict[Fragment, float]
        Fragment -> molecular weight (Da), in fragment order

    Raises
    ------
    ValueError
        A fragment range lies outside the peptide

    Examples
    --------
    >>> peptide = Peptide("AG")
    >>> weights = measure_weights(peptide, enumerate_fragments(peptide))
    >>> # weights[AG] == mass(A) + mass(G) + water
    """
    mass_table = mass_table or DEFAULT_MASS_TABLE
    fragments = list(fragments)
    if not fragments:
        return {}

    # The kernel does not bounds-check residue lookups
    _check_ranges(fragments, len(peptide.sequence))

    residue_masses = mass_table.residue_masses(peptide.sequence)
    piece_starts, piece_ends, n_pieces = pack_fragments(fragments)
    bridge_arms, bridge_arm_counts, bridge_fixed, bridge_per_arm = pack_bridges(
        peptide.graph.bridges, mass_table, peptide.custom_weight
    )

    weights = compute_fragment_weights(
        residue_masses,
        piece_starts,
        piece_ends,
        n_pieces,
        bridge_arms,
        bridge_arm_counts,
        bridge_fixed,
        bridge_per_arm,
        mass_table.water_mass,
    )

    logger.debug(
        f"Weighed {len(fragments):,} fragments of {peptide.sequence} ({mass_table.name} masses)"
    )
    return {fragment: float(weight) for fragment, weight in zip(fragments, weights)}
