"""Connectivity graph construction for linear and cyclized peptides.

Nodes are plain integers. Nodes ``0..L-1`` are backbone residues joined
``i - i+1``; synthetic bridge nodes (disulfide sulfurs, reagent hubs) are
appended from ``L`` upward. Every cyclization bond is summarised as a
:class:`Bridge` record, the only part of the graph the weight calculator
reads. The ``node_kinds`` side table names the bridge entity behind each
synthetic node for inspection and pickling.

Topology per bond type
----------------------
- LINEAR:    backbone path only
- DISULFIDE: S1=L, S2=L+1, edges S1-S2, S1-c[0], S2-c[1]
- AMIDE:     connections taken in pairs, each pair edged directly
- DFBP:      hub H=L, edge H-c for every connection
- CUSTOM:    same as DFBP, hub mass supplied by the user

Examples
--------
>>> graph = build_graph("YEQDPWGVKK", [2, 8], BondType.DISULFIDE)
>>> graph.neighbors(10)
(11, 2)
>>> print(format_graph("YEQDPWGVKK", graph))
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from itertools import combinations
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..bonds import BondType
from ..exceptions import (
    DuplicateConnectionError,
    IndexOutOfRangeError,
    InvalidConnectionCountError,
    InvalidCustomWeightError,
    MalformedSequenceError,
)
from ..mass_table import DEFAULT_MASS_TABLE

logger = logging.getLogger(__name__)

# Side-table labels for synthetic nodes
SULFUR_NODE = "sulfur"
DFBP_HUB_NODE = "dfbp"
CUSTOM_HUB_NODE = "custom"


@dataclass(frozen=True)
class Bridge:
    """One cyclization bond.

    Attributes
    ----------
    bond_type : BondType
        Chemistry of the bond (never LINEAR)
    attachments : Tuple[int, ...]
        Backbone positions the bond is attached to, ascending
    nodes : Tuple[int, ...]
        Synthetic graph nodes belonging to the bond (empty for amides)
    """
    bond_type: BondType
    attachments: Tuple[int, ...]
    nodes: Tuple[int, ...] = ()

    def attachment_pairs(self) -> Iterator[Tuple[int, int]]:
        """Unordered attachment pairs ``(a, b)`` with ``a < b``."""
        return combinations(self.attachments, 2)


@dataclass(frozen=True)
class PeptideGraph:
    """Immutable undirected peptide graph.

    Attributes
    ----------
    adjacency : Mapping[int, Tuple[int, ...]]
        Node -> neighbours in insertion order, every edge stored both ways
    node_kinds : Mapping[int, str]
        Synthetic node -> bridge kind (backbone nodes are absent); descriptive
        only, weighing uses ``bridges``
    bridges : Tuple[Bridge, ...]
        Cyclization bonds in input order
    n_residues : int
        Backbone length L
    """
    adjacency: Mapping[int, Tuple[int, ...]]
    node_kinds: Mapping[int, str]
    bridges: Tuple[Bridge, ...]
    n_residues: int

    def __reduce__(self):
        return (
            self.__class__,
            (dict(self.adjacency), dict(self.node_kinds), self.bridges, self.n_residues),
        )

    def __post_init__(self):
        object.__setattr__(self, "adjacency", MappingProxyType(dict(self.adjacency)))
        object.__setattr__(self, "node_kinds", MappingProxyType(dict(self.node_kinds)))

    @property
    def nodes(self) -> Tuple[int, ...]:
        return tuple(self.adjacency)

    @property
    def synthetic_nodes(self) -> Tuple[int, ...]:
        return tuple(n for n in self.adjacency if n >= self.n_residues)

    def neighbors(self, node: int) -> Tuple[int, ...]:
        return self.adjacency[node]

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.adjacency.get(a, ())

    def edges(self) -> List[Tuple[int, int]]:
        """Each undirected edge once, as ``(low, high)``, sorted."""
        return sorted({(min(a, b), max(a, b)) for a, nbrs in self.adjacency.items() for b in nbrs})

    def is_connected(self) -> bool:
        if not self.adjacency:
            return False
        start = next(iter(self.adjacency))
        seen = {start}
        stack = [start]
        while stack:
            node = stack.pop()
            for nbr in self.adjacency[node]:
                if nbr not in seen:
                    seen.add(nbr)
                    stack.append(nbr)
        return len(seen) == len(self.adjacency)


# =============================================================================
# Validation
# =============================================================================

def _validate_sequence(sequence: str, alphabet: Optional[Iterable[str]]) -> None:
    if not sequence:
        raise MalformedSequenceError("Peptide sequence is empty")

    allowed = DEFAULT_MASS_TABLE.alphabet if alphabet is None else frozenset(alphabet)
    unknown = sorted(set(sequence) - allowed)
    if unknown:
        raise MalformedSequenceError(
            f"Sequence {sequence!r} contains unknown residue codes: {''.join(unknown)}"
        )


def _validate_connections(
    length: int,
    connections: Tuple[int, ...],
    bond_type: BondType,
) -> None:
    n = len(connections)

    if bond_type is BondType.LINEAR:
        if n:
            raise InvalidConnectionCountError(
                f"Linear peptides take no connections, got {n}"
            )
        return

    if n == 0:
        raise InvalidConnectionCountError(
            f"{bond_type.name} peptides need connection indices"
        )
    if n % 2:
        raise InvalidConnectionCountError(
            f"{bond_type.name} peptides need an even number of connection indices, got {n}"
        )
    if bond_type is BondType.DISULFIDE and n != 2:
        raise InvalidConnectionCountError(
            f"DISULFIDE peptides need exactly 2 connection indices, got {n}"
        )

    seen = set()
    for index in connections:
        if index in seen:
            raise DuplicateConnectionError(f"Connection index {index} appears more than once")
        seen.add(index)

    for index in connections:
        if not 0 <= index < length:
            raise IndexOutOfRangeError(
                f"Connection index {index} is outside [0, {length})"
            )


def _validate_custom_weight(custom_weight: Optional[float]) -> None:
    if custom_weight is None:
        raise InvalidCustomWeightError("CUSTOM bonds require a bridging-moiety weight")
    if not math.isfinite(custom_weight) or custom_weight <= 0:
        raise InvalidCustomWeightError(
            f"CUSTOM bridging-moiety weight must be positive, got {custom_weight}"
        )


# =============================================================================
# Construction
# =============================================================================

def _add_edge(adjacency: Dict[int, List[int]], a: int, b: int) -> None:
    if b not in adjacency[a]:
        adjacency[a].append(b)
    if a not in adjacency[b]:
        adjacency[b].append(a)


def build_graph(
    sequence: str,
    connections: Iterable[int],
    bond_type: BondType,
    custom_weight: Optional[float] = None,
    alphabet: Optional[Iterable[str]] = None,
) -> PeptideGraph:
    """Build the connectivity graph of a peptide.

    Parameters
    ----------
    sequence : str
        Peptide sequence (single-letter codes)
    connections : Iterable[int]
        Zero-indexed backbone positions carrying the cyclization bond(s)
    bond_type : BondType
        Cyclization chemistry
    custom_weight : float, optional
        Bridging-moiety weight, required for CUSTOM
    alphabet : Iterable[str], optional
        Accepted residue codes (default: residues of the default mass table)

    Returns
    -------
    PeptideGraph

    Raises
    ------
    MalformedSequenceError, InvalidConnectionCountError,
    DuplicateConnectionError, IndexOutOfRangeError, InvalidCustomWeightError
        Input is rejected before anything is built

    Examples
    --------
    >>> graph = build_graph("AGCA", [0, 3], BondType.AMIDE)
    >>> graph.has_edge(0, 3)
    True
    """
    connections = tuple(int(c) for c in connections)
    _validate_sequence(sequence, alphabet)
    _validate_connections(len(sequence), connections, bond_type)
    if bond_type is BondType.CUSTOM:
        _validate_custom_weight(custom_weight)

    length = len(sequence)

    # Backbone path, independent of bond type
    adjacency: Dict[int, List[int]] = {i: [] for i in range(length)}
    for i in range(length - 1):
        _add_edge(adjacency, i, i + 1)

    node_kinds: Dict[int, str] = {}
    bridges: List[Bridge] = []

    if bond_type is BondType.LINEAR:
        pass

    elif bond_type is BondType.DISULFIDE:
        s1, s2 = length, length + 1
        adjacency[s1] = []
        adjacency[s2] = []
        node_kinds[s1] = SULFUR_NODE
        node_kinds[s2] = SULFUR_NODE
        _add_edge(adjacency, s1, s2)
        _add_edge(adjacency, s1, connections[0])
        _add_edge(adjacency, s2, connections[1])
        bridges.append(Bridge(bond_type, tuple(sorted(connections)), (s1, s2)))

    elif bond_type is BondType.AMIDE:
        for a, b in zip(connections[0::2], connections[1::2]):
            if abs(a - b) == 1:
                logger.warning(
                    f"Amide bond {a}-{b} joins neighbouring residues already bonded by the backbone"
                )
            _add_edge(adjacency, a, b)
            bridges.append(Bridge(bond_type, (min(a, b), max(a, b))))

    elif bond_type in (BondType.DFBP, BondType.CUSTOM):
        hub = length
        adjacency[hub] = []
        node_kinds[hub] = DFBP_HUB_NODE if bond_type is BondType.DFBP else CUSTOM_HUB_NODE
        for connection in connections:
            _add_edge(adjacency, hub, connection)
        bridges.append(Bridge(bond_type, tuple(sorted(connections)), (hub,)))

    else:
        raise ValueError(f"Unhandled bond type: {bond_type}")

    graph = PeptideGraph(
        adjacency={node: tuple(nbrs) for node, nbrs in adjacency.items()},
        node_kinds=node_kinds,
        bridges=tuple(bridges),
        n_residues=length,
    )
    logger.debug(
        f"Built {bond_type.name} graph for {sequence}: "
        f"{len(graph.adjacency)} nodes, {len(graph.edges())} edges, {len(bridges)} bridges"
    )
    return graph


def format_graph(sequence: str, graph: PeptideGraph) -> str:
    """Render a graph one node per line.

    Backbone nodes print as their residue letter, synthetic nodes as their
    numeric id.

    Examples
    --------
    >>> print(format_graph("AG", build_graph("AG", [], BondType.LINEAR)))
    A -> G
    G -> A
    """
    def label(node: int) -> str:
        return sequence[node] if node < len(sequence) else str(node)

    lines = []
    for node, nbrs in graph.adjacency.items():
        lines.append(f"{label(node)} -> {', '.join(label(n) for n in nbrs)}")
    return "\n".join(lines)
