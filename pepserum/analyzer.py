"""Per-peptide fragment analysis with cached weights.

:class:`FragmentAnalyzer` runs the pipeline Graph -> Fragments -> Weights
once, when it is constructed, and then answers any number of match queries
against the cached weights.

Design principles:
1. Eager: all fragments are weighed up front
2. Read-only after construction (safe to share between threads)
3. Vectorized matching over a float64 weight array

Examples
--------
>>> peptide = Peptide("YEQDPWGVKK", "disulfide", (2, 8), observed_masses=[1233.3])
>>> analyzer = FragmentAnalyzer(peptide)
>>> analyzer.suggest_fragments(1233.3, threshold=1.0)
>>> reports = analyzer.match_observed_masses(threshold=1.0)
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from .fragments.enumerator import Fragment, enumerate_fragments
from .fragments.weights import measure_weights
from .mass_table import DEFAULT_MASS_TABLE, MassTable
from .peptide import Peptide
from .search.matcher import MatchReport, fragments_of_size

logger = logging.getLogger(__name__)


class FragmentAnalyzer:
    """Fragments and weights of one peptide, computed once.

    Attributes
    ----------
    peptide : Peptide
        Analyzed peptide
    mass_table : MassTable
        Masses used for weighing
    fragments : List[Fragment]
        All enumerated fragments
    weights : np.ndarray (float64)
        Weight of ``fragments[i]`` at index ``i``
    n_fragments : int
        Number of fragments
    """

    def __init__(self, peptide: Peptide, mass_table: Optional[MassTable] = None):
        """Enumerate and weigh all fragments of a peptide.

        Parameters
        ----------
        peptide : Peptide
            Peptide to analyze
        mass_table : MassTable, optional
            Masses to use (default: average masses)
        """
        self.peptide = peptide
        self.mass_table = mass_table or DEFAULT_MASS_TABLE

        self.fragments = enumerate_fragments(peptide)
        self._fragment_weights = measure_weights(peptide, self.fragments, self.mass_table)
        self.weights = np.fromiter(
            self._fragment_weights.values(), dtype=np.float64, count=len(self.fragments)
        )
        self.n_fragments = len(self.fragments)

        n_bridged = sum(1 for f in self.fragments if f.is_bridged)
        logger.info(
            f"✓ {peptide.sequence} ({peptide.bond_type.name}): "
            f"{self.n_fragments:,} fragments ({n_bridged:,} bridged)"
        )

    @property
    def fragment_weights(self) -> Mapping[Fragment, float]:
        """Fragment -> weight, read-only."""
        return MappingProxyType(self._fragment_weights)

    def suggest_fragments(self, observed_mass: float, threshold: float) -> Dict[Fragment, float]:
        """Fragments within ``threshold`` Da of an observed mass (inclusive).

        Parameters
        ----------
        observed_mass : float
            Observed mass (Da)
        threshold : float
            Absolute tolerance (Da), >= 0

        Returns
        -------
        Dict[Fragment, float]
            Matching fragments in enumeration order
        """
        if not threshold >= 0:
            raise ValueError(f"Threshold must be >= 0, got {threshold}")

        hits = np.flatnonzero(np.abs(self.weights - observed_mass) <= threshold)
        return {self.fragments[i]: float(self.weights[i]) for i in hits}

    def match_observed_masses(
        self,
        threshold: float,
        observed_masses: Optional[Iterable[float]] = None,
    ) -> List[MatchReport]:
        """Match a batch of observed masses, one report per mass.

        Parameters
        ----------
        threshold : float
            Shared absolute tolerance (Da)
        observed_masses : Iterable[float], optional
            Masses to match (default: the peptide's observed masses)

        Returns
        -------
        List[MatchReport]
            In the order of the observed masses, including empty reports
        """
        if observed_masses is None:
            observed_masses = self.peptide.observed_masses

        reports = [
            MatchReport(self.peptide.sequence, float(mass), self.suggest_fragments(mass, threshold))
            for mass in observed_masses
        ]

        n_explained = sum(1 for r in reports if r.matches)
        logger.info(f"  {self.peptide.sequence}: {n_explained}/{len(reports)} masses explained")
        return reports

    def fragments_of_size(self, size: int) -> Dict[Fragment, float]:
        """Fragments spanning exactly ``size`` residues."""
        return fragments_of_size(self._fragment_weights, size)
