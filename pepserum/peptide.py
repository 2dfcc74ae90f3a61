"""Peptide record: sequence, cyclization chemistry and observed masses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from .bonds import BondType, parse_bond_type
from .graph.builder import PeptideGraph, build_graph

logger = logging.getLogger(__name__)


@dataclass
class Peptide:
    """A peptide under analysis.

    The graph is built (and the input validated) on construction. Sequence,
    bond type, connections and custom weight are fixed afterwards; only
    observed masses may be appended. To analyze a different structure, build
    a new Peptide.

    Attributes
    ----------
    sequence : str
        Single-letter residue codes
    bond_type : BondType
        Cyclization chemistry (a token such as "dfbp" is also accepted)
    connections : Tuple[int, ...]
        Zero-indexed attachment positions of the cyclization bond(s)
    custom_weight : float, optional
        Bridging-moiety weight, used only for CUSTOM
    observed_masses : List[float]
        Masses to explain, may be empty
    graph : PeptideGraph
        Derived connectivity graph

    Examples
    --------
    >>> peptide = Peptide("YEQDPWGVKK", BondType.DISULFIDE, (2, 8))
    >>> peptide.graph.synthetic_nodes
    (10, 11)
    """

    sequence: str
    bond_type: Union[BondType, str] = BondType.LINEAR
    connections: Tuple[int, ...] = ()
    custom_weight: Optional[float] = None
    observed_masses: List[float] = field(default_factory=list)
    alphabet: Optional[frozenset] = field(default=None, repr=False, compare=False)
    graph: PeptideGraph = field(init=False, repr=False, compare=False)

    _FIXED_FIELDS = ("sequence", "bond_type", "connections", "custom_weight", "alphabet", "graph")

    def __post_init__(self):
        if not isinstance(self.bond_type, BondType):
            self.bond_type = parse_bond_type(self.bond_type)
        self.connections = tuple(int(c) for c in self.connections)
        self.observed_masses = [float(m) for m in self.observed_masses]

        if self.custom_weight is not None and self.bond_type is not BondType.CUSTOM:
            logger.debug(f"Ignoring custom weight for {self.bond_type.name} peptide {self.sequence}")

        self.graph = build_graph(
            self.sequence,
            self.connections,
            self.bond_type,
            custom_weight=self.custom_weight,
            alphabet=self.alphabet,
        )
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name, value):
        if name in self._FIXED_FIELDS and getattr(self, "_frozen", False):
            raise AttributeError(
                f"Peptide.{name} cannot be changed after construction; build a new Peptide"
            )
        super().__setattr__(name, value)

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def is_cyclic(self) -> bool:
        return self.bond_type.is_cyclic

    def add_observed_masses(self, masses: Iterable[float]) -> None:
        """Append observed masses to match against this peptide."""
        self.observed_masses.extend(float(m) for m in masses)
