"""Mass table configuration object.

A :class:`MassTable` bundles every mass the weight calculator needs: residue
masses plus the water, hydrogen, leaving-group and reagent masses used for
termini and bridge corrections. It is immutable and injected into the
analysis pipeline, so monoisotopic, average or user-supplied tables can be
swapped freely.

Examples
--------
>>> table = MassTable.average()
>>> table.residue_masses("AG")
array([71.0788, 57.0519])

>>> custom = MassTable.from_json("my_masses.json")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

import numpy as np

from .constants import (
    AA_MASSES_AVG,
    AA_MASSES_MONO,
    DFBP_MASS_AVG,
    DFBP_MASS_MONO,
    H2O_MASS_AVG,
    H2O_MASS_MONO,
    H_MASS_AVG,
    H_MASS_MONO,
    HF_MASS_AVG,
    HF_MASS_MONO,
)
from .exceptions import MalformedSequenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MassTable:
    """Residue and bridge masses used for fragment weights (Da).

    Attributes
    ----------
    residues : Mapping[str, float]
        Residue code -> residue mass (without termini)
    water_mass : float
        Added once per fragment for its free termini; subtracted per amide bond
    hydrogen_mass : float
        Two are lost per disulfide bond
    dfbp_mass : float
        Mass of the decafluorobiphenyl staple added when a DFBP bridge is intact
    leaving_group_mass : float
        Lost per enclosed attachment point of a hub bridge (HF for SNAr)
    name : str
        Label used in log messages
    """

    residues: Mapping[str, float]
    water_mass: float
    hydrogen_mass: float
    dfbp_mass: float
    leaving_group_mass: float
    name: str = field(default="custom", compare=False)

    def __post_init__(self):
        if not self.residues:
            raise ValueError("Mass table must define at least one residue")
        for code, mass in self.residues.items():
            if len(code) != 1:
                raise ValueError(f"Residue codes must be single characters, got {code!r}")
            if mass <= 0:
                raise ValueError(f"Residue {code} must have a positive mass, got {mass}")
        # Freeze the residue mapping as well as the dataclass fields
        object.__setattr__(
            self, "residues", MappingProxyType({str(k): float(v) for k, v in self.residues.items()})
        )

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild through __init__ in workers
        return (
            self.__class__,
            (dict(self.residues), self.water_mass, self.hydrogen_mass,
             self.dfbp_mass, self.leaving_group_mass, self.name),
        )

    @classmethod
    def monoisotopic(cls) -> 'MassTable':
        """Monoisotopic masses for high-resolution data."""
        return cls(
            residues=AA_MASSES_MONO,
            water_mass=H2O_MASS_MONO,
            hydrogen_mass=H_MASS_MONO,
            dfbp_mass=DFBP_MASS_MONO,
            leaving_group_mass=HF_MASS_MONO,
            name="monoisotopic",
        )

    @classmethod
    def average(cls) -> 'MassTable':
        """Average (chemical) masses, i.e. molecular weights."""
        return cls(
            residues=AA_MASSES_AVG,
            water_mass=H2O_MASS_AVG,
            hydrogen_mass=H_MASS_AVG,
            dfbp_mass=DFBP_MASS_AVG,
            leaving_group_mass=HF_MASS_AVG,
            name="average",
        )

    @classmethod
    def for_mass_type(cls, mass_type: str) -> 'MassTable':
        """Create a built-in table by name ("average" or "monoisotopic").

        Args:
            mass_type: Name of the built-in table

        Returns:
            MassTable with the requested masses
        """
        if mass_type == "average":
            return cls.average()
        elif mass_type == "monoisotopic":
            return cls.monoisotopic()
        else:
            raise ValueError(f"Unknown mass type: {mass_type}")

    @classmethod
    def from_json(
        cls,
        path: Union[str, Path],
        base: str = "average",
    ) -> 'MassTable':
        """Load a mass table from a JSON file.

        Keys missing from the file fall back to the ``base`` built-in table,
        so a file may override only a few residues. Residue entries in the
        file are merged over the base residues.

        Parameters
        ----------
        path : str or Path
            JSON file with any of the keys ``residues`` (object of
            code -> mass), ``water_mass``, ``hydrogen_mass``, ``dfbp_mass``,
            ``leaving_group_mass``
        base : str
            Built-in table supplying defaults ("average" or "monoisotopic")

        Returns
        -------
        MassTable

        Examples
        --------
        >>> # {"residues": {"C": 160.1942}} for carbamidomethylated cysteine
        >>> table = MassTable.from_json("cam.json")
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Mass table not found: {path}")

        with open(path) as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Mass table {path.name} must contain a JSON object")

        known = {"residues", "water_mass", "hydrogen_mass", "dfbp_mass", "leaving_group_mass"}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown keys in mass table {path.name}: {sorted(unknown)}")

        table = cls.for_mass_type(base)
        residues = dict(table.residues)
        residues.update(data.get("residues", {}))

        overrides = {k: float(data[k]) for k in known - {"residues"} if k in data}
        table = replace(table, residues=residues, name=path.stem, **overrides)

        logger.info(f"✓ Loaded mass table {path.name} ({len(table.residues)} residues)")
        return table

    @property
    def alphabet(self) -> frozenset:
        """Residue codes this table can weigh."""
        return frozenset(self.residues)

    def residue_masses(self, sequence: str) -> np.ndarray:
        """Per-position residue masses of a sequence.

        Parameters
        ----------
        sequence : str
            Peptide sequence

        Returns
        -------
        masses : np.ndarray (float64)
            ``masses[i]`` is the mass of ``sequence[i]``
        """
        try:
            return np.array([self.residues[aa] for aa in sequence], dtype=np.float64)
        except KeyError as e:
            raise MalformedSequenceError(
                f"Residue {e.args[0]!r} is not in the {self.name} mass table"
            ) from e


# Default table for callers that do not inject one
DEFAULT_MASS_TABLE = MassTable.average()
