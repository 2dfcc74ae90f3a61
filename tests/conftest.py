"""Pytest configuration for pepserum tests.

Common fixtures: mass tables and a handful of peptides covering every bond
type. The ``toy_table`` uses round numbers so expected weights are exact in
binary floating point.
"""

import pytest

from pepserum.bonds import BondType
from pepserum.mass_table import MassTable
from pepserum.peptide import Peptide


@pytest.fixture
def average_table():
    """Average masses (the default table)."""
    return MassTable.average()


@pytest.fixture
def mono_table():
    """Monoisotopic masses."""
    return MassTable.monoisotopic()


@pytest.fixture
def toy_table():
    """Mass table with exactly representable masses."""
    return MassTable(
        residues={"A": 100.0, "G": 50.0, "C": 200.0, "K": 150.0},
        water_mass=10.0,
        hydrogen_mass=1.0,
        dfbp_mass=300.0,
        leaving_group_mass=20.0,
        name="toy",
    )


@pytest.fixture
def linear_peptide():
    """Two-residue linear peptide."""
    return Peptide("AG")


@pytest.fixture
def disulfide_peptide():
    """Disulfide-bridged peptide, S-S between positions 2 and 8."""
    return Peptide("YEQDPWGVKK", BondType.DISULFIDE, (2, 8))


@pytest.fixture
def amide_peptide():
    """Head-to-tail lactam."""
    return Peptide("AGCA", BondType.AMIDE, (0, 3))


@pytest.fixture
def dfbp_peptide():
    """Two-armed DFBP staple between the cysteines."""
    return Peptide("ACDKCG", BondType.DFBP, (1, 4))


@pytest.fixture
def custom_peptide():
    """Two-armed user-defined staple."""
    return Peptide("ACDKCG", BondType.CUSTOM, (1, 4), custom_weight=254.3)


@pytest.fixture
def all_peptides(linear_peptide, disulfide_peptide, amide_peptide, dfbp_peptide, custom_peptide):
    """One peptide per bond type."""
    return [linear_peptide, disulfide_peptide, amide_peptide, dfbp_peptide, custom_peptide]
