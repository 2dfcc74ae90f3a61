"""Unit tests for the Peptide record."""

import pickle

import pytest

from pepserum.bonds import BondType
from pepserum.exceptions import InvalidConnectionCountError, UnknownBondTypeError
from pepserum.peptide import Peptide


class TestConstruction:
    """Test building peptides."""

    def test_defaults(self):
        """A bare sequence is a linear peptide."""
        peptide = Peptide("AG")

        assert peptide.bond_type is BondType.LINEAR
        assert peptide.connections == ()
        assert peptide.observed_masses == []
        assert peptide.length == 2
        assert not peptide.is_cyclic

    def test_string_bond_type(self):
        """Bond types may be given as strings."""
        peptide = Peptide("YEQDPWGVKK", "Disulfide", [2, 8])

        assert peptide.bond_type is BondType.DISULFIDE
        assert peptide.connections == (2, 8)
        assert peptide.is_cyclic
        assert peptide.graph.synthetic_nodes == (10, 11)

    def test_unknown_bond_type(self):
        """Unknown bond type strings are rejected."""
        with pytest.raises(UnknownBondTypeError):
            Peptide("AG", "staple")

    def test_invalid_input_raises_at_construction(self):
        """Connection errors surface when the peptide is built."""
        with pytest.raises(InvalidConnectionCountError):
            Peptide("AGCAG", BondType.AMIDE, (0, 2, 4))

    def test_observed_masses_as_floats(self):
        """Observed masses are stored as floats."""
        peptide = Peptide("AG", observed_masses=[146, "203.2"])
        assert peptide.observed_masses == [146.0, 203.2]


class TestImmutability:
    """Structure is fixed, observed masses are not."""

    @pytest.mark.parametrize("name,value", [
        ("sequence", "GA"),
        ("bond_type", BondType.AMIDE),
        ("connections", (0, 1)),
        ("custom_weight", 1.0),
        ("graph", None),
    ])
    def test_fixed_fields(self, linear_peptide, name, value):
        """Structural fields cannot be reassigned."""
        with pytest.raises(AttributeError, match="cannot be changed"):
            setattr(linear_peptide, name, value)

    def test_add_observed_masses(self, linear_peptide):
        """Observed masses accumulate in order."""
        linear_peptide.add_observed_masses([146.1])
        linear_peptide.add_observed_masses((203, 128.5))
        assert linear_peptide.observed_masses == [146.1, 203.0, 128.5]

    def test_pickle_round_trip(self, custom_peptide):
        """Pickled peptides restore structure and stay immutable."""
        custom_peptide.add_observed_masses([512.0])
        restored = pickle.loads(pickle.dumps(custom_peptide))

        assert restored == custom_peptide
        assert restored.graph.bridges == custom_peptide.graph.bridges
        with pytest.raises(AttributeError):
            restored.sequence = "AG"
