"""Unit tests for fragment matching."""

import math

import pytest

from pepserum.fragments import Fragment
from pepserum.search import MatchReport, distinct_labels, fragments_of_size, suggest_fragments


@pytest.fixture
def weights():
    """Hand-made weights on exactly representable values."""
    sequence = "AGCAG"
    return {
        Fragment.from_ranges(sequence, [(0, 0)]): 100.0,
        Fragment.from_ranges(sequence, [(0, 1)]): 101.0,
        Fragment.from_ranges(sequence, [(1, 2)]): 101.25,
        Fragment.from_ranges(sequence, [(0, 0), (2, 3)]): 250.0,
    }


class TestSuggestFragments:
    """Test matching weights against one observed mass."""

    def test_inclusive_boundary(self, weights):
        """A weight exactly threshold away still matches."""
        matches = suggest_fragments(weights, observed_mass=100.5, threshold=0.5)
        assert sorted(matches.values()) == [100.0, 101.0]

    def test_zero_threshold_exact_match(self, weights):
        """Zero threshold keeps exact matches only."""
        matches = suggest_fragments(weights, observed_mass=250.0, threshold=0.0)
        assert [str(f) for f in matches] == ["A#CA"]

    def test_no_match(self, weights):
        """Nothing in the window gives an empty result."""
        assert suggest_fragments(weights, observed_mass=500.0, threshold=1.0) == {}

    def test_negative_threshold(self, weights):
        """Negative thresholds are rejected."""
        with pytest.raises(ValueError, match="Threshold"):
            suggest_fragments(weights, observed_mass=100.0, threshold=-0.1)

    def test_nan_threshold(self, weights):
        """NaN thresholds are rejected."""
        with pytest.raises(ValueError):
            suggest_fragments(weights, observed_mass=100.0, threshold=math.nan)

    def test_input_not_mutated(self, weights):
        """The weight map is left untouched."""
        before = dict(weights)
        suggest_fragments(weights, observed_mass=100.0, threshold=0.5)
        assert weights == before


class TestFragmentsOfSize:
    """Test selecting fragments by residue count."""

    def test_counts_all_ranges(self, weights):
        """Size sums the residues of every range."""
        assert list(fragments_of_size(weights, 3).values()) == [250.0]
        assert sorted(fragments_of_size(weights, 2).values()) == [101.0, 101.25]

    def test_no_fragment_of_size(self, weights):
        """An unmatched size gives an empty result."""
        assert fragments_of_size(weights, 10) == {}


class TestDistinctLabels:
    """Test collapsing fragments that share a label and weight."""

    def test_repeated_substring_listed_once(self):
        """Two occurrences of the same substring give one pair."""
        sequence = "AGA"
        matches = {
            Fragment.from_ranges(sequence, [(0, 0)]): 100.0,
            Fragment.from_ranges(sequence, [(1, 1)]): 50.0,
            Fragment.from_ranges(sequence, [(2, 2)]): 100.0,
        }
        assert distinct_labels(matches) == [("A", 100.0), ("G", 50.0)]

    def test_same_label_different_weight_kept(self):
        """Pairs differing in weight are both kept."""
        sequence = "AGA"
        matches = {
            Fragment.from_ranges(sequence, [(0, 0)]): 100.0,
            Fragment.from_ranges(sequence, [(2, 2)]): 98.0,
        }
        assert distinct_labels(matches) == [("A", 100.0), ("A", 98.0)]

    def test_empty(self):
        """No matches give no pairs."""
        assert distinct_labels({}) == []


class TestMatchReport:
    """Test report rows of one observed mass."""

    def test_rows(self, weights):
        """One row per matching fragment, in match order."""
        matches = suggest_fragments(weights, observed_mass=100.5, threshold=0.5)
        report = MatchReport("AGCAG", 100.5, matches)

        assert report.rows() == [
            ("AGCAG", 100.5, "A", 100.0),
            ("AGCAG", 100.5, "AG", 101.0),
        ]

    def test_empty_rows(self):
        """A report without matches has no rows."""
        assert MatchReport("AG", 1.0, {}).rows() == []
