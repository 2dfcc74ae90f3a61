"""Match fragment weights against observed masses.

The tolerance is an absolute window in Daltons and is inclusive: a fragment
matches when ``abs(weight - observed_mass) <= threshold``.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, NamedTuple, Tuple

from ..fragments.enumerator import Fragment


class MatchReport(NamedTuple):
    """Fragments explaining one observed mass.

    Attributes
    ----------
    peptide_sequence : str
        Sequence of the analyzed peptide
    observed_mass : float
        Mass reading being explained
    matches : Dict[Fragment, float]
        Matching fragments and their computed weights
    """
    peptide_sequence: str
    observed_mass: float
    matches: Dict[Fragment, float]

    def rows(self) -> List[Tuple[str, float, str, float]]:
        """Report rows: (peptide, observed mass, fragment, weight)."""
        return [
            (self.peptide_sequence, self.observed_mass, fragment.sequence, weight)
            for fragment, weight in self.matches.items()
        ]


def _check_threshold(threshold: float) -> None:
    if not threshold >= 0:
        raise ValueError(f"Threshold must be >= 0, got {threshold}")


def suggest_fragments(
    weights: Mapping[Fragment, float],
    observed_mass: float,
    threshold: float,
) -> Dict[Fragment, float]:
    """Fragments whose weight lies within ``threshold`` of an observed mass.

    Parameters
    ----------
    weights : Mapping[Fragment, float]
        Fragment -> weight, from measure_weights()
    observed_mass : float
        Observed mass (Da)
    threshold : float
        Absolute tolerance (Da), >= 0, inclusive

    Returns
    -------
    Dict[Fragment, float]
        Matching entries (empty when nothing matches)

    Examples
    --------
    >>> matches = suggest_fragments(weights, observed_mass=1233.4, threshold=0.5)
    >>> for fragment, weight in matches.items():
    ...     print(fragment, weight)
    """
    _check_threshold(threshold)
    return {
        fragment: weight
        for fragment, weight in weights.items()
        if abs(weight - observed_mass) <= threshold
    }


def fragments_of_size(
    weights: Mapping[Fragment, float],
    size: int,
) -> Dict[Fragment, float]:
    """Fragments spanning exactly ``size`` residues across all their ranges."""
    return {
        fragment: weight
        for fragment, weight in weights.items()
        if fragment.n_residues == size
    }


def distinct_labels(matches: Mapping[Fragment, float]) -> List[Tuple[str, float]]:
    """(label, weight) pairs of ``matches``, each pair once, in match order.

    A substring occurring twice in the peptide gives two fragments with the
    same label and weight; they are listed once.
    """
    seen = set()
    labels = []
    for fragment, weight in matches.items():
        key = (fragment.sequence, weight)
        if key not in seen:
            seen.add(key)
            labels.append(key)
    return labels
