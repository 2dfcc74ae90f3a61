"""Matching of fragment weights against observed masses."""

from .matcher import (
    suggest_fragments,
    fragments_of_size,
    distinct_labels,
    MatchReport,
)

__all__ = [
    'suggest_fragments',
    'fragments_of_size',
    'distinct_labels',
    'MatchReport',
]
