"""Fragment enumeration over the peptide graph.

A fragment is one contiguous backbone range, or two disjoint ranges held
together by a cyclization bond. Every contiguous range of the backbone is a
candidate (``L(L+1)/2`` of them); cyclic peptides add the bridge-joined
two-piece fragments.

Design principles:
1. Fragments are identified by their ranges, so repeated substrings at
   different positions stay distinct
2. The residue label is derived from the ranges, never the other way round
3. Deterministic order: simple fragments by (start, end), then bridged
   fragments by ranges
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Set, Tuple

from ..constants import PIECE_DELIMITER

logger = logging.getLogger(__name__)

Range = Tuple[int, int]


@dataclass(frozen=True, order=True)
class Fragment:
    """A connected piece of a peptide.

    Equality, hashing and ordering use ``ranges`` only.

    Attributes
    ----------
    ranges : Tuple[Tuple[int, int], ...]
        Inclusive, 0-based backbone ranges sorted by start
    sequence : str
        Residue label: the substring for one range, substrings joined by
        ``PIECE_DELIMITER`` for bridge-joined ranges

    Examples
    --------
    >>> frag = Fragment.from_ranges("YEQDPWGVKK", [(0, 2), (7, 9)])
    >>> str(frag)
    'YEQ#VKK'
    >>> frag.n_residues
    6
    """
    ranges: Tuple[Range, ...]
    sequence: str = field(compare=False)

    @classmethod
    def from_ranges(cls, peptide_sequence: str, ranges: Sequence[Range]) -> 'Fragment':
        """Build a fragment from backbone ranges, validating them.

        Parameters
        ----------
        peptide_sequence : str
            Full peptide sequence the ranges refer to
        ranges : Sequence[Tuple[int, int]]
            Inclusive ranges, in any order

        Returns
        -------
        Fragment
        """
        ranges = tuple(sorted((int(s), int(e)) for s, e in ranges))
        if not ranges:
            raise ValueError("A fragment needs at least one range")

        length = len(peptide_sequence)
        for start, end in ranges:
            if start > end:
                raise ValueError(f"Empty range [{start}, {end}]")
            if start < 0 or end >= length:
                raise ValueError(f"Range [{start}, {end}] is outside [0, {length})")

        for (_, prev_end), (next_start, _) in zip(ranges, ranges[1:]):
            # Touching ranges would just be one longer range
            if next_start <= prev_end + 1:
                raise ValueError(f"Ranges {ranges} overlap or touch")

        label = PIECE_DELIMITER.join(peptide_sequence[s:e + 1] for s, e in ranges)
        return cls(ranges, label)

    @property
    def pieces(self) -> List[str]:
        return self.sequence.split(PIECE_DELIMITER)

    @property
    def is_bridged(self) -> bool:
        return len(self.ranges) > 1

    @property
    def n_residues(self) -> int:
        return sum(end - start + 1 for start, end in self.ranges)

    def positions(self) -> Iterator[int]:
        for start, end in self.ranges:
            yield from range(start, end + 1)

    def contains(self, position: int) -> bool:
        return any(start <= position <= end for start, end in self.ranges)

    def __str__(self) -> str:
        return self.sequence


def _bridged_ranges(a: int, b: int, length: int) -> Iterator[Tuple[Range, Range]]:
    """All range pairs joined by a bond between positions ``a < b``.

    The first range contains ``a``, the second contains ``b``, and at least
    one residue separates them.
    """
    for start1 in range(0, a + 1):
        for end1 in range(a, b - 1):
            for start2 in range(end1 + 2, b + 1):
                for end2 in range(b, length):
                    yield (start1, end1), (start2, end2)


def enumerate_fragments(peptide) -> List[Fragment]:
    """Enumerate every fragment of a peptide.

    Parameters
    ----------
    peptide : Peptide
        Peptide with its graph already built

    Returns
    -------
    fragments : List[Fragment]
        Unique fragments, simple ones first

    Notes
    -----
    - A hub bridge with k attachments contributes each unordered attachment
      pair separately; no fragment has more than two ranges
    - Range pairs reachable through several bridges appear once
    - Adjacent range pairs are left out: their union is a simple fragment
      with the bridge implicit in its weight

    Examples
    --------
    >>> peptide = Peptide("AG")
    >>> [str(f) for f in enumerate_fragments(peptide)]
    ['A', 'AG', 'G']
    """
    sequence = peptide.sequence
    length = len(sequence)

    fragments = [
        Fragment(((start, end),), sequence[start:end + 1])
        for start in range(length)
        for end in range(start, length)
    ]
    n_simple = len(fragments)

    bridged: Set[Tuple[Range, ...]] = set()
    for bridge in peptide.graph.bridges:
        for a, b in bridge.attachment_pairs():
            bridged.update(_bridged_ranges(a, b, length))

    for ranges in sorted(bridged):
        label = PIECE_DELIMITER.join(sequence[s:e + 1] for s, e in ranges)
        fragments.append(Fragment(ranges, label))

    logger.debug(
        f"Enumerated {n_simple:,} simple and {len(bridged):,} bridged fragments for {sequence}"
    )
    return fragments
