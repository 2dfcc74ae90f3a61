"""Batch input file parsing.

The input file holds two lines per peptide:

    YEQDPWGVKK disulfide 2 8
    1233.3 1034.1 518.6

Line 1 is ``SEQUENCE TYPE [INDEX ...]`` with zero-based connection indices.
``TYPE`` is one of ``linear``, ``disulfide``, ``amide``, ``dfbp`` or
``custom=<weight>``; the CUSTOM weight is mandatory. Line 2 lists the
observed masses and may be blank (or missing for the last peptide). Lines
starting with ``#`` are comments and do not count towards the pairing.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..bonds import BondType, parse_bond_type
from ..exceptions import InputFileError, InvalidCustomWeightError, PeptideInputError
from ..peptide import Peptide

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def parse_bond_token(token: str) -> Tuple[BondType, Optional[float]]:
    """Parse the bond type column, including ``custom=<weight>``.

    Examples
    --------
    >>> parse_bond_token("DFBP")
    (<BondType.DFBP: 'dfbp'>, None)
    >>> parse_bond_token("custom=254.3")
    (<BondType.CUSTOM: 'custom'>, 254.3)
    """
    name, sep, weight = token.partition("=")
    bond_type = parse_bond_type(name)

    if bond_type is not BondType.CUSTOM:
        if sep:
            raise PeptideInputError(f"Only custom bonds take a weight, got {token!r}")
        return bond_type, None

    if not sep or not weight.strip():
        raise InvalidCustomWeightError(
            "CUSTOM bonds need a bridging-moiety weight, written custom=<weight>"
        )
    try:
        return bond_type, float(weight)
    except ValueError as e:
        raise InvalidCustomWeightError(f"Invalid CUSTOM weight {weight!r}") from e


def parse_peptide_line(line: str, alphabet: Optional[Iterable[str]] = None) -> Peptide:
    """Parse ``SEQUENCE TYPE [INDEX ...]`` into a Peptide (without masses)."""
    tokens = line.split()
    if len(tokens) < 2:
        raise PeptideInputError("Expected 'SEQUENCE TYPE [INDEX ...]'")

    sequence = tokens[0].upper()
    bond_type, custom_weight = parse_bond_token(tokens[1])

    try:
        connections = [int(token) for token in tokens[2:]]
    except ValueError as e:
        raise PeptideInputError(f"Connection indices must be integers: {' '.join(tokens[2:])}") from e

    return Peptide(
        sequence,
        bond_type,
        tuple(connections),
        custom_weight=custom_weight,
        alphabet=frozenset(alphabet) if alphabet is not None else None,
    )


def parse_mass_line(line: str) -> List[float]:
    """Parse whitespace separated observed masses (blank -> [])."""
    try:
        return [float(token) for token in line.split()]
    except ValueError as e:
        raise PeptideInputError(f"Observed masses must be numbers: {line.strip()}") from e


def parse_input_lines(
    lines: Iterable[str],
    alphabet: Optional[Iterable[str]] = None,
) -> List[Peptide]:
    """Parse input lines into peptides with their observed masses.

    Parameters
    ----------
    lines : Iterable[str]
        Lines of the input file
    alphabet : Iterable[str], optional
        Accepted residue codes (default: residues of the default mass table)

    Returns
    -------
    peptides : List[Peptide]
        In file order

    Raises
    ------
    InputFileError
        With the 1-based line number; the underlying error is chained
    """
    records = [
        (line_number, line.rstrip("\r\n"))
        for line_number, line in enumerate(lines, 1)
        if not line.lstrip().startswith(COMMENT_PREFIX)
    ]

    peptides = []
    for k, (line_number, line) in enumerate(records):
        try:
            if k % 2 == 0:
                peptides.append(parse_peptide_line(line, alphabet))
            else:
                peptides[-1].add_observed_masses(parse_mass_line(line))
        except PeptideInputError as e:
            raise InputFileError(str(e), line_number) from e

    return peptides


def parse_input_file(
    input_path: Union[str, Path],
    alphabet: Optional[Iterable[str]] = None,
) -> List[Peptide]:
    """Read a batch input file.

    Parameters
    ----------
    input_path : str or Path
        Path to the input file
    alphabet : Iterable[str], optional
        Accepted residue codes

    Returns
    -------
    peptides : List[Peptide]

    Examples
    --------
    >>> peptides = parse_input_file("serum_run.txt")
    >>> peptides[0].observed_masses
    [1233.3, 1034.1, 518.6]
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    logger.info(f"Reading input file: {input_path.name}")

    with open(input_path) as f:
        peptides = parse_input_lines(f, alphabet)

    n_masses = sum(len(p.observed_masses) for p in peptides)
    logger.info(f"✓ Read {len(peptides):,} peptides ({n_masses:,} observed masses) from {input_path.name}")

    return peptides
