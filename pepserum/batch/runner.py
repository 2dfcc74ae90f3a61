"""Batch analysis: input file -> match reports -> CSV.

Peptides are independent, so with ``n_workers > 1`` they are analyzed in a
``multiprocessing.Pool``. Each worker builds its own analyzer; nothing is
shared between processes except the pickled peptide and mass table.
"""

import logging
import time
import multiprocessing
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..analyzer import FragmentAnalyzer
from ..mass_table import DEFAULT_MASS_TABLE, MassTable
from ..peptide import Peptide
from ..search.matcher import MatchReport
from .input_parser import parse_input_file
from .report import write_report

logger = logging.getLogger(__name__)


def analyze_peptide(
    peptide: Peptide,
    threshold: float,
    mass_table: Optional[MassTable] = None,
) -> List[MatchReport]:
    """Match all observed masses of one peptide."""
    analyzer = FragmentAnalyzer(peptide, mass_table)
    return analyzer.match_observed_masses(threshold)


def _analyze_task(task: Tuple[Peptide, float, MassTable]) -> List[MatchReport]:
    return analyze_peptide(*task)


def analyze_peptides(
    peptides: Sequence[Peptide],
    threshold: float,
    mass_table: Optional[MassTable] = None,
    n_workers: int = 1,
) -> List[MatchReport]:
    """Match the observed masses of many peptides.

    Parameters
    ----------
    peptides : Sequence[Peptide]
        Peptides with observed masses
    threshold : float
        Absolute tolerance (Da), >= 0
    mass_table : MassTable, optional
        Masses to use (default: average masses)
    n_workers : int
        Worker processes; 1 runs in the calling process

    Returns
    -------
    reports : List[MatchReport]
        Peptide order, then observed-mass order
    """
    if not threshold >= 0:
        raise ValueError(f"Threshold must be >= 0, got {threshold}")
    if n_workers < 1:
        raise ValueError(f"n_workers must be >= 1, got {n_workers}")

    mass_table = mass_table or DEFAULT_MASS_TABLE
    tasks = [(peptide, threshold, mass_table) for peptide in peptides]

    if n_workers == 1 or len(tasks) <= 1:
        per_peptide = [_analyze_task(task) for task in tasks]
    else:
        n_workers = min(n_workers, len(tasks))
        logger.info(f"Analyzing {len(tasks):,} peptides with {n_workers} workers")
        # Numba's thread pool is not fork-safe
        with multiprocessing.get_context("spawn").Pool(n_workers) as pool:
            per_peptide = pool.map(_analyze_task, tasks)

    return [report for reports in per_peptide for report in reports]


def run_batch(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    threshold: float,
    mass_table: Optional[MassTable] = None,
    n_workers: int = 1,
) -> int:
    """Analyze a batch input file and write the CSV report.

    Parameters
    ----------
    input_path : str or Path
        Batch input file (see input_parser)
    output_path : str or Path
        CSV report path
    threshold : float
        Absolute tolerance (Da), >= 0
    mass_table : MassTable, optional
        Masses to use (default: average masses)
    n_workers : int
        Worker processes

    Returns
    -------
    n_rows : int
        Number of report rows written
    """
    start = time.time()
    mass_table = mass_table or DEFAULT_MASS_TABLE

    peptides = parse_input_file(input_path, alphabet=mass_table.alphabet)
    reports = analyze_peptides(peptides, threshold, mass_table, n_workers)
    n_rows = write_report(reports, output_path)

    logger.info(f"✓ Batch finished in {time.time() - start:.2f}s")
    return n_rows
