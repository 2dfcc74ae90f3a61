"""CSV report of suggested fragments."""

import csv
import logging
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from ..search.matcher import MatchReport, distinct_labels

logger = logging.getLogger(__name__)

REPORT_HEADER = ("Peptide", "Mass Spec", "Suggested Fragment", "Calculated Weight")


def iter_report_rows(reports: Iterable[MatchReport]) -> Iterator[Tuple[str, float, str, float]]:
    """Rows of all reports, in order.

    Rows repeating the same fragment label and weight for the same observed
    mass (a substring occurring twice in the peptide) are yielded once.
    """
    for report in reports:
        for label, weight in distinct_labels(report.matches):
            yield report.peptide_sequence, report.observed_mass, label, weight


def write_report(reports: Iterable[MatchReport], output_path: Union[str, Path]) -> int:
    """Write match reports to a CSV file.

    Parameters
    ----------
    reports : Iterable[MatchReport]
        One report per (peptide, observed mass)
    output_path : str or Path
        Destination CSV file (overwritten)

    Returns
    -------
    n_rows : int
        Number of data rows written (header excluded)

    Examples
    --------
    >>> write_report(analyzer.match_observed_masses(threshold=1.0), "results.csv")
    """
    output_path = Path(output_path)

    n_rows = 0
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(REPORT_HEADER)
        for row in iter_report_rows(reports):
            writer.writerow(row)
            n_rows += 1

    logger.info(f"✓ Wrote {n_rows:,} suggested fragments to {output_path.name}")
    return n_rows
