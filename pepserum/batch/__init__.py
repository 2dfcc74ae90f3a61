"""Batch processing: input files, parallel analysis and CSV reports."""

from .input_parser import (
    parse_bond_token,
    parse_input_file,
    parse_input_lines,
    parse_mass_line,
    parse_peptide_line,
)
from .report import REPORT_HEADER, iter_report_rows, write_report
from .runner import analyze_peptide, analyze_peptides, run_batch

__all__ = [
    "parse_bond_token",
    "parse_input_file",
    "parse_input_lines",
    "parse_mass_line",
    "parse_peptide_line",
    "REPORT_HEADER",
    "iter_report_rows",
    "write_report",
    "analyze_peptide",
    "analyze_peptides",
    "run_batch",
]
