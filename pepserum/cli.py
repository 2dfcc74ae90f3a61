"""Command-line entry point.

Usage
-----
    pepserum input serum_run.txt results.csv 1.0 --workers 4
    pepserum interactive
    pepserum graph YEQDPWGVKK disulfide 2 8
    pepserum --mass-type monoisotopic graph AGCA amide 0 3
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .analyzer import FragmentAnalyzer
from .batch.input_parser import parse_bond_token
from .batch.runner import run_batch
from .exceptions import PeptideInputError
from .graph.builder import format_graph
from .interactive import INTRO, InteractiveSession, prompt_peptide
from .mass_table import MassTable
from .peptide import Peptide

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pepserum",
        description="Predict which fragments of a (cyclized) peptide explain observed masses",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--mass-type", choices=["average", "monoisotopic"], default="average",
                        help="Built-in mass table (default: average)")
    parser.add_argument("--mass-table", type=str, default=None,
                        help="JSON file overriding masses of the built-in table")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    batch = subparsers.add_parser("input", help="Analyze a batch input file into a CSV report")
    batch.add_argument("input", help="Input file: 'SEQUENCE TYPE [INDEX ...]' lines, each followed by a masses line")
    batch.add_argument("output", help="CSV report to write")
    batch.add_argument("threshold", type=float, help="Absolute mass tolerance (Da)")
    batch.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")

    subparsers.add_parser("interactive", help="Prompt for one peptide and answer compare/print requests")

    graph = subparsers.add_parser("graph", help="Print the connectivity graph of a peptide")
    graph.add_argument("sequence", help="Peptide sequence")
    graph.add_argument("bond_type", help="linear, disulfide, amide, dfbp, custom or custom=<weight>")
    graph.add_argument("connections", type=int, nargs="*", help="Zero-based connection indices")
    graph.add_argument("--custom-weight", type=float, default=None,
                       help="Bridging-moiety weight for custom bonds")

    return parser


def load_mass_table(args: argparse.Namespace) -> MassTable:
    if args.mass_table:
        return MassTable.from_json(args.mass_table, base=args.mass_type)
    return MassTable.for_mass_type(args.mass_type)


def run_input(args: argparse.Namespace, mass_table: MassTable) -> int:
    run_batch(args.input, args.output, args.threshold, mass_table, n_workers=args.workers)
    return 0


def run_interactive(args: argparse.Namespace, mass_table: MassTable) -> int:
    print(INTRO)
    try:
        peptide = prompt_peptide(alphabet=mass_table.alphabet)
    except EOFError:
        print("Goodbye!")
        return 0
    InteractiveSession(FragmentAnalyzer(peptide, mass_table)).run()
    return 0


def run_graph(args: argparse.Namespace, mass_table: MassTable) -> int:
    bond_type, custom_weight = parse_bond_token(args.bond_type)
    if args.custom_weight is not None:
        custom_weight = args.custom_weight

    sequence = args.sequence.upper()
    peptide = Peptide(
        sequence,
        bond_type,
        tuple(args.connections),
        custom_weight=custom_weight,
        alphabet=mass_table.alphabet,
    )
    print(format_graph(sequence, peptide.graph))
    return 0


COMMANDS = {
    "input": run_input,
    "interactive": run_interactive,
    "graph": run_graph,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        mass_table = load_mass_table(args)
        return COMMANDS[args.command](args, mass_table)
    except PeptideInputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        # Missing files, negative threshold, malformed mass table
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
