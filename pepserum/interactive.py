"""Interactive request/response session over text streams.

The session reads one answer per line. ``prompt_peptide`` collects a peptide
(sequence, bond type, custom weight, connections) and
``InteractiveSession.run`` then answers menu commands against its analyzer:

    | (C)ompare | (P)rint | (Q)uit |

Commands are selected by their first letter, case-insensitive. End of input
ends the session.
"""

import logging
import math
import sys
from typing import Iterable, List, Optional, TextIO

from .analyzer import FragmentAnalyzer
from .bonds import BondType, parse_bond_type
from .exceptions import PeptideInputError
from .peptide import Peptide
from .search.matcher import distinct_labels

logger = logging.getLogger(__name__)

INTRO = """-------------------------
Peptide Serum Stability
-------------------------

This program will generate all possible fragments of the given input peptide
sequence and will calculate their corresponding theoretical molecular weights.
"""

MENU = "What do you want to do?\n| (C)ompare | (P)rint | (Q)uit |"


class Console:
    """Line-based prompts on a pair of text streams."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def say(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def ask(self, prompt: str) -> str:
        """Print a prompt and read one line; EOFError at end of input."""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.strip()

    def ask_float(self, prompt: str) -> float:
        while True:
            answer = self.ask(prompt)
            try:
                return float(answer)
            except ValueError:
                self.say(f"Please enter a number, got {answer!r}")

    def ask_int(self, prompt: str) -> int:
        while True:
            answer = self.ask(prompt)
            try:
                return int(answer)
            except ValueError:
                self.say(f"Please enter a whole number, got {answer!r}")

    def ask_yes(self, prompt: str) -> bool:
        return self.ask(prompt).upper().startswith("Y")


def parse_connections(text: str) -> List[int]:
    """Parse comma separated indices, e.g. ``"2, 8"`` -> ``[2, 8]``."""
    try:
        return [int(token) for token in text.split(",") if token.strip()]
    except ValueError as e:
        raise PeptideInputError(f"Connections must be comma separated integers: {text!r}") from e


def prompt_peptide(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    alphabet: Optional[Iterable[str]] = None,
) -> Peptide:
    """Ask for a peptide until a valid one is entered.

    Parameters
    ----------
    stdin, stdout : TextIO, optional
        Streams to talk on (default: sys.stdin / sys.stdout)
    alphabet : Iterable[str], optional
        Accepted residue codes

    Returns
    -------
    Peptide
        Connections sorted ascending

    Raises
    ------
    EOFError
        Input ended before a valid peptide was entered
    """
    console = Console(stdin, stdout)
    alphabet = frozenset(alphabet) if alphabet is not None else None

    while True:
        console.say("Please enter the peptide sequence. If peptide is not linear, do not include the linkers")
        sequence = console.ask("Peptide sequence: ").upper()
        console.say()
        try:
            Peptide(sequence, alphabet=alphabet)
            break
        except PeptideInputError as e:
            console.say(str(e))

    while True:
        console.say("Please enter the peptide type (linear, amide, DFBP, disulfide, custom)")
        try:
            bond_type = parse_bond_type(console.ask("Peptide Type: "))
            break
        except PeptideInputError:
            console.say("Please input a valid peptide type (linear, amide, DFBP, disulfide, custom)")

    custom_weight = None
    if bond_type is BondType.CUSTOM:
        console.say("What is the molecular weight of the CUSTOM cyclization moiety?")
        custom_weight = console.ask_float("Molecular Weight: ")
        while not (math.isfinite(custom_weight) and custom_weight > 0):
            console.say("The molecular weight must be a positive finite number")
            custom_weight = console.ask_float("Molecular Weight: ")
    console.say()

    if bond_type is BondType.LINEAR:
        return Peptide(sequence, bond_type, custom_weight=custom_weight, alphabet=alphabet)

    while True:
        console.say("Please enter the indices where the cyclic connections are. Separate the indices with commas.")
        answer = console.ask("Connections: ")
        console.say()
        try:
            connections = sorted(parse_connections(answer))
            return Peptide(
                sequence,
                bond_type,
                tuple(connections),
                custom_weight=custom_weight,
                alphabet=alphabet,
            )
        except PeptideInputError as e:
            console.say(f"{e}. Please try again.")


class InteractiveSession:
    """Menu loop answering compare/print requests for one peptide.

    Parameters
    ----------
    analyzer : FragmentAnalyzer
        Analyzer of the peptide under study
    stdin, stdout : TextIO, optional
        Streams to talk on (default: sys.stdin / sys.stdout)

    Examples
    --------
    >>> session = InteractiveSession(FragmentAnalyzer(peptide))
    >>> session.run()
    """

    def __init__(
        self,
        analyzer: FragmentAnalyzer,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.analyzer = analyzer
        self.console = Console(stdin, stdout)

    def run(self) -> None:
        """Answer menu commands until Q or end of input."""
        try:
            while True:
                self.console.say(MENU)
                command = self.console.ask("Enter: ").upper()
                self.console.say()

                if command.startswith("Q"):
                    break
                elif command.startswith("C"):
                    self.compare()
                elif command.startswith("P"):
                    self.print_fragments()
                else:
                    self.console.say(f"Unknown command {command!r}")
        except EOFError:
            logger.debug("End of input, leaving interactive session")

        self.console.say("Goodbye!")

    def compare(self) -> None:
        """Suggest fragments for observed masses until the user stops."""
        while True:
            observed_mass = self.console.ask_float("Enter data from mass spectrometry: ")
            threshold = self.console.ask_float("Enter threshold to compare theoretical molecular weights: ")
            self.console.say()

            try:
                matches = self.analyzer.suggest_fragments(observed_mass, threshold)
            except ValueError as e:
                self.console.say(str(e))
                continue

            if not matches:
                self.console.say("No fragment within threshold.")
                self.console.say()
            for label, weight in distinct_labels(matches):
                self.console.say(f"Suggested fragment: {label}")
                self.console.say(f"Calculated weight: {weight}")
                self.console.say()

            if not self.console.ask_yes("More data? (Y/N) "):
                self.console.say()
                return
            self.console.say()

    def print_fragments(self) -> None:
        """Print fragments of a chosen size until the user stops."""
        while True:
            size = self.console.ask_int("What fragment size to print? ")
            for label, weight in distinct_labels(self.analyzer.fragments_of_size(size)):
                self.console.say(f"{label}\t{weight}")
            self.console.say()

            if not self.console.ask_yes("Print more? (Y/N) "):
                self.console.say()
                return
            self.console.say()
