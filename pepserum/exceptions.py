"""Errors raised while validating peptide input.

Every error derives from :class:`PeptideInputError`, itself a ``ValueError``,
so callers that only care about "bad input" can catch one type. All of them
are raised before any graph is built; nothing is ever partially constructed.
"""


class PeptideInputError(ValueError):
    """Base class for rejected peptide definitions."""


class MalformedSequenceError(PeptideInputError):
    """Empty sequence, or residue codes outside the configured alphabet."""


class InvalidConnectionCountError(PeptideInputError):
    """Wrong number of connection indices for the selected bond type."""


class IndexOutOfRangeError(PeptideInputError):
    """A connection index falls outside ``[0, len(sequence))``."""


class DuplicateConnectionError(PeptideInputError):
    """The same backbone position appears twice in one connection set."""


class UnknownBondTypeError(PeptideInputError):
    """Unrecognized bond-type token."""


class InvalidCustomWeightError(PeptideInputError):
    """CUSTOM bond requested without a positive bridging-moiety weight."""


class InputFileError(PeptideInputError):
    """A record in a batch input file could not be parsed.

    Attributes
    ----------
    line_number : int
        1-based line number of the offending line
    """

    def __init__(self, message: str, line_number: int):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
