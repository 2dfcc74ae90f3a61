"""pepserum - fragment analysis of linear and cyclized peptides.

Predicts which fragment(s) of a peptide explain an observed mass
spectrometry reading, for serum-stability studies. The pipeline is

    sequence + bonds -> graph -> fragments -> weights -> matches

with disulfide, amide, decafluorobiphenyl (DFBP) and user-defined (CUSTOM)
cyclization chemistries. Fragment weights are computed in a parallel Numba
kernel.
"""

__version__ = "0.1.0"

from pepserum.bonds import BondType, parse_bond_type
from pepserum.mass_table import MassTable, DEFAULT_MASS_TABLE
from pepserum.peptide import Peptide
from pepserum.analyzer import FragmentAnalyzer

from pepserum import exceptions
from pepserum import graph
from pepserum import fragments
from pepserum import search
from pepserum import batch

__all__ = [
    "BondType",
    "parse_bond_type",
    "MassTable",
    "DEFAULT_MASS_TABLE",
    "Peptide",
    "FragmentAnalyzer",
    "exceptions",
    "graph",
    "fragments",
    "search",
    "batch",
]
