"""Peptide connectivity graphs.

Backbone residues and synthetic bridge nodes share one integer node space;
cyclization bonds are also summarised as Bridge records for weighing.
"""

from .builder import (
    build_graph,
    format_graph,
    Bridge,
    PeptideGraph,
    SULFUR_NODE,
    DFBP_HUB_NODE,
    CUSTOM_HUB_NODE,
)

__all__ = [
    'build_graph',
    'format_graph',
    'Bridge',
    'PeptideGraph',
    'SULFUR_NODE',
    'DFBP_HUB_NODE',
    'CUSTOM_HUB_NODE',
]
