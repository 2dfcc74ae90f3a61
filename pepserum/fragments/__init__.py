"""Fragment enumeration and weighing.

Every contiguous backbone range is a fragment; cyclic peptides add
bridge-joined two-piece fragments. Weights are computed in a parallel
Numba kernel with bond-specific corrections for intact bridges.
"""

from .enumerator import (
    Fragment,
    enumerate_fragments,
)

from .weights import (
    measure_weights,
    compute_fragment_weights,
    bridge_correction_terms,
    pack_fragments,
    pack_bridges,
)

__all__ = [
    # Enumeration
    'Fragment',
    'enumerate_fragments',
    # Weighing
    'measure_weights',
    'compute_fragment_weights',
    'bridge_correction_terms',
    'pack_fragments',
    'pack_bridges',
]
