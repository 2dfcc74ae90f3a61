"""Cyclization bond types."""

from enum import Enum

from .exceptions import UnknownBondTypeError


class BondType(Enum):
    """Cyclization chemistries understood by the graph builder."""
    LINEAR = "linear"        # No bridge, backbone only
    DISULFIDE = "disulfide"  # Cys-Cys S-S bond, two sulfur nodes
    AMIDE = "amide"          # Direct backbone-to-backbone lactam
    DFBP = "dfbp"            # Decafluorobiphenyl staple, one hub node
    CUSTOM = "custom"        # User-supplied bridging moiety, one hub node

    @property
    def is_cyclic(self) -> bool:
        return self is not BondType.LINEAR

    @property
    def has_hub(self) -> bool:
        """True for multi-armed reagents attached through one synthetic node."""
        return self in (BondType.DFBP, BondType.CUSTOM)


def parse_bond_type(token: str) -> BondType:
    """Parse a case-insensitive bond type token.

    Parameters
    ----------
    token : str
        One of ``linear``, ``disulfide``, ``amide``, ``dfbp``, ``custom``

    Returns
    -------
    BondType

    Examples
    --------
    >>> parse_bond_type("DFBP")
    <BondType.DFBP: 'dfbp'>
    """
    try:
        return BondType(token.strip().lower())
    except (ValueError, AttributeError) as e:
        valid = ", ".join(b.value for b in BondType)
        raise UnknownBondTypeError(
            f"Unknown bond type {token!r} (expected one of: {valid})"
        ) from e
