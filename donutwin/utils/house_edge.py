"""House edge parsing.

Edges are published as fractions (0.01 == 1%) but applied in basis points
so that generation and verification share one integer code path.
"""

from decimal import Decimal, InvalidOperation

from donutwin.constants import EDGE_SCALE
from donutwin.errors import InvalidInput


def edge_to_basis_points(house_edge: float) -> int:
    """Convert a fractional house edge to integer basis points.

    ``0.01`` -> ``100``. Edges finer than one basis point are rejected
    rather than rounded, so the published edge is exactly the applied one.
    """
    if isinstance(house_edge, bool):
        raise InvalidInput("house edge must be a number")
    try:
        scaled = Decimal(str(house_edge)) * EDGE_SCALE
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"house edge {house_edge!r} is not a number")
    if not scaled.is_finite() or scaled != scaled.to_integral_value():
        raise InvalidInput("house edge must have basis-point resolution (at most 4 decimals)")
    bp = int(scaled)
    if not 0 <= bp < EDGE_SCALE:
        raise InvalidInput("house edge must be in [0, 1)")
    return bp
