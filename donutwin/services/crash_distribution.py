"""Crash multiplier derivation.

The first 52 bits of the round digest give ``r`` in [0, 1). The multiplier
is the inverse-uniform transform ``(1 - edge) / (1 - r)`` floored to
``1 / base`` and clamped to ``[1, max_point]``. The whole transform runs in
integers so the verifier reproduces it bit for bit:

    scaled = base * 2**52 * (10000 - edge_bp) // ((2**52 - num) * 10000)

Distribution: P(multiplier >= x) = (1 - edge) / x for 1 < x <= max_point,
and the instant bust at 1.00 carries the remaining mass, which is where the
house edge lives. With edge 0 this is exactly ``floor(100 / (1 - r)) / 100``.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Union

from donutwin.constants import (
    CRASH_DEFAULT_BASE,
    CRASH_DEFAULT_MAX_POINT,
    CRASH_HEX_CHARS,
    CRASH_SPAN,
    EDGE_SCALE,
)
from donutwin.errors import InvalidInput
from donutwin.models.seed import SeedPair
from donutwin.utils.house_edge import edge_to_basis_points
from donutwin.utils.outcome_hasher import digest, take_bits

logger = logging.getLogger(__name__)

Number = Union[int, float]


def _validate_base(base: int) -> int:
    if isinstance(base, bool) or not isinstance(base, int) or base <= 0:
        raise InvalidInput("base must be a positive integer")
    return base


def max_point_scaled(max_point: Number, base: int) -> int:
    """Upper clamp in scaled units, floored to the ``1 / base`` grid."""
    if isinstance(max_point, bool):
        raise InvalidInput("max point must be a number")
    try:
        cap = (Decimal(str(max_point)) * base).to_integral_value(rounding=ROUND_FLOOR)
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"max point {max_point!r} is not a number")
    if not cap.is_finite() or cap < base:
        raise InvalidInput("max point must be >= 1")
    return int(cap)


def crash_point_scaled_from_digest(
    digest_hex: str,
    house_edge: float,
    base: int = CRASH_DEFAULT_BASE,
    max_point: Number = CRASH_DEFAULT_MAX_POINT,
) -> int:
    """Crash point in units of ``1 / base`` (e.g. 323 == 3.23x for base 100)."""
    edge_bp = edge_to_basis_points(house_edge)
    _validate_base(base)
    cap = max_point_scaled(max_point, base)

    num = take_bits(digest_hex, 0, CRASH_HEX_CHARS)
    raw = base * CRASH_SPAN * (EDGE_SCALE - edge_bp) // ((CRASH_SPAN - num) * EDGE_SCALE)
    return max(base, min(raw, cap))


def crash_point_scaled(
    server_seed: str,
    client_seed: str,
    nonce: int,
    house_edge: float,
    base: int = CRASH_DEFAULT_BASE,
    max_point: Number = CRASH_DEFAULT_MAX_POINT,
) -> int:
    seeds = SeedPair(server_seed, client_seed, nonce)
    # Parameter checks happen before the hash is taken
    edge_to_basis_points(house_edge)
    max_point_scaled(max_point, _validate_base(base))
    return crash_point_scaled_from_digest(
        digest(seeds.server_seed, seeds.client_seed, seeds.nonce),
        house_edge, base, max_point,
    )


def crash_point(
    server_seed: str,
    client_seed: str,
    nonce: int,
    house_edge: float,
    base: int = CRASH_DEFAULT_BASE,
    max_point: Number = CRASH_DEFAULT_MAX_POINT,
) -> float:
    """Derive the crash multiplier for a seed triple.

    Args:
        server_seed: Revealed (or still secret) server seed, 64 hex chars
        client_seed: The player's client seed
        nonce: Round counter for this client seed
        house_edge: Fraction in [0, 1), basis-point resolution
        base: Decimal granularity, 100 means two decimal places
        max_point: Liability ceiling for the multiplier

    Returns:
        Multiplier in [1.0, max_point]
    """
    scaled = crash_point_scaled(server_seed, client_seed, nonce, house_edge, base, max_point)
    logger.debug("crash point derived for nonce %s: %s/%s", nonce, scaled, base)
    return scaled / base


def bust_probability(house_edge: float, base: int = CRASH_DEFAULT_BASE) -> float:
    """Probability that a round ends at exactly 1.00x.

    A round busts instantly when ``(1 - edge) / (1 - r) < (base + 1) / base``,
    i.e. ``r < 1 - (1 - edge) * base / (base + 1)``.
    """
    edge_bp = edge_to_basis_points(house_edge)
    _validate_base(base)
    rtp = (EDGE_SCALE - edge_bp) / EDGE_SCALE
    return max(0.0, 1 - rtp * base / (base + 1))
