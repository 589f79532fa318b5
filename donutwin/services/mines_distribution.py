"""Mine placement and mines payout multipliers.

Positions come from successive byte slices of the round digest taken modulo
the grid size. Duplicates are skipped; when one digest runs dry the stream
continues with extension digests of the same seed triple, so every board is
reproducible from the revealed seeds.
"""

import logging
import math
from fractions import Fraction
from typing import List

from donutwin.constants import (
    EDGE_SCALE,
    MAX_EXTENSION_ROUNDS,
    MINES_DEFAULT_GRID,
    MINES_MAX_GRID,
    MINES_SLICE_CHARS,
)
from donutwin.errors import DerivationExhaustion, InvalidInput
from donutwin.models.seed import SeedPair
from donutwin.utils.house_edge import edge_to_basis_points
from donutwin.utils.outcome_hasher import digest_stream, iter_slices

logger = logging.getLogger(__name__)


def validate_board(mine_count: int, grid_size: int) -> None:
    """Reject boards that cannot be drawn.

    Grid sizes above 256 are refused because a one-byte slice could never
    reach the upper tiles.
    """
    if isinstance(grid_size, bool) or not isinstance(grid_size, int):
        raise InvalidInput("grid size must be an integer")
    if not 2 <= grid_size <= MINES_MAX_GRID:
        raise InvalidInput(f"grid size must be between 2 and {MINES_MAX_GRID}")
    if isinstance(mine_count, bool) or not isinstance(mine_count, int):
        raise InvalidInput("mine count must be an integer")
    if not 1 <= mine_count < grid_size:
        raise InvalidInput(f"mine count must be between 1 and {grid_size - 1}")


def mine_positions(
    server_seed: str,
    client_seed: str,
    nonce: int,
    mine_count: int,
    grid_size: int = MINES_DEFAULT_GRID,
    max_extensions: int = MAX_EXTENSION_ROUNDS,
) -> List[int]:
    """Derive the mine positions for a seed triple.

    Args:
        server_seed: Server seed, 64 hex chars
        client_seed: The player's client seed
        nonce: Round counter for this client seed
        mine_count: Number of mines, 1 <= mine_count < grid_size
        grid_size: Number of tiles on the board
        max_extensions: Extension digests allowed after the base digest

    Returns:
        ``mine_count`` distinct positions in [0, grid_size), ascending

    Raises:
        InvalidInput: bad seeds or board parameters
        DerivationExhaustion: every extension digest was spent
    """
    seeds = SeedPair(server_seed, client_seed, nonce)
    validate_board(mine_count, grid_size)

    positions: set[int] = set()
    for extra, digest_hex in enumerate(
        digest_stream(seeds.server_seed, seeds.client_seed, seeds.nonce, max_extensions)
    ):
        if extra:
            logger.debug("mines draw for nonce %s extended to digest #%s", nonce, extra)
        for value in iter_slices(digest_hex, MINES_SLICE_CHARS):
            positions.add(value % grid_size)
            if len(positions) == mine_count:
                return sorted(positions)

    raise DerivationExhaustion(
        f"placed {len(positions)} of {mine_count} mines after {max_extensions} extensions"
    )


def mines_payout_multiplier(
    safe_picks: int,
    mine_count: int,
    house_edge: float,
    grid_size: int = MINES_DEFAULT_GRID,
) -> float:
    """Payout multiplier after ``safe_picks`` safe tiles.

    The fair multiplier is the inverse probability of surviving every pick,
    ``prod((grid - i) / (grid - mines - i))``, scaled by ``1 - edge`` and
    floored to two decimals. Zero picks pays 1.00.
    """
    validate_board(mine_count, grid_size)
    edge_bp = edge_to_basis_points(house_edge)
    total_safe = grid_size - mine_count
    if isinstance(safe_picks, bool) or not isinstance(safe_picks, int):
        raise InvalidInput("safe picks must be an integer")
    if not 0 <= safe_picks <= total_safe:
        raise InvalidInput(f"safe picks must be between 0 and {total_safe}")
    if safe_picks == 0:
        return 1.0

    fair = Fraction(1)
    for i in range(safe_picks):
        fair *= Fraction(grid_size - i, total_safe - i)
    paid = fair * Fraction(EDGE_SCALE - edge_bp, EDGE_SCALE)
    return math.floor(paid * 100) / 100
