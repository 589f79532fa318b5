"""Verification of revealed rounds.

Verification is two-part: the revealed server seed must hash to the
commitment published before the round, and recomputing the outcome from the
revealed triple must reproduce what was published. The two checks are
reported separately.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Optional

from donutwin.constants import (
    CRASH_DEFAULT_BASE,
    CRASH_DEFAULT_MAX_POINT,
    GameKind,
    MINES_DEFAULT_GRID,
)
from donutwin.errors import CommitmentMismatch, InvalidInput, VerificationMismatch
from donutwin.models.seed import SeedPair
from donutwin.services.crash_distribution import Number, crash_point_scaled
from donutwin.services.mines_distribution import mine_positions
from donutwin.utils.commit_reveal import commit, commitment_matches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationReport:
    """Structured result of verifying one round.

    ``commitment_ok`` is None when no commitment was supplied.
    """

    game: GameKind
    server_seed: str
    client_seed: str
    nonce: int
    expected: Any
    claimed: Any
    outcome_ok: bool
    recomputed_commitment: str
    commitment_hash: Optional[str] = None
    commitment_ok: Optional[bool] = None

    @property
    def ok(self) -> bool:
        return self.outcome_ok and self.commitment_ok is not False

    def raise_for_status(self) -> None:
        """Raise the matching error if either check failed (commitment first)."""
        if self.commitment_ok is False:
            raise CommitmentMismatch(self.commitment_hash, self.recomputed_commitment)
        if not self.outcome_ok:
            raise VerificationMismatch(self.game, self.expected, self.claimed)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["ok"] = self.ok
        return data


def _commitment_status(server_seed: str, commitment_hash: Optional[str]) -> tuple[str, Optional[bool]]:
    recomputed = commit(server_seed)
    if commitment_hash is None:
        return recomputed, None
    matched = commitment_matches(server_seed, commitment_hash)
    if not matched:
        logger.warning("commitment mismatch: expected %s, got %s", commitment_hash, recomputed)
    return recomputed, matched


def audit_crash(
    server_seed: str,
    client_seed: str,
    nonce: int,
    published_point: float,
    epsilon: float = 0.0,
    commitment_hash: Optional[str] = None,
    house_edge: float = 0.0,
    base: int = CRASH_DEFAULT_BASE,
    max_point: Number = CRASH_DEFAULT_MAX_POINT,
) -> VerificationReport:
    """Recompute a crash round and compare it with the published multiplier."""
    seeds = SeedPair(server_seed, client_seed, nonce)
    if epsilon < 0:
        raise InvalidInput("epsilon must be >= 0")
    scaled = crash_point_scaled(
        seeds.server_seed, seeds.client_seed, seeds.nonce, house_edge, base, max_point
    )
    expected = scaled / base
    outcome_ok = abs(expected - published_point) <= epsilon
    if not outcome_ok:
        logger.warning(
            "crash verification failed for nonce %s: recomputed %s, published %s",
            nonce, expected, published_point,
        )
    recomputed, commitment_ok = _commitment_status(seeds.server_seed, commitment_hash)
    return VerificationReport(
        game="crash",
        server_seed=seeds.server_seed,
        client_seed=seeds.client_seed,
        nonce=seeds.nonce,
        expected=expected,
        claimed=published_point,
        outcome_ok=outcome_ok,
        recomputed_commitment=recomputed,
        commitment_hash=commitment_hash,
        commitment_ok=commitment_ok,
    )


def audit_mines(
    server_seed: str,
    client_seed: str,
    nonce: int,
    mine_count: int,
    published_positions: Iterable[int],
    commitment_hash: Optional[str] = None,
    grid_size: int = MINES_DEFAULT_GRID,
) -> VerificationReport:
    """Recompute a mines board and compare it with the published positions.

    The comparison is exact set equality; a published list with duplicates
    or a different length never matches.
    """
    seeds = SeedPair(server_seed, client_seed, nonce)
    claimed = list(published_positions)
    expected = mine_positions(
        seeds.server_seed, seeds.client_seed, seeds.nonce, mine_count, grid_size
    )
    outcome_ok = len(claimed) == len(expected) and set(claimed) == set(expected)
    if not outcome_ok:
        logger.warning(
            "mines verification failed for nonce %s: recomputed %s, published %s",
            nonce, expected, claimed,
        )
    recomputed, commitment_ok = _commitment_status(seeds.server_seed, commitment_hash)
    return VerificationReport(
        game="mines",
        server_seed=seeds.server_seed,
        client_seed=seeds.client_seed,
        nonce=seeds.nonce,
        expected=expected,
        claimed=sorted(claimed),
        outcome_ok=outcome_ok,
        recomputed_commitment=recomputed,
        commitment_hash=commitment_hash,
        commitment_ok=commitment_ok,
    )


def verify_crash(
    server_seed: str,
    client_seed: str,
    nonce: int,
    published_point: float,
    epsilon: float = 0.0,
    **params: Any,
) -> bool:
    return audit_crash(server_seed, client_seed, nonce, published_point, epsilon, **params).ok


def verify_mines(
    server_seed: str,
    client_seed: str,
    nonce: int,
    mine_count: int,
    published_positions: Iterable[int],
    **params: Any,
) -> bool:
    return audit_mines(server_seed, client_seed, nonce, mine_count, published_positions, **params).ok
