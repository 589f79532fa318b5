"""Round records and their in-memory store."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from donutwin.constants import ROUND_HISTORY_LIMIT, GameKind, RoundStatus
from donutwin.models.seed import SeedPair


@dataclass(frozen=True)
class CrashParams:
    house_edge: float
    base: int
    max_point: int


@dataclass(frozen=True)
class MinesParams:
    mine_count: int
    grid_size: int
    house_edge: float


@dataclass(frozen=True)
class CrashOutcome:
    multiplier: float
    point_scaled: int

    def to_dict(self) -> dict:
        return {"multiplier": self.multiplier, "point_scaled": self.point_scaled}


@dataclass(frozen=True)
class MinesOutcome:
    positions: List[int]

    def to_dict(self) -> dict:
        return {"positions": list(self.positions)}


RoundOutcome = Union[CrashOutcome, MinesOutcome]


@dataclass
class Round:
    """One committed round.

    The seed pair stays private until ``status`` is ``ended``.
    """

    round_id: str
    player_id: str
    game: GameKind
    seeds: SeedPair
    commitment_hash: str
    params: Union[CrashParams, MinesParams]
    outcome: RoundOutcome
    status: RoundStatus = "active"
    started_at: float = field(default_factory=time.time)
    ended_at: Optional[float] = None

    # Crash
    auto_cashout: Optional[float] = None

    # Mines
    picks: List[int] = field(default_factory=list)
    busted: bool = False

    def start_bundle(self) -> dict:
        """What the player sees before the round plays out."""
        return {
            "round_id": self.round_id,
            "game": self.game,
            "commitment_hash": self.commitment_hash,
            **self.seeds.public(),
        }

    def reveal(self) -> dict:
        return {
            "round_id": self.round_id,
            "game": self.game,
            "commitment_hash": self.commitment_hash,
            **self.seeds.reveal(),
            "outcome": self.outcome.to_dict(),
        }


class RoundStore:
    """In-memory rounds keyed by round id, indexed per player.

    Only the newest ``history_limit`` ended rounds of each player are kept;
    active rounds are never pruned.
    """

    def __init__(self, history_limit: int = ROUND_HISTORY_LIMIT):
        self.history_limit = history_limit
        self._rounds: Dict[str, Round] = {}
        self._by_player: Dict[str, List[str]] = {}
        self._lock = asyncio.Lock()

    def _prune(self, player_id: str) -> None:
        ids = self._by_player.get(player_id, [])
        ended = [rid for rid in ids if self._rounds[rid].status == "ended"]
        stale = set(ended[:max(0, len(ended) - self.history_limit)])
        if stale:
            for rid in stale:
                del self._rounds[rid]
            self._by_player[player_id] = [rid for rid in ids if rid not in stale]

    async def add(self, rnd: Round) -> Round:
        async with self._lock:
            self._rounds[rnd.round_id] = rnd
            self._by_player.setdefault(rnd.player_id, []).append(rnd.round_id)
            self._prune(rnd.player_id)
        return rnd

    async def get(self, round_id: str) -> Optional[Round]:
        async with self._lock:
            return self._rounds.get(round_id)

    async def active_for(self, player_id: str) -> Optional[Round]:
        async with self._lock:
            for rid in self._by_player.get(player_id, []):
                if self._rounds[rid].status == "active":
                    return self._rounds[rid]
        return None

    async def history(self, player_id: str) -> List[Round]:
        """Ended rounds of one player, newest first."""
        async with self._lock:
            self._prune(player_id)
            ids = self._by_player.get(player_id, [])
            ended = [self._rounds[rid] for rid in reversed(ids) if self._rounds[rid].status == "ended"]
        ended.sort(key=lambda r: r.ended_at or 0, reverse=True)
        return ended

    async def count(self) -> int:
        async with self._lock:
            return len(self._rounds)


# Global store instance
rounds = RoundStore()
