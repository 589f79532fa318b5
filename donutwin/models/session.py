"""Per-player session state and its in-memory store."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from donutwin.errors import InvalidInput
from donutwin.models.seed import validate_client_seed


@dataclass
class SeedRotation:
    """Audit entry for one client seed change."""
    previous_client_seed: str
    previous_nonce: int
    client_seed: str
    rotated_at: float


@dataclass
class PlayerSession:
    """Seed state owned by one player.

    ``nonce`` is the value the next round will use. It must only be read
    and advanced while holding ``lock``.
    """

    player_id: str
    client_seed: str
    balance: float
    nonce: int = 0
    created_at: float = field(default_factory=time.time)
    rotations: List[SeedRotation] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    def __post_init__(self):
        validate_client_seed(self.client_seed)

    def advance_nonce(self) -> int:
        """Return the nonce for the round being started and move past it."""
        current = self.nonce
        self.nonce += 1
        return current

    def used_client_seeds(self) -> set:
        return {self.client_seed} | {r.previous_client_seed for r in self.rotations}

    def rotate_client_seed(self, client_seed: str) -> SeedRotation:
        """Switch to a new client seed; the nonce restarts at 0.

        A seed this session has already used is refused, since its nonces
        would start over and repeat earlier rounds.
        """
        validate_client_seed(client_seed)
        if client_seed in self.used_client_seeds():
            raise InvalidInput(f"client seed {client_seed!r} was already used in this session")
        entry = SeedRotation(
            previous_client_seed=self.client_seed,
            previous_nonce=self.nonce,
            client_seed=client_seed,
            rotated_at=time.time(),
        )
        self.rotations.append(entry)
        self.client_seed = client_seed
        self.nonce = 0
        return entry

    def public(self) -> dict:
        return {
            "client_seed": self.client_seed,
            "nonce": self.nonce,
            "balance": self.balance,
            "rotations": len(self.rotations),
        }


class SessionStore:
    """In-memory player sessions keyed by token."""

    def __init__(self):
        self._sessions: Dict[str, PlayerSession] = {}
        self._lock = asyncio.Lock()

    async def add(self, session: PlayerSession) -> PlayerSession:
        async with self._lock:
            self._sessions[session.player_id] = session
        return session

    async def get(self, player_id: str) -> Optional[PlayerSession]:
        async with self._lock:
            return self._sessions.get(player_id)

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)


# Global store instance
sessions = SessionStore()
