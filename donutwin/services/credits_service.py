"""In-memory credit balance for a player session.

Server-authoritative bet / win / reset on the session record. Nothing here
is durable; a restart resets every balance.
"""

import logging
import math

from donutwin.errors import InsufficientFunds, InvalidInput
from donutwin.services.round_service import RoundService

logger = logging.getLogger(__name__)


def _validate_amount(amount: float) -> float:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidInput("amount must be a number")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidInput("amount must be positive")
    return amount


class CreditsService:
    """Balance operations, each done under the player's session lock."""

    def __init__(self, rounds: RoundService):
        self.rounds = rounds

    async def balance(self, player_id: str) -> float:
        session = await self.rounds.get_session(player_id)
        return session.balance

    async def bet(self, player_id: str, amount: float) -> float:
        _validate_amount(amount)
        session = await self.rounds.get_session(player_id)
        async with session.lock:
            if amount > session.balance:
                raise InsufficientFunds(f"bet of {amount} exceeds balance of {session.balance}")
            session.balance -= amount
            logger.info("player %s bet %s, balance %s", player_id, amount, session.balance)
            return session.balance

    async def win(self, player_id: str, amount: float) -> float:
        _validate_amount(amount)
        session = await self.rounds.get_session(player_id)
        async with session.lock:
            session.balance += amount
            logger.info("player %s credited %s, balance %s", player_id, amount, session.balance)
            return session.balance

    async def reset(self, player_id: str) -> float:
        session = await self.rounds.get_session(player_id)
        async with session.lock:
            session.balance = self.rounds.starting_balance
            return session.balance
