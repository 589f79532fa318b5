"""Round lifecycle service for DonutWin.

This module drives a round from commitment to reveal:
- Opening player sessions and rotating client seeds
- Committing a server seed and deriving the outcome at round start
- Mines tile picks and crash auto-cashout settlement
- Revealing the server seed once the round has ended

Every nonce read-and-advance happens under the player's session lock, so
two rounds can never share a seed triple.
"""

import logging
import secrets
import time
from typing import Optional

from donutwin.config import settings
from donutwin.errors import InvalidInput, RoundNotFound, RoundStateError, UnknownPlayer
from donutwin.models.round import (
    CrashOutcome,
    CrashParams,
    MinesOutcome,
    MinesParams,
    Round,
    RoundStore,
    rounds as default_rounds,
)
from donutwin.models.session import PlayerSession, SessionStore, sessions as default_sessions
from donutwin.services.crash_distribution import crash_point_scaled, max_point_scaled
from donutwin.services.mines_distribution import (
    mine_positions,
    mines_payout_multiplier,
    validate_board,
)
from donutwin.utils.commit_reveal import new_client_seed, new_seed_pair
from donutwin.utils.house_edge import edge_to_basis_points

logger = logging.getLogger(__name__)


class RoundService:
    """Owns the session and round stores and every state transition on them."""

    def __init__(self, sessions: SessionStore, rounds: RoundStore, starting_balance: float = 1000):
        self.sessions = sessions
        self.rounds = rounds
        self.starting_balance = starting_balance

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    async def open_session(self, client_seed: Optional[str] = None) -> PlayerSession:
        """Create a player session, with a random client seed unless one is given."""
        session = PlayerSession(
            player_id=secrets.token_hex(8),
            client_seed=client_seed or new_client_seed(),
            balance=self.starting_balance,
        )
        await self.sessions.add(session)
        logger.info("session %s opened", session.player_id)
        return session

    async def get_session(self, player_id: str) -> PlayerSession:
        session = await self.sessions.get(player_id)
        if session is None:
            raise UnknownPlayer(f"no session for token {player_id!r}")
        return session

    async def rotate_client_seed(self, player_id: str, client_seed: Optional[str] = None) -> dict:
        """Switch the player's client seed and reset the nonce to 0.

        Refused while the player still has an active round, since that
        round's triple must stay bound to the old seed, and refused for a
        seed this session has used before.
        """
        session = await self.get_session(player_id)
        async with session.lock:
            active = await self.rounds.active_for(player_id)
            if active is not None:
                raise RoundStateError("end the active round before rotating the client seed",
                                      active.round_id)
            entry = session.rotate_client_seed(client_seed or new_client_seed())
        logger.info("session %s rotated client seed after nonce %s", player_id, entry.previous_nonce)
        return {
            "previous_client_seed": entry.previous_client_seed,
            "previous_nonce": entry.previous_nonce,
            "client_seed": session.client_seed,
            "nonce": session.nonce,
        }

    # ------------------------------------------------------------------
    # Round start
    # ------------------------------------------------------------------
    async def start_crash_round(
        self,
        player_id: str,
        house_edge: float,
        base: int,
        max_point: int,
        auto_cashout: Optional[float] = None,
    ) -> Round:
        edge_to_basis_points(house_edge)
        max_point_scaled(max_point, base)
        if auto_cashout is not None and not 1 < auto_cashout <= max_point:
            raise InvalidInput(f"auto cashout must be in (1, {max_point}]")
        params = CrashParams(house_edge=house_edge, base=base, max_point=max_point)

        session = await self.get_session(player_id)
        async with session.lock:
            seeds, commitment_hash = new_seed_pair(session.client_seed, session.nonce)
            scaled = crash_point_scaled(
                seeds.server_seed, seeds.client_seed, seeds.nonce, house_edge, base, max_point
            )
            session.advance_nonce()
            rnd = Round(
                round_id=secrets.token_hex(10),
                player_id=player_id,
                game="crash",
                seeds=seeds,
                commitment_hash=commitment_hash,
                params=params,
                outcome=CrashOutcome(multiplier=scaled / base, point_scaled=scaled),
                auto_cashout=auto_cashout,
            )
            await self.rounds.add(rnd)
        logger.info("crash round %s started (player %s, nonce %s)", rnd.round_id, player_id, seeds.nonce)
        return rnd

    async def start_mines_round(
        self,
        player_id: str,
        mine_count: int,
        grid_size: int,
        house_edge: float,
    ) -> Round:
        validate_board(mine_count, grid_size)
        edge_to_basis_points(house_edge)
        params = MinesParams(mine_count=mine_count, grid_size=grid_size, house_edge=house_edge)

        session = await self.get_session(player_id)
        async with session.lock:
            seeds, commitment_hash = new_seed_pair(session.client_seed, session.nonce)
            positions = mine_positions(
                seeds.server_seed, seeds.client_seed, seeds.nonce, mine_count, grid_size
            )
            session.advance_nonce()
            rnd = Round(
                round_id=secrets.token_hex(10),
                player_id=player_id,
                game="mines",
                seeds=seeds,
                commitment_hash=commitment_hash,
                params=params,
                outcome=MinesOutcome(positions=positions),
            )
            await self.rounds.add(rnd)
        logger.info("mines round %s started (player %s, nonce %s)", rnd.round_id, player_id, seeds.nonce)
        return rnd

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------
    async def _owned_round(self, player_id: str, round_id: str) -> Round:
        rnd = await self.rounds.get(round_id)
        # Another player's round is reported as missing
        if rnd is None or rnd.player_id != player_id:
            raise RoundNotFound(f"round {round_id!r} not found")
        return rnd

    async def pick_tile(self, player_id: str, round_id: str, tile: int) -> dict:
        """Reveal one tile of an active mines round.

        Hitting a mine ends the round; so does uncovering the last safe tile.
        """
        session = await self.get_session(player_id)
        async with session.lock:
            rnd = await self._owned_round(player_id, round_id)
            if rnd.game != "mines":
                raise RoundStateError("tiles can only be picked in a mines round", round_id)
            if rnd.status != "active":
                raise RoundStateError("round has already ended", round_id)
            params = rnd.params
            if not 0 <= tile < params.grid_size:
                raise InvalidInput(f"tile must be between 0 and {params.grid_size - 1}")
            if tile in rnd.picks:
                raise InvalidInput(f"tile {tile} was already picked")

            rnd.picks.append(tile)
            hit = tile in rnd.outcome.positions
            safe_picks = len(rnd.picks) - (1 if hit else 0)
            if hit:
                rnd.busted = True
                self._finish(rnd)
            elif safe_picks == params.grid_size - params.mine_count:
                self._finish(rnd)

            result = {
                "round_id": round_id,
                "tile": tile,
                "mine": hit,
                "safe_picks": safe_picks,
                "multiplier": 0.0 if hit else mines_payout_multiplier(
                    safe_picks, params.mine_count, params.house_edge, params.grid_size
                ),
                "ended": rnd.status == "ended",
            }
            if rnd.status == "ended":
                result["reveal"] = self._settle(rnd)
        return result

    # ------------------------------------------------------------------
    # Round end
    # ------------------------------------------------------------------
    def _finish(self, rnd: Round) -> None:
        rnd.status = "ended"
        rnd.ended_at = time.time()
        logger.info("%s round %s ended", rnd.game, rnd.round_id)

    def _settle(self, rnd: Round) -> dict:
        """Reveal bundle plus how the round paid out."""
        bundle = rnd.reveal()
        if rnd.game == "crash":
            won = rnd.auto_cashout is not None and rnd.auto_cashout <= rnd.outcome.multiplier
            bundle["auto_cashout"] = rnd.auto_cashout
            bundle["won"] = won
            bundle["payout_multiplier"] = rnd.auto_cashout if won else 0.0
        else:
            params = rnd.params
            safe_picks = len(rnd.picks) - (1 if rnd.busted else 0)
            bundle["picks"] = list(rnd.picks)
            bundle["won"] = not rnd.busted and safe_picks > 0
            bundle["payout_multiplier"] = 0.0 if not bundle["won"] else mines_payout_multiplier(
                safe_picks, params.mine_count, params.house_edge, params.grid_size
            )
        return bundle

    async def end_round(self, player_id: str, round_id: str) -> dict:
        """End a round (cash out) and reveal its server seed.

        A mines round cannot be cashed out before its first pick. Ending an
        already ended round returns the same reveal again.
        """
        session = await self.get_session(player_id)
        async with session.lock:
            rnd = await self._owned_round(player_id, round_id)
            if rnd.status == "active":
                if rnd.game == "mines" and not rnd.picks:
                    raise RoundStateError("pick at least one tile before cashing out", round_id)
                self._finish(rnd)
            return self._settle(rnd)

    async def history(self, player_id: str) -> list:
        """Settled reveal bundles of the player's latest ended rounds, newest first."""
        await self.get_session(player_id)
        return [self._settle(rnd) for rnd in await self.rounds.history(player_id)]


# Global service instance
service = RoundService(default_sessions, default_rounds, settings.starting_balance)
