"""Tests for the in-memory credits balance."""

import asyncio

import pytest

from donutwin.errors import InsufficientFunds, InvalidInput


def run(coro):
    return asyncio.run(coro)


class TestCredits:
    """Test bet, win and reset."""

    def test_bet_win_reset(self, round_service, credits_service):
        async def scenario():
            session = await round_service.open_session()
            pid = session.player_id
            after_bet = await credits_service.bet(pid, 250)
            after_win = await credits_service.win(pid, 100.5)
            after_reset = await credits_service.reset(pid)
            return after_bet, after_win, after_reset

        assert run(scenario()) == (750, 850.5, 1000)

    @pytest.mark.parametrize("amount", [0, -5, float("nan"), float("inf")])
    def test_rejects_non_positive_amounts(self, round_service, credits_service, amount):
        async def scenario():
            session = await round_service.open_session()
            await credits_service.bet(session.player_id, amount)

        with pytest.raises(InvalidInput):
            run(scenario())

    def test_bet_over_balance(self, round_service, credits_service):
        async def scenario():
            session = await round_service.open_session()
            with pytest.raises(InsufficientFunds):
                await credits_service.bet(session.player_id, 1000.01)
            return await credits_service.balance(session.player_id)

        assert run(scenario()) == 1000
