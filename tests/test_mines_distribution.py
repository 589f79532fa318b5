"""Unit tests for mine placement and mines payouts."""

import pytest

from donutwin.errors import DerivationExhaustion, InvalidInput
from donutwin.services.mines_distribution import mine_positions, mines_payout_multiplier
from donutwin.utils.commit_reveal import new_client_seed, new_server_seed
from tests.vectors import CLIENT_SEED, ZERO_SEED


class TestGoldenBoards:
    """Boards every conforming implementation must reproduce."""

    def test_five_mines(self):
        assert mine_positions(ZERO_SEED, CLIENT_SEED, 1, 5) == [0, 1, 5, 6, 22]

    def test_five_mines_other_triples(self):
        assert mine_positions(ZERO_SEED, CLIENT_SEED, 2, 5) == [6, 10, 14, 18, 21]
        assert mine_positions(ZERO_SEED, "abc124", 1, 5) == [5, 7, 8, 15, 19]

    def test_small_grid(self):
        assert mine_positions(ZERO_SEED, CLIENT_SEED, 1, 3, grid_size=9) == [0, 5, 6]

    def test_thousand_reruns_are_identical(self):
        boards = {tuple(mine_positions(ZERO_SEED, CLIENT_SEED, 1, 5, 25)) for _ in range(1000)}
        assert boards == {(0, 1, 5, 6, 22)}


class TestExtension:
    """Test deterministic digest extension."""

    def test_degenerate_board_uses_extension_digests(self):
        board = mine_positions(ZERO_SEED, CLIENT_SEED, 1, 24)
        assert board == [p for p in range(25) if p != 12]

    def test_extension_budget_is_enforced(self):
        with pytest.raises(DerivationExhaustion):
            mine_positions(ZERO_SEED, CLIENT_SEED, 1, 24, max_extensions=1)

    def test_extended_board_is_reproducible(self):
        seed, client = new_server_seed(), new_client_seed()
        assert mine_positions(seed, client, 3, 24) == mine_positions(seed, client, 3, 24)


class TestRange:
    """Test board invariants."""

    @pytest.mark.parametrize("mine_count", [1, 3, 10, 24])
    def test_board_shape(self, mine_count):
        client = new_client_seed()
        for nonce in range(50):
            board = mine_positions(new_server_seed(), client, nonce, mine_count)
            assert len(board) == mine_count
            assert len(set(board)) == mine_count
            assert board == sorted(board)
            assert all(0 <= p < 25 for p in board)

    def test_one_safe_tile_is_valid(self):
        assert len(mine_positions(ZERO_SEED, CLIENT_SEED, 7, 24, 25)) == 24

    @pytest.mark.parametrize("mine_count", [0, 25, 26, -1])
    def test_rejects_bad_mine_count(self, mine_count):
        with pytest.raises(InvalidInput):
            mine_positions(ZERO_SEED, CLIENT_SEED, 1, mine_count)

    @pytest.mark.parametrize("grid_size", [1, 257])
    def test_rejects_bad_grid(self, grid_size):
        with pytest.raises(InvalidInput):
            mine_positions(ZERO_SEED, CLIENT_SEED, 1, 1, grid_size)


class TestPayout:
    """Test the mines payout ladder."""

    def test_no_picks_pays_even(self):
        assert mines_payout_multiplier(0, 5, 0.03) == 1.0

    def test_first_picks(self):
        # 25/20 * 0.97 = 1.2125 ; 25/20 * 24/19 * 0.97 = 1.5315...
        assert mines_payout_multiplier(1, 5, 0.03) == 1.21
        assert mines_payout_multiplier(2, 5, 0.03) == 1.53

    def test_fair_ladder_without_edge(self):
        assert mines_payout_multiplier(1, 24, 0) == 25.0

    def test_ladder_is_increasing(self):
        ladder = [mines_payout_multiplier(i, 3, 0.03) for i in range(23)]
        assert ladder == sorted(ladder)

    @pytest.mark.parametrize("picks", [-1, 21])
    def test_rejects_impossible_pick_counts(self, picks):
        with pytest.raises(InvalidInput):
            mines_payout_multiplier(picks, 5, 0.03)
