"""Unit tests for round verification.

Verification is two-part (commitment integrity, outcome derivation) and
each part must be reported on its own.
"""

import pytest

from donutwin.errors import CommitmentMismatch, InvalidInput, VerificationMismatch
from donutwin.services.crash_distribution import crash_point
from donutwin.services.mines_distribution import mine_positions
from donutwin.services.verifier import audit_crash, audit_mines, verify_crash, verify_mines
from donutwin.utils.commit_reveal import commit, new_client_seed, new_server_seed
from tests.vectors import CLIENT_SEED, ZERO_SEED, ZERO_SEED_COMMITMENT

ONE_SEED = "0" * 63 + "1"


class TestVerifyCrash:
    """Test crash verification."""

    def test_golden_round_verifies(self):
        assert verify_crash(ZERO_SEED, CLIENT_SEED, 1, 3.20, house_edge=0.01)
        assert verify_crash(ZERO_SEED, CLIENT_SEED, 1, 3.23)

    def test_wrong_point_fails(self):
        assert not verify_crash(ZERO_SEED, CLIENT_SEED, 1, 3.21, house_edge=0.01)

    def test_epsilon_absorbs_rendering(self):
        assert verify_crash(ZERO_SEED, CLIENT_SEED, 1, 3.2004, epsilon=0.001, house_edge=0.01)
        assert not verify_crash(ZERO_SEED, CLIENT_SEED, 1, 3.2004, house_edge=0.01)

    @pytest.mark.parametrize(
        "server_seed,client_seed,nonce",
        [(ONE_SEED, CLIENT_SEED, 1), (ZERO_SEED, "abc124", 1), (ZERO_SEED, CLIENT_SEED, 2)],
    )
    def test_mutating_any_field_fails(self, server_seed, client_seed, nonce):
        assert not verify_crash(server_seed, client_seed, nonce, 3.23)

    def test_random_rounds_round_trip(self):
        client = new_client_seed()
        for nonce in range(50):
            seed = new_server_seed()
            point = crash_point(seed, client, nonce, house_edge=0.01)
            assert verify_crash(seed, client, nonce, point, house_edge=0.01, commitment_hash=commit(seed))

    def test_negative_epsilon_rejected(self):
        with pytest.raises(InvalidInput):
            audit_crash(ZERO_SEED, CLIENT_SEED, 1, 3.23, epsilon=-1)


class TestVerifyMines:
    """Test mines verification."""

    def test_golden_board_verifies(self):
        assert verify_mines(ZERO_SEED, CLIENT_SEED, 1, 5, [0, 1, 5, 6, 22])

    def test_order_does_not_matter(self):
        assert verify_mines(ZERO_SEED, CLIENT_SEED, 1, 5, [22, 6, 5, 1, 0])

    @pytest.mark.parametrize(
        "claimed",
        [[0, 1, 5, 6], [0, 1, 5, 6, 21], [0, 1, 5, 6, 22, 23], [0, 0, 1, 5, 6, 22]],
    )
    def test_any_other_board_fails(self, claimed):
        assert not verify_mines(ZERO_SEED, CLIENT_SEED, 1, 5, claimed)

    @pytest.mark.parametrize(
        "server_seed,client_seed,nonce",
        [(ONE_SEED, CLIENT_SEED, 1), (ZERO_SEED, "abc124", 1), (ZERO_SEED, CLIENT_SEED, 2)],
    )
    def test_mutating_any_field_fails(self, server_seed, client_seed, nonce):
        assert not verify_mines(server_seed, client_seed, nonce, 5, [0, 1, 5, 6, 22])

    def test_random_boards_round_trip(self):
        client = new_client_seed()
        for nonce in range(50):
            seed = new_server_seed()
            board = mine_positions(seed, client, nonce, 7)
            assert verify_mines(seed, client, nonce, 7, board, commitment_hash=commit(seed))

    def test_rejects_bad_mine_count(self):
        with pytest.raises(InvalidInput):
            verify_mines(ZERO_SEED, CLIENT_SEED, 1, 0, [])


class TestReport:
    """Test structured reporting of each failure kind."""

    def test_commitment_checked_separately(self):
        report = audit_crash(ZERO_SEED, CLIENT_SEED, 1, 3.23, commitment_hash=commit(ONE_SEED))
        assert report.outcome_ok
        assert report.commitment_ok is False
        assert not report.ok
        assert report.recomputed_commitment == ZERO_SEED_COMMITMENT

    def test_without_commitment_only_outcome_counts(self):
        report = audit_crash(ZERO_SEED, CLIENT_SEED, 1, 3.23)
        assert report.commitment_ok is None
        assert report.ok

    def test_commitment_failure_raises_commitment_mismatch(self):
        report = audit_mines(
            ZERO_SEED, CLIENT_SEED, 1, 5, [0, 1, 5, 6, 22], commitment_hash=commit(ONE_SEED)
        )
        with pytest.raises(CommitmentMismatch):
            report.raise_for_status()

    def test_outcome_failure_carries_expected_and_actual(self):
        report = audit_mines(
            ZERO_SEED, CLIENT_SEED, 1, 5, [1, 2, 3, 4, 5], commitment_hash=ZERO_SEED_COMMITMENT
        )
        assert report.commitment_ok is True
        with pytest.raises(VerificationMismatch) as exc:
            report.raise_for_status()
        assert exc.value.expected == [0, 1, 5, 6, 22]
        assert exc.value.actual == [1, 2, 3, 4, 5]
        assert exc.value.to_dict()["game"] == "mines"

    def test_passing_report_does_not_raise(self):
        report = audit_crash(
            ZERO_SEED, CLIENT_SEED, 1, 3.20, house_edge=0.01, commitment_hash=ZERO_SEED_COMMITMENT
        )
        report.raise_for_status()
        assert report.to_dict()["ok"] is True
