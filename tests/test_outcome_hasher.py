"""Unit tests for the digest stream."""

import pytest

from donutwin.errors import DerivationExhaustion, InvalidInput
from donutwin.utils.outcome_hasher import digest, digest_stream, iter_slices, take_bits
from tests.vectors import CLIENT_SEED, GOLDEN_DIGEST, ZERO_SEED


class TestDigest:
    """Test digest derivation."""

    def test_golden_digest(self):
        assert digest(ZERO_SEED, CLIENT_SEED, 1) == GOLDEN_DIGEST

    def test_is_deterministic(self):
        assert {digest(ZERO_SEED, CLIENT_SEED, 5) for _ in range(100)} == {digest(ZERO_SEED, CLIENT_SEED, 5)}

    def test_extension_digest(self):
        assert digest(ZERO_SEED, CLIENT_SEED, 1, extra=1) == (
            "6a5dadaa38a15d6b69fe7350775e5e6628f91a37b4596572cdb1751c532a9916"
        )

    def test_each_field_matters(self):
        base = digest(ZERO_SEED, CLIENT_SEED, 1)
        assert digest(ZERO_SEED, CLIENT_SEED, 2) != base
        assert digest(ZERO_SEED, "abc124", 1) != base
        assert digest("0" * 63 + "1", CLIENT_SEED, 1) != base


class TestTakeBits:
    """Test hex slice extraction."""

    def test_reads_big_endian(self):
        assert take_bits(GOLDEN_DIGEST, 0, 2) == 0xB0
        assert take_bits(GOLDEN_DIGEST, 2, 2) == 0xE6
        assert take_bits(GOLDEN_DIGEST, 0, 13) == 3112030381186668

    def test_last_slice(self):
        assert take_bits(GOLDEN_DIGEST, 62, 2) == 0xAD

    def test_past_the_end_is_exhaustion(self):
        with pytest.raises(DerivationExhaustion):
            take_bits(GOLDEN_DIGEST, 63, 2)

    @pytest.mark.parametrize("offset,length", [(-1, 2), (0, 0)])
    def test_rejects_bad_bounds(self, offset, length):
        with pytest.raises(InvalidInput):
            take_bits(GOLDEN_DIGEST, offset, length)

    @pytest.mark.parametrize("bad", ["z" * 64, "-1" + "0" * 62, "1_" + "0" * 62, " 1" + "0" * 62])
    def test_rejects_non_hex(self, bad):
        with pytest.raises(InvalidInput):
            take_bits(bad, 0, 2)


class TestStream:
    """Test stream extension."""

    def test_stream_starts_with_base_digest(self):
        stream = list(digest_stream(ZERO_SEED, CLIENT_SEED, 1, max_extensions=2))
        assert stream[0] == GOLDEN_DIGEST
        assert stream[1] == digest(ZERO_SEED, CLIENT_SEED, 1, extra=1)
        assert len(stream) == 3

    def test_slices_do_not_overlap(self):
        slices = list(iter_slices(GOLDEN_DIGEST, 2))
        assert len(slices) == 32
        assert "".join(f"{s:02x}" for s in slices) == GOLDEN_DIGEST
