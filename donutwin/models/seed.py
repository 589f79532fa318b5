"""Seed material for provably-fair rounds."""

from dataclasses import dataclass

from donutwin.constants import CLIENT_SEED_MAX_LEN, SEED_SEPARATOR, SERVER_SEED_RE
from donutwin.errors import InvalidInput


def validate_server_seed(server_seed: str) -> str:
    if not isinstance(server_seed, str) or not SERVER_SEED_RE.match(server_seed):
        raise InvalidInput("server seed must be 64 lowercase hex characters")
    return server_seed


def validate_client_seed(client_seed: str) -> str:
    """Player-supplied client seeds are free text with a few limits.

    The separator is banned so that two different (client_seed, nonce)
    pairs can never produce the same hashed message.
    """
    if not isinstance(client_seed, str) or not client_seed:
        raise InvalidInput("client seed must be a non-empty string")
    if len(client_seed) > CLIENT_SEED_MAX_LEN:
        raise InvalidInput(f"client seed must be at most {CLIENT_SEED_MAX_LEN} characters")
    if SEED_SEPARATOR in client_seed:
        raise InvalidInput(f"client seed must not contain {SEED_SEPARATOR!r}")
    if not client_seed.isprintable():
        raise InvalidInput("client seed must be printable")
    return client_seed


def validate_nonce(nonce: int) -> int:
    if isinstance(nonce, bool) or not isinstance(nonce, int) or nonce < 0:
        raise InvalidInput("nonce must be a non-negative integer")
    return nonce


@dataclass(frozen=True)
class SeedPair:
    """The (server_seed, client_seed, nonce) triple a round is derived from."""

    server_seed: str
    client_seed: str
    nonce: int

    def __post_init__(self):
        validate_server_seed(self.server_seed)
        validate_client_seed(self.client_seed)
        validate_nonce(self.nonce)

    def public(self) -> dict:
        """Fields that may be shown before the round ends."""
        return {"client_seed": self.client_seed, "nonce": self.nonce}

    def reveal(self) -> dict:
        return {
            "server_seed": self.server_seed,
            "client_seed": self.client_seed,
            "nonce": self.nonce,
        }
