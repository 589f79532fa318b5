"""Cryptographic commit-reveal mechanism for fair game outcomes."""

import hashlib
import hmac
import secrets
from typing import Tuple

from donutwin.constants import CLIENT_SEED_BYTES, SERVER_SEED_BYTES
from donutwin.errors import CommitmentMismatch
from donutwin.models.seed import SeedPair, validate_server_seed


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def new_server_seed() -> str:
    """
    Generate a fresh secret server seed.

    Uses the OS CSPRNG through ``secrets``; there is no fallback source.

    Returns:
        64 lowercase hex characters (32 random bytes)
    """
    return secrets.token_hex(SERVER_SEED_BYTES)


def new_client_seed() -> str:
    """Generate a default client seed (16 random bytes as hex)."""
    return secrets.token_hex(CLIENT_SEED_BYTES)


def commit(server_seed: str) -> str:
    """
    Create the public commitment for a server seed.

    Args:
        server_seed: The secret seed, as 64 hex characters

    Returns:
        SHA256 hex digest of the seed text
    """
    return sha256_hex(validate_server_seed(server_seed))


def new_seed_pair(client_seed: str, nonce: int) -> Tuple[SeedPair, str]:
    """
    Draw a server seed for one round and commit to it.

    Args:
        client_seed: The player's current client seed
        nonce: The player's current nonce

    Returns:
        Tuple of (seed_pair, commitment_hash)
    """
    server_seed = new_server_seed()
    return SeedPair(server_seed, client_seed, nonce), commit(server_seed)


def commitment_matches(server_seed: str, commitment_hash: str) -> bool:
    return hmac.compare_digest(commit(server_seed), commitment_hash.lower())


def check_commitment(server_seed: str, commitment_hash: str) -> None:
    """Raise CommitmentMismatch unless the revealed seed matches its commitment."""
    recomputed = commit(server_seed)
    if not hmac.compare_digest(recomputed, commitment_hash.lower()):
        raise CommitmentMismatch(commitment_hash, recomputed)
