"""Digest stream shared by every distribution.

A revealed seed triple is hashed into a 64-character hex digest; the
distributions harvest non-overlapping slices of it. When one digest is not
enough the stream is extended by re-hashing the triple with an extra
counter, so the draw stays reproducible from the revealed seeds alone.
"""

import hashlib
import string
from typing import Iterator, Optional

from donutwin.constants import MAX_EXTENSION_ROUNDS, SEED_SEPARATOR
from donutwin.errors import DerivationExhaustion, InvalidInput


def digest(server_seed: str, client_seed: str, nonce: int, extra: Optional[int] = None) -> str:
    """Hash ``server:client:nonce`` (or ``server:client:nonce:extra``) with SHA256."""
    parts = [server_seed, client_seed, str(nonce)]
    if extra is not None:
        parts.append(str(extra))
    message = SEED_SEPARATOR.join(parts)
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def take_bits(digest_hex: str, offset: int, length: int) -> int:
    """Read ``length`` hex characters at ``offset`` as a big-endian unsigned int.

    Raises:
        InvalidInput: offset or length is negative / zero, or the slice
            is not hex
        DerivationExhaustion: the slice runs past the end of the digest
    """
    if offset < 0 or length <= 0:
        raise InvalidInput("offset must be >= 0 and length > 0")
    end = offset + length
    if end > len(digest_hex):
        raise DerivationExhaustion(
            f"slice [{offset}:{end}] exceeds digest of {len(digest_hex)} chars"
        )
    chunk = digest_hex[offset:end]
    # int(..., 16) would also accept signs, spaces and underscores
    if not all(c in string.hexdigits for c in chunk):
        raise InvalidInput(f"digest slice {chunk!r} is not hex")
    return int(chunk, 16)


def digest_stream(
    server_seed: str,
    client_seed: str,
    nonce: int,
    max_extensions: int = MAX_EXTENSION_ROUNDS,
) -> Iterator[str]:
    """Yield the base digest, then extension digests with extra = 1, 2, ..."""
    yield digest(server_seed, client_seed, nonce)
    for extra in range(1, max_extensions + 1):
        yield digest(server_seed, client_seed, nonce, extra)


def iter_slices(digest_hex: str, length: int) -> Iterator[int]:
    """Successive non-overlapping ``length``-char slices of one digest."""
    for offset in range(0, len(digest_hex) - length + 1, length):
        yield take_bits(digest_hex, offset, length)
