"""Exception taxonomy for the fairness engine and the round service."""

from typing import Any, Optional


class FairnessError(Exception):
    """Base class for every error raised by DonutWin."""

    kind = "fairness_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class InvalidInput(FairnessError):
    """Malformed seeds, out-of-range parameters or non-positive amounts.

    Raised before any hashing happens, so the caller is never charged
    and the session nonce is never advanced.
    """

    kind = "invalid_input"


class InsufficientFunds(InvalidInput):
    kind = "insufficient_funds"


class CommitmentMismatch(FairnessError):
    """The revealed server seed does not hash to the published commitment."""

    kind = "commitment_mismatch"

    def __init__(self, commitment_hash: str, recomputed_hash: str):
        super().__init__(
            f"server seed hashes to {recomputed_hash}, "
            f"but {commitment_hash} was committed"
        )
        self.commitment_hash = commitment_hash
        self.recomputed_hash = recomputed_hash

    def to_dict(self) -> dict:
        return {
            "error": self.kind,
            "detail": self.message,
            "expected": self.commitment_hash,
            "actual": self.recomputed_hash,
        }


class DerivationExhaustion(FairnessError):
    """The digest stream ran out before a draw could be completed.

    Internal: the mines draw extends the stream deterministically, so this
    only surfaces once every extension round has been spent.
    """

    kind = "derivation_exhaustion"


class VerificationMismatch(FairnessError):
    """A recomputed outcome differs from the published one."""

    kind = "verification_mismatch"

    def __init__(self, game: str, expected: Any, actual: Any):
        super().__init__(f"{game} outcome mismatch: recomputed {expected!r}, published {actual!r}")
        self.game = game
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> dict:
        return {
            "error": self.kind,
            "detail": self.message,
            "game": self.game,
            "expected": self.expected,
            "actual": self.actual,
        }


class RoundNotFound(FairnessError):
    kind = "round_not_found"


class RoundStateError(FairnessError):
    """Operation not allowed in the round's current state."""

    kind = "round_state"

    def __init__(self, message: str, round_id: Optional[str] = None):
        super().__init__(message)
        self.round_id = round_id


class UnknownPlayer(FairnessError):
    kind = "unknown_player"
