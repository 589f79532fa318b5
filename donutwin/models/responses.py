"""Pydantic response models for the DonutWin API."""

from typing import Any, List, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    env: str
    version: str


class SessionResponse(BaseModel):
    token: str
    client_seed: str
    nonce: int
    balance: float
    rotations: int = 0


class RotateSeedResponse(BaseModel):
    previous_client_seed: str
    previous_nonce: int
    client_seed: str
    nonce: int


class RoundStartResponse(BaseModel):
    """The commitment, shown before any outcome-affecting action."""
    round_id: str
    game: str
    commitment_hash: str
    client_seed: str
    nonce: int


class MinesPickResponse(BaseModel):
    round_id: str
    tile: int
    mine: bool
    safe_picks: int
    multiplier: float
    display: str
    ended: bool
    reveal: Optional[dict[str, Any]] = None


class RoundRevealResponse(BaseModel):
    """Round end: the server seed and the outcome it produced."""
    round_id: str
    game: str
    commitment_hash: str
    server_seed: str
    client_seed: str
    nonce: int
    outcome: dict[str, Any]
    won: bool
    payout_multiplier: float
    display: str
    auto_cashout: Optional[float] = None
    picks: Optional[List[int]] = None


class VerifyResponse(BaseModel):
    """Verification result with the recomputed value for diagnostics."""
    ok: bool
    game: str
    outcome_ok: bool
    commitment_ok: Optional[bool] = None
    expected: Any
    claimed: Any
    recomputed_commitment: str
    commitment_hash: Optional[str] = None


class BalanceResponse(BaseModel):
    ok: bool = True
    balance: float


class RoundHistoryResponse(BaseModel):
    """The player's latest ended rounds, newest first."""
    rounds: List[RoundRevealResponse]
