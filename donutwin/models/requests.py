"""Pydantic request models for the DonutWin API."""

from typing import List, Optional

from pydantic import BaseModel, Field


class SessionOpenRequest(BaseModel):
    """Open a player session, optionally with the player's own client seed."""
    client_seed: Optional[str] = None


class RotateSeedRequest(BaseModel):
    """Rotate the client seed; omitted means a fresh random one."""
    token: str
    client_seed: Optional[str] = None


class CrashStartRequest(BaseModel):
    token: str
    auto_cashout: Optional[float] = None


class MinesStartRequest(BaseModel):
    token: str
    mine_count: Optional[int] = None


class MinesPickRequest(BaseModel):
    token: str
    round_id: str
    tile: int


class RoundEndRequest(BaseModel):
    token: str
    round_id: str


class VerifyCrashRequest(BaseModel):
    """Everything needed to recompute a crash round.

    Unset game parameters fall back to the server's configured variant.
    """
    server_seed: str
    client_seed: str
    nonce: int = Field(ge=0)
    claimed_point: float
    commitment_hash: Optional[str] = None
    house_edge: Optional[float] = None
    base: Optional[int] = None
    max_point: Optional[int] = None
    epsilon: Optional[float] = None


class VerifyMinesRequest(BaseModel):
    server_seed: str
    client_seed: str
    nonce: int = Field(ge=0)
    mine_count: int
    claimed_positions: List[int]
    commitment_hash: Optional[str] = None
    grid_size: Optional[int] = None


class AmountRequest(BaseModel):
    token: str
    amount: float


class TokenRequest(BaseModel):
    token: str
