"""Crash game router for DonutWin."""

from fastapi import APIRouter

from donutwin.config import settings
from donutwin.models.requests import CrashStartRequest
from donutwin.models.responses import RoundStartResponse
from donutwin.services.round_service import service

router = APIRouter(prefix="/crash", tags=["crash"])


@router.post("/start", response_model=RoundStartResponse)
async def crash_start(body: CrashStartRequest):
    """Commit to a crash round.

    Only the commitment hash, client seed and nonce are returned; the crash
    point stays hidden until the round is ended through /rounds/end.
    """
    rnd = await service.start_crash_round(
        body.token,
        house_edge=settings.crash_house_edge,
        base=settings.crash_base,
        max_point=settings.crash_max_point,
        auto_cashout=body.auto_cashout,
    )
    return rnd.start_bundle()
