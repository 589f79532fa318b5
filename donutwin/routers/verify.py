"""Verification router for DonutWin.

Anyone holding a revealed round can recompute it here; nothing is looked up
server-side.
"""

from fastapi import APIRouter

from donutwin.config import settings
from donutwin.models.requests import VerifyCrashRequest, VerifyMinesRequest
from donutwin.models.responses import VerifyResponse
from donutwin.services.verifier import audit_crash, audit_mines

router = APIRouter(prefix="/verify", tags=["verify"])


def _pick(value, default):
    return default if value is None else value


@router.post("/crash", response_model=VerifyResponse)
async def verify_crash(body: VerifyCrashRequest):
    """Recompute a crash point and check the commitment if one is given."""
    report = audit_crash(
        body.server_seed,
        body.client_seed,
        body.nonce,
        body.claimed_point,
        epsilon=_pick(body.epsilon, settings.crash_epsilon),
        commitment_hash=body.commitment_hash,
        house_edge=_pick(body.house_edge, settings.crash_house_edge),
        base=_pick(body.base, settings.crash_base),
        max_point=_pick(body.max_point, settings.crash_max_point),
    )
    return report.to_dict()


@router.post("/mines", response_model=VerifyResponse)
async def verify_mines(body: VerifyMinesRequest):
    """Recompute a mines board and compare it with the claimed positions."""
    report = audit_mines(
        body.server_seed,
        body.client_seed,
        body.nonce,
        body.mine_count,
        body.claimed_positions,
        commitment_hash=body.commitment_hash,
        grid_size=_pick(body.grid_size, settings.mines_grid_size),
    )
    return report.to_dict()
