"""Player session router for DonutWin."""

from fastapi import APIRouter, Query

from donutwin.models.requests import RotateSeedRequest, SessionOpenRequest
from donutwin.models.responses import RotateSeedResponse, SessionResponse
from donutwin.services.round_service import service

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/open", response_model=SessionResponse)
async def open_session(body: SessionOpenRequest):
    """Open a session and hand back its token.

    The client seed is random unless the player brings their own.
    """
    session = await service.open_session(body.client_seed)
    return {"token": session.player_id, **session.public()}


@router.get("/state", response_model=SessionResponse)
async def session_state(token: str = Query(...)):
    """Current client seed, next nonce and balance."""
    session = await service.get_session(token)
    return {"token": session.player_id, **session.public()}


@router.post("/rotate", response_model=RotateSeedResponse)
async def rotate_seed(body: RotateSeedRequest):
    """Switch to a new client seed; the nonce restarts at 0."""
    return await service.rotate_client_seed(body.token, body.client_seed)
