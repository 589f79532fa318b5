"""Mines game router for DonutWin."""

from fastapi import APIRouter

from donutwin.config import settings
from donutwin.models.requests import MinesPickRequest, MinesStartRequest
from donutwin.models.responses import MinesPickResponse, RoundStartResponse
from donutwin.services.round_service import service
from donutwin.utils.formatting import format_multiplier

router = APIRouter(prefix="/mines", tags=["mines"])


@router.post("/start", response_model=RoundStartResponse)
async def mines_start(body: MinesStartRequest):
    """Commit to a mines board."""
    mine_count = body.mine_count if body.mine_count is not None else settings.mines_default_count
    rnd = await service.start_mines_round(
        body.token,
        mine_count=mine_count,
        grid_size=settings.mines_grid_size,
        house_edge=settings.mines_house_edge,
    )
    return rnd.start_bundle()


@router.post("/pick", response_model=MinesPickResponse)
async def mines_pick(body: MinesPickRequest):
    """Reveal a tile. A mine ends the round and includes the reveal."""
    result = await service.pick_tile(body.token, body.round_id, body.tile)
    if "reveal" in result:
        result["reveal"]["display"] = format_multiplier(result["reveal"]["payout_multiplier"])
    return {**result, "display": format_multiplier(result["multiplier"])}
