"""Round end / reveal router for DonutWin."""

from fastapi import APIRouter, Query

from donutwin.models.requests import RoundEndRequest
from donutwin.models.responses import RoundHistoryResponse, RoundRevealResponse
from donutwin.services.round_service import service
from donutwin.utils.formatting import format_multiplier

router = APIRouter(prefix="/rounds", tags=["rounds"])


def _with_display(bundle: dict) -> dict:
    return {**bundle, "display": format_multiplier(bundle["payout_multiplier"])}


@router.post("/end", response_model=RoundRevealResponse)
async def end_round(body: RoundEndRequest):
    """End a round and reveal its server seed.

    For crash this settles the auto cashout; for mines it cashes out the
    safe picks made so far (at least one is required).
    """
    bundle = await service.end_round(body.token, body.round_id)
    return _with_display(bundle)


@router.get("/history", response_model=RoundHistoryResponse)
async def round_history(token: str = Query(...)):
    """Reveal bundles of the player's latest ended rounds."""
    return {"rounds": [_with_display(b) for b in await service.history(token)]}
