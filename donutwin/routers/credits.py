"""Credits router for DonutWin.

Server-authoritative, in-memory balance per session.
"""

from fastapi import APIRouter, Query

from donutwin.models.requests import AmountRequest, TokenRequest
from donutwin.models.responses import BalanceResponse
from donutwin.services.credits_service import CreditsService
from donutwin.services.round_service import service

router = APIRouter(prefix="/credits", tags=["credits"])

credits = CreditsService(service)


@router.get("/balance", response_model=BalanceResponse)
async def balance(token: str = Query(...)):
    return {"balance": await credits.balance(token)}


@router.post("/bet", response_model=BalanceResponse)
async def bet(body: AmountRequest):
    """Deduct a bet from the balance."""
    return {"balance": await credits.bet(body.token, body.amount)}


@router.post("/win", response_model=BalanceResponse)
async def win(body: AmountRequest):
    """Credit a win to the balance."""
    return {"balance": await credits.win(body.token, body.amount)}


@router.post("/reset", response_model=BalanceResponse)
async def reset(body: TokenRequest):
    """Restore the starting balance."""
    return {"balance": await credits.reset(body.token)}
