import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from donutwin.config import settings
from donutwin.errors import (
    CommitmentMismatch,
    DerivationExhaustion,
    FairnessError,
    InvalidInput,
    RoundNotFound,
    RoundStateError,
    UnknownPlayer,
    VerificationMismatch,
)

# Import routers
from donutwin.routers import credits, crash, health, mines, rounds, session, verify

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# FastAPI
# ------------------------------------------------------------------------------
app = FastAPI(title="DonutWin Provably Fair API", version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------------------
# Error mapping
# ------------------------------------------------------------------------------
STATUS_BY_ERROR = [
    (InvalidInput, 400),
    (UnknownPlayer, 404),
    (RoundNotFound, 404),
    (RoundStateError, 409),
    (CommitmentMismatch, 409),
    (VerificationMismatch, 409),
    (DerivationExhaustion, 500),
]


@app.exception_handler(FairnessError)
async def fairness_error_handler(request: Request, exc: FairnessError):
    status = next((code for cls, code in STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        # Internal derivation details are not shown to players
        return JSONResponse(status_code=status, content={"error": exc.kind, "detail": "internal error"})
    return JSONResponse(status_code=status, content=exc.to_dict())


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")


# ------------------------------------------------------------------------------
# Include routers
# ------------------------------------------------------------------------------
app.include_router(health.router)
app.include_router(session.router)
app.include_router(crash.router)
app.include_router(mines.router)
app.include_router(rounds.router)
app.include_router(verify.router)
app.include_router(credits.router)
