"""
VOTECHAIN — REST API.

FastAPI server exposing one in-memory election per process.
State lives only as long as the process does.
"""


import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from votechain import __version__, config
from votechain.api_deps import get_lang
from votechain.election import ElectionService
from votechain.exceptions import (
    CandidateError,
    DuplicateCandidate,
    DuplicateVote,
    LedgerAppendFailed,
    LedgerError,
    VoteError,
    VotechainError,
)
from votechain.i18n import get_trans, message_for
from votechain.routes import election as election_router

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open a fresh election (genesis block included) on startup."""
    election = await ElectionService.open()
    app.state.election = election
    logger.info("Election opened. Genesis: %s", election.get_chain()[0].hash[:8])
    try:
        yield
    finally:
        app.state.election = None


app = FastAPI(
    title="VOTECHAIN — Vote Ledger API",
    description="In-memory election simulation on a SHA-256 hash chain.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept-Language"],
)


# ─── Exception Handlers ──────────────────────────────────────────────


def status_for(exc: VotechainError) -> int:
    if isinstance(exc, (DuplicateCandidate, DuplicateVote)):
        return 409
    if isinstance(exc, LedgerAppendFailed):
        return 500
    if isinstance(exc, (CandidateError, VoteError)):
        return 422
    if isinstance(exc, LedgerError):
        return 503
    return 500


@app.exception_handler(VotechainError)
async def votechain_error_handler(request: Request, exc: VotechainError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("Election error %s: %s", exc.code, exc)
    return JSONResponse(
        status_code=status,
        content={"detail": message_for(exc, get_lang(request)), "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=422,
        content={"detail": get_trans("error_invalid_input", get_lang(request)), "code": "INVALID_INPUT"},
    )


@app.exception_handler(Exception)
async def universal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": get_trans("error_unexpected", get_lang(request)), "code": "INTERNAL"},
    )


# ─── Routes ──────────────────────────────────────────────────────────


@app.get("/health", tags=["health"])
async def health_check(request: Request) -> dict:
    """Simple status check for load balancers."""
    return {
        "status": get_trans("system_healthy", get_lang(request)),
        "version": __version__,
    }


app.include_router(election_router.router)
