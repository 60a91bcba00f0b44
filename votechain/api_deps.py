"""
VOTECHAIN — API Dependencies.
Shared dependencies for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Request

from votechain import config
from votechain.election import ElectionService
from votechain.exceptions import UninitializedLedger


def get_election(request: Request) -> ElectionService:
    """Inject the election owned by the running app."""
    election = getattr(request.app.state, "election", None)
    if election is None:
        raise UninitializedLedger("No election is open")
    return election


def get_lang(request: Request) -> str:
    """Caller language from Accept-Language, else the configured default."""
    return request.headers.get("Accept-Language") or config.DEFAULT_LANG
