"""
VOTECHAIN — Election Router.
Candidate registration, ballots, results and the public ledger.
"""

import logging

from fastapi import APIRouter, Depends

from votechain.api_deps import get_election, get_lang
from votechain.election import ElectionService
from votechain.i18n import get_trans
from votechain.models import (
    BlockResponse,
    CandidateRequest,
    CandidateResponse,
    ErrorResponse,
    IntegrityResponse,
    ResultEntry,
    VoteRequest,
    VoteResponse,
)

logger = logging.getLogger("votechain.api.election")
router = APIRouter(prefix="/v1", tags=["election"])

_ERRORS = {
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


@router.get("/candidates", response_model=list[str])
async def list_candidates(
    election: ElectionService = Depends(get_election),
) -> list[str]:
    return election.list_candidates()


@router.post("/candidates", response_model=CandidateResponse, status_code=201, responses=_ERRORS)
async def register_candidate(
    req: CandidateRequest,
    election: ElectionService = Depends(get_election),
    lang: str = Depends(get_lang),
) -> CandidateResponse:
    """Add a candidate with a zero tally."""
    name = election.register_candidate(req.name).unwrap()
    return CandidateResponse(name=name, message=get_trans("candidate_added", lang, name=name))


@router.post(
    "/votes",
    response_model=VoteResponse,
    status_code=201,
    responses={**_ERRORS, 500: {"model": ErrorResponse}},
)
async def cast_vote(
    req: VoteRequest,
    election: ElectionService = Depends(get_election),
    lang: str = Depends(get_lang),
) -> VoteResponse:
    """Seal a ballot into the chain and count it."""
    block = (await election.cast_vote(req.voter_id, req.candidate)).unwrap()
    return VoteResponse(
        candidate=req.candidate,
        block_index=block.index,
        hash=block.hash,
        message=get_trans("vote_recorded", lang, candidate=req.candidate),
    )


@router.get("/results", response_model=list[ResultEntry])
async def results(
    election: ElectionService = Depends(get_election),
) -> list[ResultEntry]:
    return [ResultEntry(candidate=name, votes=count) for name, count in election.tally()]


@router.get("/chain", response_model=list[BlockResponse])
async def chain(
    election: ElectionService = Depends(get_election),
) -> list[BlockResponse]:
    """Every block, genesis first."""
    return [BlockResponse(**block.to_dict()) for block in election.get_chain()]


@router.get("/chain/verify", response_model=IntegrityResponse)
async def verify_chain(
    election: ElectionService = Depends(get_election),
) -> IntegrityResponse:
    report = election.audit()
    if not report.valid:
        logger.error("Ledger integrity violation: %s", report.violations)
    return IntegrityResponse(**report.to_dict())
