"""
VOTECHAIN — Election Service.

Candidate registry and tally on top of the vote ledger. Every public
operation returns a :class:`~votechain.result.Result`; failures leave
the registry, the tally and the chain exactly as they were.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter

from votechain.canonical import Hasher
from votechain.clock import MonotonicClock
from votechain.consensus.models import Block, IntegrityReport, VoteRecord
from votechain.consensus.vote_ledger import LedgerStore
from votechain.exceptions import (
    DuplicateCandidate,
    DuplicateVote,
    EmptyName,
    EmptyVoterId,
    LedgerAppendFailed,
    NoCandidateSelected,
    UninitializedLedger,
    VotechainError,
)
from votechain.result import Result

logger = logging.getLogger("votechain.election")


class ElectionService:
    """One election: its candidates, its tally and the ledger that backs it.

    Each instance owns its ledger, so independent elections can run side
    by side in the same process.
    """

    def __init__(self, ledger: LedgerStore, clock=None):
        if not ledger.initialized:
            raise UninitializedLedger("ElectionService needs an initialized ledger")
        self._ledger = ledger
        self._clock = clock or MonotonicClock()
        self._candidates: list[str] = []
        self._votes: dict[str, int] = {}
        self._lock = asyncio.Lock()

    @classmethod
    async def open(cls, clock=None, hasher: Hasher | None = None) -> ElectionService:
        """Create a fresh election with its own genesis block."""
        clock = clock or MonotonicClock()
        ledger = LedgerStore(clock=clock, hasher=hasher)
        await ledger.initialize()
        return cls(ledger, clock=clock)

    @property
    def ledger(self) -> LedgerStore:
        return self._ledger

    # ─── Candidates ──────────────────────────────────────────────

    def register_candidate(self, name: str) -> Result[str]:
        name = (name or "").strip()
        if not name:
            return self._reject(EmptyName("Candidate name is blank"))
        if name in self._votes:
            return self._reject(DuplicateCandidate(f"Candidate {name!r} exists", name=name))

        self._candidates.append(name)
        self._votes[name] = 0
        logger.info("Candidate registered: %s", name)
        return Result.success(name)

    def list_candidates(self) -> list[str]:
        return list(self._candidates)

    # ─── Voting ──────────────────────────────────────────────────

    async def cast_vote(self, voter_id: str, candidate_name: str) -> Result[Block]:
        """Validate, seal and count one ballot as a single critical section.

        Validation order: blank voter id, unknown candidate, duplicate voter.
        """
        voter_id = (voter_id or "").strip()
        candidate_name = candidate_name or ""

        async with self._lock:
            if not voter_id:
                return self._reject(EmptyVoterId("Voter id is blank"))
            if not candidate_name.strip() or candidate_name not in self._votes:
                return self._reject(
                    NoCandidateSelected("No valid candidate selected", candidate=candidate_name)
                )
            if self._ledger.has_voted(voter_id):
                logger.warning("Duplicate vote rejected for voter %s", voter_id)
                return Result.failure(DuplicateVote("Voter already voted", voter_id=voter_id))

            record = VoteRecord(
                voter_id=voter_id,
                candidate=candidate_name,
                timestamp=int(self._clock()),
            )
            try:
                block = await self._ledger.append(record)
            except Exception as e:
                logger.exception("Failed to seal vote for %s", candidate_name)
                return Result.failure(LedgerAppendFailed(str(e), candidate=candidate_name))

            self._votes[candidate_name] += 1

        return Result.success(block)

    # ─── Results ─────────────────────────────────────────────────

    def tally(self) -> list[tuple[str, int]]:
        """Counts, highest first; ties keep registration order."""
        return sorted(
            ((name, self._votes[name]) for name in self._candidates),
            key=lambda item: item[1],
            reverse=True,
        )

    def recount(self) -> list[tuple[str, int]]:
        """Rebuild the tally from the chain alone, in :meth:`tally` order."""
        counts = Counter(record.candidate for record in self._ledger.iter_votes())
        return sorted(
            ((name, counts.get(name, 0)) for name in self._candidates),
            key=lambda item: item[1],
            reverse=True,
        )

    @property
    def total_votes(self) -> int:
        return sum(self._votes.values())

    # ─── Ledger Access ───────────────────────────────────────────

    def get_chain(self) -> tuple[Block, ...]:
        return self._ledger.chain

    def verify_integrity(self) -> bool:
        return self._ledger.verify_integrity()

    def audit(self) -> IntegrityReport:
        return self._ledger.audit()

    @staticmethod
    def _reject(error: VotechainError) -> Result:
        logger.info("Rejected: %s (%s)", error.code, error)
        return Result.failure(error)
