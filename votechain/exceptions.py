"""
VOTECHAIN — Custom Exceptions.

Typed error hierarchy. Every error carries a stable ``code`` for API
clients and a ``message_key`` into :mod:`votechain.i18n` so the caller
can render it in the voter's language.
"""

from __future__ import annotations

from typing import Any


class VotechainError(Exception):
    """Base exception for all VOTECHAIN errors."""

    code = "VOTECHAIN_ERROR"
    message_key = "error_unexpected"

    def __init__(self, message: str = "", **params: Any):
        super().__init__(message or self.code)
        self.params = params


# ─── Candidate Registry ─────────────────────────────────────────────


class CandidateError(VotechainError):
    """Raised when a candidate cannot be registered."""


class EmptyName(CandidateError):
    """Candidate name is blank after trimming."""

    code = "EMPTY_NAME"
    message_key = "error_empty_name"


class DuplicateCandidate(CandidateError):
    """A candidate with the exact same name is already registered."""

    code = "DUPLICATE_CANDIDATE"
    message_key = "error_duplicate_candidate"


# ─── Voting ─────────────────────────────────────────────────────────


class VoteError(VotechainError):
    """Raised when a vote is rejected."""


class EmptyVoterId(VoteError):
    code = "EMPTY_VOTER_ID"
    message_key = "error_empty_voter_id"


class NoCandidateSelected(VoteError):
    code = "NO_CANDIDATE_SELECTED"
    message_key = "error_no_candidate_selected"


class DuplicateVote(VoteError):
    """The voter identifier is already recorded on the chain."""

    code = "DUPLICATE_VOTE"
    message_key = "error_duplicate_vote"


class LedgerAppendFailed(VoteError):
    """The ledger could not seal the vote block; nothing was recorded."""

    code = "LEDGER_APPEND_FAILED"
    message_key = "error_ledger_append_failed"


# ─── Ledger ─────────────────────────────────────────────────────────


class LedgerError(VotechainError):
    """Base exception for ledger operations."""


class UninitializedLedger(LedgerError):
    """Raised when the ledger is used before its genesis block exists."""

    code = "UNINITIALIZED_LEDGER"
    message_key = "error_uninitialized_ledger"


class LedgerAlreadyInitialized(LedgerError):
    """Raised on a second genesis, which would fork the chain."""

    code = "LEDGER_ALREADY_INITIALIZED"
    message_key = "error_ledger_already_initialized"
