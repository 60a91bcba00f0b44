"""
VOTECHAIN — Consensus Layer.

Provides the immutable vote ledger and its block models.
"""

from .models import Block, IntegrityReport, LedgerState, VoteRecord
from .vote_ledger import LedgerStore, audit_chain, extend_chain, verify_chain
