"""
VOTECHAIN — Hash-Chained Vote Ledger.

In-memory election simulation: an append-only SHA-256 chain of vote
blocks, a duplicate-voter guard derived from the chain, and a tally.
"""

__version__ = "1.0.0"

from votechain.election import ElectionService

__all__ = ["ElectionService", "__version__"]
