"""
VOTECHAIN — Immutable Vote Ledger.

Tamper-evident storage of ballots through SHA-256 hash chaining.
The ledger only knows blocks and voter ids; candidates and tallies
belong to :class:`votechain.election.ElectionService`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Sequence

from votechain.canonical import (
    GENESIS_MARKER,
    GENESIS_PREV_HASH,
    Hasher,
    compute_block_hash,
    sha256_bytes,
)
from votechain.clock import MonotonicClock
from votechain.consensus.models import Block, IntegrityReport, LedgerState, VoteRecord
from votechain.exceptions import LedgerAlreadyInitialized, UninitializedLedger

logger = logging.getLogger("votechain.consensus.ledger")


def extend_chain(
    state: LedgerState,
    payload: VoteRecord,
    timestamp: int,
    hasher: Hasher = sha256_bytes,
) -> tuple[LedgerState, Block]:
    """Build the next block on top of ``state`` and the state that contains it.

    Pure: ``state`` is left as it was. The block timestamp is clamped to
    the tip's so timestamps never decrease along the chain.
    """
    tip = state.tip
    if tip is None:
        raise UninitializedLedger("Ledger has no genesis block")

    timestamp = max(int(timestamp), tip.timestamp)
    index = tip.index + 1
    block_hash = compute_block_hash(index, timestamp, payload, tip.hash, hasher)
    block = Block(
        index=index,
        timestamp=timestamp,
        payload=payload,
        previous_hash=tip.hash,
        hash=block_hash,
    )
    return state.extend(block), block


def audit_chain(
    chain: Sequence[Block],
    hasher: Hasher = sha256_bytes,
    stop_on_first: bool = False,
) -> IntegrityReport:
    """Audit a sequence of blocks end to end.

    Checks genesis shape, index continuity, ``previous_hash`` linkage,
    recomputed digests, timestamp order, payload kind and voter reuse.
    """
    if not chain:
        return IntegrityReport(
            valid=False,
            blocks_checked=0,
            violations=[{"index": None, "type": "EMPTY_CHAIN"}],
        )

    violations: list[dict[str, Any]] = []
    seen_voters: set[str] = set()
    expected_prev = GENESIS_PREV_HASH
    prev_block: Block | None = None
    checked = 0

    for position, block in enumerate(chain):
        checked += 1
        found: list[dict[str, Any]] = []

        if position == 0:
            if block.payload != GENESIS_MARKER:
                found.append({"index": block.index, "type": "GENESIS_MISMATCH"})
        elif not isinstance(block.payload, VoteRecord):
            found.append({"index": block.index, "type": "INVALID_PAYLOAD"})

        if block.index != position:
            found.append({
                "index": block.index,
                "type": "INDEX_GAP",
                "expected_index": position,
            })

        if block.previous_hash != expected_prev:
            found.append({
                "index": block.index,
                "type": "CHAIN_BREAK",
                "expected_prev": expected_prev,
                "actual_prev": block.previous_hash,
            })

        actual_hash = compute_block_hash(
            block.index, block.timestamp, block.payload, block.previous_hash, hasher
        )
        if actual_hash != block.hash:
            found.append({
                "index": block.index,
                "type": "DATA_TAMPERING",
                "expected_hash": block.hash,
                "actual_hash": actual_hash,
            })

        if prev_block is not None and block.timestamp < prev_block.timestamp:
            found.append({"index": block.index, "type": "TIME_REGRESSION"})

        voter_id = block.voter_id
        if voter_id is not None:
            if voter_id in seen_voters:
                found.append({"index": block.index, "type": "DUPLICATE_VOTER"})
            seen_voters.add(voter_id)

        violations.extend(found)
        if found and stop_on_first:
            break

        expected_prev = block.hash
        prev_block = block

    return IntegrityReport(
        valid=not violations,
        blocks_checked=checked,
        violations=violations,
    )


def verify_chain(chain: Sequence[Block], hasher: Hasher = sha256_bytes) -> bool:
    """True if ``chain`` passes every audit check. Stops at the first violation."""
    return audit_chain(chain, hasher, stop_on_first=True).valid


class LedgerStore:
    """
    In-process hash chain of vote blocks.

    Owns the chain and the set of voter ids it has consumed. Appends are
    serialized by an ``asyncio.Lock``; the digest is computed in a worker
    thread and the new state is committed in one assignment, so readers
    never see a block without its hash or a block without its voter id.

    ``initialize()`` must be awaited exactly once before any append.
    """

    def __init__(self, clock=None, hasher: Hasher | None = None):
        self._clock = clock or MonotonicClock()
        self._hasher = hasher or sha256_bytes
        self._state: LedgerState | None = None
        self._lock = asyncio.Lock()

    # ─── Lifecycle ───────────────────────────────────────────────

    @property
    def initialized(self) -> bool:
        return self._state is not None

    async def initialize(self) -> Block:
        """Seal the genesis block. A second call would fork the chain."""
        async with self._lock:
            if self._state is not None:
                raise LedgerAlreadyInitialized("Genesis block already exists")

            timestamp = int(self._clock())
            genesis_hash = await asyncio.to_thread(
                self.digest, 0, timestamp, GENESIS_MARKER, GENESIS_PREV_HASH
            )
            genesis = Block(
                index=0,
                timestamp=timestamp,
                payload=GENESIS_MARKER,
                previous_hash=GENESIS_PREV_HASH,
                hash=genesis_hash,
            )
            self._state = LedgerState().extend(genesis)

        logger.info("Genesis block sealed: Hash %s...", genesis_hash[:8])
        return genesis

    # ─── Hashing ─────────────────────────────────────────────────

    def digest(self, index: int, timestamp: int, payload: Any, previous_hash: str) -> str:
        """Deterministic block digest with this store's hash primitive."""
        return compute_block_hash(index, timestamp, payload, previous_hash, self._hasher)

    # ─── Writes ──────────────────────────────────────────────────

    async def append(self, payload: VoteRecord) -> Block:
        """Seal ``payload`` into a new block linked to the current tip.

        Does not check for duplicate voters; callers decide that policy
        with :meth:`has_voted` first.

        Raises:
            UninitializedLedger: If ``initialize()`` has not completed.
            TypeError: If ``payload`` is not a VoteRecord.
        """
        if not isinstance(payload, VoteRecord):
            raise TypeError(f"Ledger payload must be a VoteRecord, got {type(payload).__name__}")

        async with self._lock:
            state = self._require_state()
            timestamp = int(self._clock())
            new_state, block = await asyncio.to_thread(
                extend_chain, state, payload, timestamp, self._hasher
            )
            self._state = new_state

        logger.info(
            "Vote block sealed: #%d | Voter %s | Hash %s...",
            block.index, payload.voter_id, block.hash[:8],
        )
        return block

    # ─── Reads ───────────────────────────────────────────────────

    @property
    def state(self) -> LedgerState:
        return self._require_state()

    @property
    def chain(self) -> tuple[Block, ...]:
        return self._require_state().chain

    @property
    def tip(self) -> Block:
        return self._require_state().chain[-1]

    @property
    def height(self) -> int:
        return len(self._require_state().chain)

    @property
    def consumed_voter_ids(self) -> frozenset[str]:
        return self._require_state().consumed_voter_ids

    def has_voted(self, voter_id: str) -> bool:
        """O(1) duplicate-vote guard."""
        if self._state is None:
            return False
        return voter_id in self._state.consumed_voter_ids

    def iter_votes(self) -> Iterable[VoteRecord]:
        for block in self.chain[1:]:
            if isinstance(block.payload, VoteRecord):
                yield block.payload

    # ─── Audit ───────────────────────────────────────────────────

    def audit(self) -> IntegrityReport:
        """Full audit of the chain with every violation listed."""
        if self._state is None:
            return audit_chain((), self._hasher)
        report = audit_chain(self._state.chain, self._hasher)
        if not report.valid:
            logger.error("Ledger integrity violations: %s", report.violations)
        return report

    def verify_integrity(self) -> bool:
        if self._state is None:
            return False
        return verify_chain(self._state.chain, self._hasher)

    def _require_state(self) -> LedgerState:
        if self._state is None:
            raise UninitializedLedger("Ledger used before initialize()")
        return self._state
