"""
VOTECHAIN — Ledger Models.

Immutable value types for the vote chain. Blocks and states are frozen:
a new state is always built in full and swapped in, never edited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class VoteRecord:
    """A single ballot as sealed into a block."""

    voter_id: str
    candidate: str
    timestamp: int

    def __post_init__(self) -> None:
        if not self.voter_id or not self.voter_id.strip():
            raise ValueError("VoteRecord requires a non-blank voter_id")

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter_id": self.voter_id,
            "candidate": self.candidate,
            "timestamp": self.timestamp,
        }


Payload = Union[str, VoteRecord]


@dataclass(frozen=True)
class Block:
    index: int
    timestamp: int
    payload: Payload
    previous_hash: str
    hash: str

    @property
    def voter_id(self) -> str | None:
        if isinstance(self.payload, VoteRecord):
            return self.payload.voter_id
        return None

    def to_dict(self) -> dict[str, Any]:
        payload = self.payload.to_dict() if isinstance(self.payload, VoteRecord) else self.payload
        return {
            "index": self.index,
            "timestamp": self.timestamp,
            "payload": payload,
            "previous_hash": self.previous_hash,
            "hash": self.hash,
        }


@dataclass(frozen=True)
class LedgerState:
    """Snapshot of the chain and the voter ids it has consumed."""

    chain: tuple[Block, ...] = ()
    consumed_voter_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def tip(self) -> Block | None:
        return self.chain[-1] if self.chain else None

    def extend(self, block: Block) -> LedgerState:
        """Return a new state with ``block`` appended and its voter id consumed."""
        voter_ids = self.consumed_voter_ids
        if block.voter_id is not None:
            voter_ids = voter_ids | {block.voter_id}
        return LedgerState(chain=self.chain + (block,), consumed_voter_ids=voter_ids)


@dataclass
class IntegrityReport:
    valid: bool
    blocks_checked: int
    violations: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "blocks_checked": self.blocks_checked,
            "violations": self.violations,
        }
