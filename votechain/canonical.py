"""VOTECHAIN — Canonical Hash Construction.

Provides deterministic JSON serialization and null-byte separated
hash computation for the vote chain.

Block hash input:
    f"{index}\\x00{timestamp}\\x00{canonical_payload}\\x00{previous_hash}"

A string payload serializes as a quoted JSON string and a vote record as
a JSON object, so the genesis marker can never hash like a vote.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Callable

Hasher = Callable[[bytes], bytes]

GENESIS_PREV_HASH = "0" * 64
GENESIS_MARKER = "Genesis Block"

DIGEST_SIZE = 32

# ─── Canonical JSON ───────────────────────────────────────────────


def canonical_json(obj: Any) -> str:
    """Deterministic JSON: sorted keys, no whitespace, ASCII-safe.

    Objects exposing ``to_dict()`` (vote records) are serialized through it.

    Args:
        obj: Any JSON-serializable object.

    Returns:
        Canonical JSON string.
    """
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"),
        ensure_ascii=True, default=str,
    )


# ─── Block Hash ───────────────────────────────────────────────────


def sha256_bytes(data: bytes) -> bytes:
    """Default digest primitive: raw 32-byte SHA-256."""
    return hashlib.sha256(data).digest()


def compute_block_hash(
    index: int,
    timestamp: int,
    payload: Any,
    previous_hash: str,
    hasher: Hasher = sha256_bytes,
) -> str:
    """Compute a block hash using the null-byte separated canonical form.

    Args:
        index: Position of the block in the chain.
        timestamp: Creation time in milliseconds since epoch.
        payload: Genesis marker string or vote record.
        previous_hash: Hash of the preceding block, or the zero sentinel.
        hasher: ``bytes -> 32 bytes`` digest primitive.

    Returns:
        Lowercase hex digest (64 chars).

    Raises:
        ValueError: If the hasher does not return a 32-byte digest.
    """
    h_input = (
        f"{int(index)}\x00{int(timestamp)}"
        f"\x00{canonical_json(payload)}\x00{previous_hash}"
    )
    digest = hasher(h_input.encode("utf-8"))
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    return digest.hex()
