"""
VOTECHAIN — Display Projections.

Pure views of the chain and the tally for the CLI and any other
front end. Nothing here touches election state.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, Sequence

from votechain.consensus.models import Block, VoteRecord
from votechain.i18n import DEFAULT_LANGUAGE, get_trans

HASH_PREVIEW = 20
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(ms: int, tz: tzinfo | None = None) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=tz).strftime(TIME_FORMAT)


def short_hash(value: str, length: int = HASH_PREVIEW) -> str:
    return f"{value[:length]}..."


def payload_text(block: Block) -> str:
    """Genesis marker as-is, vote records as indented JSON."""
    if isinstance(block.payload, VoteRecord):
        return json.dumps(block.payload.to_dict(), indent=2)
    return str(block.payload)


@dataclass(frozen=True)
class BlockView:
    index: int
    title: str
    timestamp: str
    data: str
    previous_hash: str
    hash: str


def block_view(block: Block, lang: str = DEFAULT_LANGUAGE, tz: tzinfo | None = None) -> BlockView:
    return BlockView(
        index=block.index,
        title=get_trans("block_title", lang, index=block.index),
        timestamp=format_timestamp(block.timestamp, tz),
        data=payload_text(block),
        previous_hash=short_hash(block.previous_hash),
        hash=short_hash(block.hash),
    )


def chain_view(
    chain: Sequence[Block], lang: str = DEFAULT_LANGUAGE, tz: tzinfo | None = None
) -> list[BlockView]:
    """Newest block first."""
    return [block_view(block, lang, tz) for block in reversed(chain)]


def results_view(tally: Iterable[tuple[str, int]], lang: str = DEFAULT_LANGUAGE) -> list[str]:
    lines = [get_trans("results_line", lang, name=name, count=count) for name, count in tally]
    if not lines:
        return [get_trans("results_empty", lang)]
    return lines
