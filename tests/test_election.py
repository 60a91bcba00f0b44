"""
Tests for the election service.
Candidate registry, vote validation order, tally and atomicity.
"""

import asyncio

import pytest

from votechain.consensus import LedgerStore
from votechain.election import ElectionService
from votechain.exceptions import (
    DuplicateCandidate,
    DuplicateVote,
    EmptyName,
    EmptyVoterId,
    LedgerAppendFailed,
    NoCandidateSelected,
    UninitializedLedger,
)


@pytest.fixture
async def election(clock):
    service = await ElectionService.open(clock=clock)
    service.register_candidate("Alice")
    service.register_candidate("Bob")
    return service


def _sum_property(service: ElectionService) -> bool:
    return sum(count for _, count in service.tally()) == len(service.get_chain()) - 1


# ─── Candidates ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_register_candidates_in_order(election):
    assert election.list_candidates() == ["Alice", "Bob"]
    assert election.tally() == [("Alice", 0), ("Bob", 0)]


@pytest.mark.asyncio
async def test_register_empty_name(clock):
    service = await ElectionService.open(clock=clock)
    for blank in ("", "   ", "\t\n", None):
        result = service.register_candidate(blank)
        assert not result.ok
        assert isinstance(result.error, EmptyName)
    assert service.list_candidates() == []


@pytest.mark.asyncio
async def test_register_duplicate(election):
    result = election.register_candidate("Alice")
    assert not result.ok
    assert isinstance(result.error, DuplicateCandidate)
    assert result.code == "DUPLICATE_CANDIDATE"
    assert election.list_candidates() == ["Alice", "Bob"]


@pytest.mark.asyncio
async def test_register_trims_name(election):
    result = election.register_candidate("  Citra  ")
    assert result.ok
    assert result.value == "Citra"
    assert not election.register_candidate("Citra").ok


@pytest.mark.asyncio
async def test_names_are_case_sensitive(election):
    assert election.register_candidate("alice").ok


@pytest.mark.asyncio
async def test_registration_skips_ledger(election):
    assert len(election.get_chain()) == 1


# ─── Voting ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_scenario_alice_bob(election):
    first = await election.cast_vote("NIK1", "Alice")
    assert first.ok
    assert first.value.index == 1
    assert election.tally() == [("Alice", 1), ("Bob", 0)]

    again = await election.cast_vote("NIK1", "Bob")
    assert isinstance(again.error, DuplicateVote)
    assert election.tally() == [("Alice", 1), ("Bob", 0)]

    second = await election.cast_vote("NIK2", "Bob")
    assert second.ok
    assert election.tally() == [("Alice", 1), ("Bob", 1)]

    assert len(election.get_chain()) == 3
    assert election.verify_integrity()


@pytest.mark.asyncio
async def test_vote_payload(election, clock):
    result = await election.cast_vote("NIK1", "Alice")
    record = result.value.payload
    assert record.voter_id == "NIK1"
    assert record.candidate == "Alice"
    assert record.timestamp <= result.value.timestamp


@pytest.mark.asyncio
async def test_voter_id_trimmed(election):
    assert (await election.cast_vote("  NIK1 ", "Alice")).ok
    assert isinstance((await election.cast_vote("NIK1", "Bob")).error, DuplicateVote)


@pytest.mark.asyncio
@pytest.mark.parametrize("voter_id", ["", "   ", None])
async def test_empty_voter_id(election, voter_id):
    result = await election.cast_vote(voter_id, "Alice")
    assert isinstance(result.error, EmptyVoterId)
    assert len(election.get_chain()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("candidate", ["", "  ", "Mallory", "alice", None])
async def test_no_candidate_selected(election, candidate):
    result = await election.cast_vote("NIK1", candidate)
    assert isinstance(result.error, NoCandidateSelected)
    assert not election.ledger.has_voted("NIK1")
    assert election.total_votes == 0


@pytest.mark.asyncio
async def test_validation_order(election):
    await election.cast_vote("NIK1", "Alice")
    # Blank voter id wins over a missing candidate
    assert isinstance((await election.cast_vote("", "")).error, EmptyVoterId)
    # Missing candidate wins over a duplicate voter
    assert isinstance((await election.cast_vote("NIK1", "Mallory")).error, NoCandidateSelected)


@pytest.mark.asyncio
async def test_duplicate_vote_changes_nothing(election):
    await election.cast_vote("NIK1", "Alice")
    chain_before = election.get_chain()
    tally_before = election.tally()

    for candidate in ("Alice", "Bob"):
        result = await election.cast_vote("NIK1", candidate)
        assert isinstance(result.error, DuplicateVote)

    assert election.get_chain() == chain_before
    assert election.tally() == tally_before


@pytest.mark.asyncio
async def test_append_failure_rolls_back(flaky_hasher, clock):
    election = await ElectionService.open(clock=clock, hasher=flaky_hasher)
    election.register_candidate("Alice")
    await election.cast_vote("NIK1", "Alice")
    chain_before = election.get_chain()

    flaky_hasher.fail = True
    result = await election.cast_vote("NIK2", "Alice")
    assert isinstance(result.error, LedgerAppendFailed)
    assert election.get_chain() == chain_before
    assert election.tally() == [("Alice", 1)]
    assert not election.ledger.has_voted("NIK2")

    # The voter can retry once the ledger recovers
    flaky_hasher.fail = False
    assert (await election.cast_vote("NIK2", "Alice")).ok
    assert election.tally() == [("Alice", 2)]


@pytest.mark.asyncio
async def test_concurrent_double_vote(election):
    results = await asyncio.gather(
        *(election.cast_vote("NIK1", "Alice" if i % 2 else "Bob") for i in range(10))
    )
    assert sum(r.ok for r in results) == 1
    assert all(isinstance(r.error, DuplicateVote) for r in results if not r.ok)
    assert len(election.get_chain()) == 2
    assert election.total_votes == 1


@pytest.mark.asyncio
async def test_many_voters(election):
    results = await asyncio.gather(
        *(election.cast_vote(f"NIK{i}", "Alice" if i % 3 else "Bob") for i in range(30))
    )
    assert all(r.ok for r in results)
    assert len(election.get_chain()) == 31
    assert election.verify_integrity()
    assert _sum_property(election)


# ─── Tally ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_tally_sorted_and_stable(election):
    election.register_candidate("Citra")
    election.register_candidate("Dewi")
    await election.cast_vote("NIK1", "Dewi")
    await election.cast_vote("NIK2", "Dewi")
    await election.cast_vote("NIK3", "Bob")
    await election.cast_vote("NIK4", "Citra")
    assert election.tally() == [("Dewi", 2), ("Bob", 1), ("Citra", 1), ("Alice", 0)]


@pytest.mark.asyncio
async def test_sum_property_after_every_operation(election):
    steps = [("NIK1", "Alice"), ("NIK1", "Bob"), ("", "Bob"), ("NIK2", "X"), ("NIK2", "Bob")]
    assert _sum_property(election)
    for voter, candidate in steps:
        await election.cast_vote(voter, candidate)
        assert _sum_property(election)


@pytest.mark.asyncio
async def test_recount_matches_tally(election):
    for i in range(7):
        await election.cast_vote(f"NIK{i}", "Bob" if i < 4 else "Alice")
    assert election.recount() == election.tally() == [("Bob", 4), ("Alice", 3)]


@pytest.mark.asyncio
async def test_reads_are_idempotent(election):
    await election.cast_vote("NIK1", "Alice")
    assert election.tally() == election.tally()
    assert election.get_chain() == election.get_chain()
    assert election.list_candidates() == election.list_candidates()


@pytest.mark.asyncio
async def test_list_candidates_returns_copy(election):
    names = election.list_candidates()
    names.append("Mallory")
    assert election.list_candidates() == ["Alice", "Bob"]


# ─── Isolation ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_independent_elections():
    one = await ElectionService.open()
    two = await ElectionService.open()
    one.register_candidate("Alice")
    two.register_candidate("Alice")
    await one.cast_vote("NIK1", "Alice")

    assert (await two.cast_vote("NIK1", "Alice")).ok
    assert one.get_chain()[0] is not two.get_chain()[0]


def test_service_requires_initialized_ledger():
    with pytest.raises(UninitializedLedger):
        ElectionService(LedgerStore())


@pytest.mark.asyncio
async def test_result_unwrap(election):
    assert election.register_candidate("Citra").unwrap() == "Citra"
    with pytest.raises(DuplicateCandidate):
        election.register_candidate("Citra").unwrap()
