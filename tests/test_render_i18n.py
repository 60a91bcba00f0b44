"""Tests for localized messages and display projections."""

from datetime import timezone

import pytest

from votechain.election import ElectionService
from votechain.exceptions import DuplicateCandidate, DuplicateVote
from votechain.i18n import get_supported_languages, get_trans, message_for
from votechain.render import chain_view, format_timestamp, results_view, short_hash


class TestTranslations:
    def test_default_english(self):
        assert get_trans("error_empty_name") == "Candidate name must not be empty."

    def test_indonesian(self):
        assert get_trans("error_empty_voter_id", "id") == "Mohon masukkan NIK Anda."

    def test_accept_language_header(self):
        assert get_trans("results_empty", "id-ID,id;q=0.9,en;q=0.8") == "Belum ada kandidat ditambahkan."

    def test_unknown_language_falls_back(self):
        assert get_trans("results_empty", "fr") == "No candidates added yet."

    def test_unknown_key(self):
        assert get_trans("no_such_key") == "no_such_key"

    def test_params(self):
        assert get_trans("results_line", "en", name="Alice", count=3) == "Alice - 3 votes"

    def test_every_key_has_all_languages(self):
        from votechain.i18n import TRANSLATIONS

        for key, entry in TRANSLATIONS.items():
            assert set(entry) == set(get_supported_languages()), key

    def test_message_for_error(self):
        err = DuplicateCandidate("exists", name="Alice")
        assert message_for(err, "id") == 'Kandidat "Alice" sudah ada.'
        assert message_for(DuplicateVote(), "en").startswith("This voter ID")


class TestRender:
    def test_results_view(self):
        assert results_view([("Alice", 2), ("Bob", 0)]) == ["Alice - 2 votes", "Bob - 0 votes"]
        assert results_view([], "id") == ["Belum ada kandidat ditambahkan."]

    def test_short_hash(self):
        assert short_hash("a" * 64) == "a" * 20 + "..."

    def test_format_timestamp_utc(self):
        assert format_timestamp(0, timezone.utc) == "1970-01-01 00:00:00"

    @pytest.mark.asyncio
    async def test_chain_view_newest_first(self, clock):
        election = await ElectionService.open(clock=clock)
        election.register_candidate("Alice")
        await election.cast_vote("NIK1", "Alice")

        views = chain_view(election.get_chain(), "id", timezone.utc)
        assert [v.index for v in views] == [1, 0]
        assert views[0].title == "Blok #1"
        assert '"voter_id": "NIK1"' in views[0].data
        assert views[1].data == "Genesis Block"
        assert views[1].previous_hash == "0" * 20 + "..."
        assert views[0].hash == election.get_chain()[1].hash[:20] + "..."
