"""
VOTECHAIN — Internationalization Module (i18n).

User-facing text for every outcome of the election service.
Default: English (en)
Supported: Indonesian (id)
"""


from functools import lru_cache

from votechain.exceptions import VotechainError

__all__ = [
    "get_trans",
    "get_supported_languages",
    "message_for",
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
]

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = frozenset({"en", "id"})


def get_supported_languages() -> frozenset[str]:
    """Returns the set of languages officially supported by VOTECHAIN."""
    return SUPPORTED_LANGUAGES


TRANSLATIONS: dict[str, dict[str, str]] = {
    # System Status
    "system_healthy": {
        "en": "healthy",
        "id": "sehat",
    },

    # Candidates
    "candidate_added": {
        "en": 'Candidate "{name}" added successfully.',
        "id": 'Kandidat "{name}" berhasil ditambahkan.',
    },
    "error_empty_name": {
        "en": "Candidate name must not be empty.",
        "id": "Nama kandidat tidak boleh kosong.",
    },
    "error_duplicate_candidate": {
        "en": 'Candidate "{name}" already exists.',
        "id": 'Kandidat "{name}" sudah ada.',
    },

    # Votes
    "vote_recorded": {
        "en": 'Vote for "{candidate}" recorded!',
        "id": 'Suara untuk "{candidate}" berhasil dicatat!',
    },
    "error_empty_voter_id": {
        "en": "Please enter your voter ID.",
        "id": "Mohon masukkan NIK Anda.",
    },
    "error_no_candidate_selected": {
        "en": "Please select a candidate.",
        "id": "Mohon pilih seorang kandidat.",
    },
    "error_duplicate_vote": {
        "en": "This voter ID has already been used. Double voting is not allowed.",
        "id": "NIK ini sudah digunakan untuk memilih. Suara ganda tidak diizinkan.",
    },
    "error_ledger_append_failed": {
        "en": "An error occurred while processing your vote.",
        "id": "Terjadi kesalahan saat memproses suara Anda.",
    },

    # Ledger
    "error_uninitialized_ledger": {
        "en": "The ledger has not been initialized.",
        "id": "Buku besar belum diinisialisasi.",
    },
    "error_ledger_already_initialized": {
        "en": "The ledger already has a genesis block.",
        "id": "Buku besar sudah memiliki blok genesis.",
    },
    "ledger_valid": {
        "en": "Chain integrity: OK ({count} blocks)",
        "id": "Integritas rantai: OK ({count} blok)",
    },
    "ledger_invalid": {
        "en": "Chain integrity: FAILED",
        "id": "Integritas rantai: GAGAL",
    },

    # Results
    "results_empty": {
        "en": "No candidates added yet.",
        "id": "Belum ada kandidat ditambahkan.",
    },
    "results_line": {
        "en": "{name} - {count} votes",
        "id": "{name} - {count} suara",
    },
    "block_title": {
        "en": "Block #{index}",
        "id": "Blok #{index}",
    },

    "error_invalid_input": {
        "en": "Invalid input provided.",
        "id": "Masukan tidak valid.",
    },
    "error_unexpected": {
        "en": "An unexpected server error occurred.",
        "id": "Terjadi kesalahan server yang tidak terduga.",
    },
}


@lru_cache(maxsize=256)
def _normalize_lang(lang: str | None) -> str:
    """Reduce an Accept-Language value to a supported two-letter code."""
    if not lang:
        return DEFAULT_LANGUAGE
    # "id-ID,id;q=0.9,en;q=0.8" -> "id"
    code = lang.split(",")[0].split(";")[0].split("-")[0].strip().lower()
    return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_trans(key: str, lang: str | None = DEFAULT_LANGUAGE, **params) -> str:
    """Translate ``key`` into ``lang``, formatting ``params`` into it.

    Unknown keys come back unchanged; unknown languages fall back to English.
    """
    entry = TRANSLATIONS.get(key)
    if entry is None:
        return key
    text = entry.get(_normalize_lang(lang)) or entry[DEFAULT_LANGUAGE]
    if params:
        try:
            return text.format(**params)
        except KeyError:
            return text
    return text


def message_for(error: VotechainError, lang: str | None = DEFAULT_LANGUAGE) -> str:
    """Localized text for a service error."""
    return get_trans(error.message_key, lang, **error.params)
