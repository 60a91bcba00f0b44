import hashlib

import pytest

from votechain import config


@pytest.fixture(autouse=True)
def reset_votechain_config():
    """Reset config from environment between every test."""
    config.reload()
    yield
    config.reload()


class FakeClock:
    """Deterministic millisecond clock: advances by ``step`` per call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


class FlakyHasher:
    """SHA-256 primitive that can be switched to fail."""

    def __init__(self):
        self.fail = False
        self.calls = 0

    def __call__(self, data: bytes) -> bytes:
        self.calls += 1
        if self.fail:
            raise RuntimeError("digest unavailable")
        return hashlib.sha256(data).digest()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def flaky_hasher():
    return FlakyHasher()
