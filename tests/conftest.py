"""
Shared fixtures for crossauth tests.
"""

import pytest

from crossauth import CredentialAuthority

T0 = 1_700_000_000
SECRET = "topsecret"


class FrozenClock:
    """Manually advanced time source."""

    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Provide a clock frozen at T0."""
    return FrozenClock()


@pytest.fixture
def secret():
    return SECRET


@pytest.fixture
def authority(secret, clock):
    """Provide a legacy-compatible authority using the frozen clock."""
    return CredentialAuthority(secret, clock=clock)
