"""
Shared fixtures for service tests.
"""

import asyncio

import pytest

from fxconvert.domain.exceptions import ProviderUnavailableError


class StubProvider:
    """
    Stands in for a RateProvider. ``outcomes`` is consumed one item per fetch;
    an exception instance is raised, anything else is returned. The last
    outcome repeats once the list runs out.
    """

    def __init__(self, name, *outcomes):
        self.name = name
        self.url_template = f"https://{name.lower()}.example.com/latest/"
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    async def fetch(self, base_currency):
        self.calls.append(base_currency)
        # Yield so concurrent callers interleave like real network calls
        await asyncio.sleep(0)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self):
        self.closed = True


def down(name, status=503):
    return ProviderUnavailableError(name, status=status)


@pytest.fixture
def stub_provider():
    return StubProvider
