import asyncio
import pytest

from services.relay_service.app.schemas.relay import ProviderResult


class StubAdapter:
    """Adapter stand-in that records calls into a shared log."""

    def __init__(self, name, reply=None, error=None, raises=None, log=None):
        self.name = name
        self.model = "stub"
        self.reply = reply
        self.error = error
        self.raises = raises
        self.calls = []
        self.log = log if log is not None else []

    async def complete(self, prompt):
        self.calls.append(prompt)
        self.log.append(self.name)
        if self.raises is not None:
            raise self.raises
        if self.reply is not None:
            return ProviderResult(success=True, data=self.reply, provider=self.name)
        return ProviderResult(success=False, error=self.error or "failed", provider=self.name)


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def make_adapter(call_log):
    def factory(name, **kwargs):
        return StubAdapter(name, log=call_log, **kwargs)

    return factory


@pytest.fixture
def run():
    return asyncio.run
