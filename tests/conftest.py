# tests/conftest.py
import asyncio

import pytest

from airtop_mcp.backend import ApiResponse
from airtop_mcp.context import build_context

## We DO NOT want to use pytest-asyncio.
## Instead, use event_loop.run_until_complete()!


@pytest.fixture(scope="function")
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


DEFAULT_RESPONSES = {
    "sessions.create": ApiResponse(data={"id": "sess-1", "status": "running"}),
    "sessions.terminate": ApiResponse(data=None),
    "sessions.save_profile_on_termination": ApiResponse(data=None),
    "windows.create": ApiResponse(data={"windowId": "win-1"}),
}


class _Namespace:
    """Records every call made through ``backend.<prefix>.<method>(...)``."""

    def __init__(self, prefix, backend):
        self._prefix = prefix
        self._backend = backend

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        key = f"{self._prefix}.{name}"

        async def call(*args, **kwargs):
            self._backend.calls.append((key, args, kwargs))
            result = self._backend.responses.get(key)
            if result is None:
                result = DEFAULT_RESPONSES.get(key, ApiResponse(data={"ok": True}))
            if isinstance(result, BaseException):
                raise result
            if callable(result):
                return await result(*args, **kwargs)
            return result

        return call


class FakeBackend:
    """
    Stand-in for AirtopClient. Set ``responses["windows.click"]`` to an
    ApiResponse, an exception or an async function to control what a call
    produces.
    """

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.closed = False
        self.sessions = _Namespace("sessions", self)
        self.windows = _Namespace("windows", self)

    def called(self, key):
        return [(args, kwargs) for name, args, kwargs in self.calls if name == key]

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def gateway_config():
    return {"api_key": "test-key", "host": "127.0.0.1", "port": 3456, "log_level": "INFO"}


@pytest.fixture
def gateway_context(gateway_config, fake_backend):
    return build_context(gateway_config, backend=fake_backend)
