"""Shared fixtures for tollhouse tests."""

from collections.abc import Iterator

import pytest

from tollhouse.security.audit import set_security_event_sink


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_security_sink() -> Iterator[None]:
    yield
    set_security_event_sink(None)
