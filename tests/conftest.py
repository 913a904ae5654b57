# tests/conftest.py

from __future__ import annotations

import pytest

from asana_tasks.config import Settings
from asana_tasks.resources.tasks import Tasks

from .fakes import FakeDispatcher


@pytest.fixture()
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture()
def tasks(dispatcher: FakeDispatcher) -> Tasks:
    return Tasks(dispatcher)


@pytest.fixture()
def settings() -> Settings:
    """
    Explicit Settings rather than Settings.from_env(), so a developer's .env
    or shell environment can't leak into tests.
    """
    return Settings(
        access_token="test-token",
        base_url="https://app.asana.com/api/1.0",
        timeout_seconds=5.0,
        page_size=2,
        item_limit=None,
        max_retries=2,
        log_level="INFO",
        log_dir=None,
    )
