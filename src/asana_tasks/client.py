# src/asana_tasks/client.py

"""
Composition root.

Wires a Dispatcher into the resource routers. Build it from settings for the
real API, or hand it any object that satisfies the Dispatcher port.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import Settings, get_settings
from .core.ports import Dispatcher
from .http.dispatcher import HttpDispatcher
from .resources.tasks import Tasks

logger = logging.getLogger(__name__)


class Client:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher
        self.tasks = Tasks(dispatcher)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **dispatcher_kwargs: Any) -> "Client":
        """
        Build an httpx-backed client.

        Keeping settings injectable avoids hidden global config reads in tests.
        If settings is None, falls back to get_settings().
        """
        if settings is None:
            settings = get_settings()
        dispatcher = HttpDispatcher.from_settings(settings, **dispatcher_kwargs)
        logger.debug("Client ready for %s", settings.base_url)
        return cls(dispatcher)

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        close = getattr(self.dispatcher, "aclose", None)
        if callable(close):
            await close()
