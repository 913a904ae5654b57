# src/asana_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the resource routers.

Routers depend on a Dispatcher Protocol instead of a concrete HTTP client.
Any object with these five methods works: the httpx-backed HttpDispatcher,
a test fake, or a caching wrapper.
"""

from typing import Awaitable, Protocol

from .models import Payload, Record


class Dispatcher(Protocol):
    """
    Transport/auth/serialization side of the client.

    Every method returns an awaitable; routers hand it back to the caller untouched.
    get_collection may follow pagination internally.
    """

    def get(self, path: str, params: Payload | None = None) -> Awaitable[Record]: ...

    def get_collection(self, path: str, params: Payload | None = None) -> Awaitable[list[Record]]: ...

    def post(self, path: str, data: Payload | None = None) -> Awaitable[Record]: ...

    def put(self, path: str, data: Payload | None = None) -> Awaitable[Record]: ...

    def delete(self, path: str) -> Awaitable[Record]: ...
