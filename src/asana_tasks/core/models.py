# src/asana_tasks/core/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

Record = dict[str, Any]
# One JSON object from the API ("data" envelope already removed).

Payload = Mapping[str, Any]
# Request body fields (POST/PUT) or query params (GET).


class Verb(StrEnum):
    """Dispatch primitive selected by a router operation."""

    GET = "GET"
    GET_COLLECTION = "GET_COLLECTION"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def http_method(self) -> str:
        if self is Verb.GET_COLLECTION:
            return "GET"
        return self.value


@dataclass(frozen=True, slots=True)
class Request:
    """
    Per-call request descriptor.

    Built right before dispatch and dropped afterwards; nothing keeps these around
    except test fakes that record them.
    """

    verb: Verb
    path: str
    payload: Payload | None = None
