# src/asana_tasks/resources/base.py

from __future__ import annotations

from typing import Any

from ..core.ports import Dispatcher
from ..errors import InvalidIdentifierError


def check_identifier(name: str, value: Any) -> int:
    """Accept plain ints only (bool is an int subclass but never a valid handle)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIdentifierError(name, value)
    return value


class Resource:
    """
    Shared plumbing for resource routers.

    Holds a non-owning reference to the dispatcher; subclasses only format paths
    and pick a dispatch method.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    @staticmethod
    def _path(template: str, **ids: Any) -> str:
        # Identifier slots are the only place caller data enters a path.
        checked = {name: check_identifier(name, value) for name, value in ids.items()}
        return template.format(**{name: "%d" % value for name, value in checked.items()})
