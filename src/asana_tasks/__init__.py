"""Async client for the Asana tasks API."""

from .client import Client
from .core.models import Request, Verb
from .core.ports import Dispatcher
from .errors import (
    ApiError,
    AsanaTasksError,
    ConfigurationError,
    ForbiddenError,
    InvalidIdentifierError,
    InvalidRequestError,
    NoAuthorizationError,
    NotFoundError,
    PremiumOnlyError,
    RateLimitEnforcedError,
    ServerError,
)
from .http.dispatcher import HttpDispatcher
from .resources.tasks import Tasks

__all__ = [
    "ApiError",
    "AsanaTasksError",
    "Client",
    "ConfigurationError",
    "Dispatcher",
    "ForbiddenError",
    "HttpDispatcher",
    "InvalidIdentifierError",
    "InvalidRequestError",
    "NoAuthorizationError",
    "NotFoundError",
    "PremiumOnlyError",
    "RateLimitEnforcedError",
    "Request",
    "ServerError",
    "Tasks",
    "Verb",
]
