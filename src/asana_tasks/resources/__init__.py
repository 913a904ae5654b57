from .base import Resource
from .tasks import Tasks

__all__ = ["Resource", "Tasks"]
