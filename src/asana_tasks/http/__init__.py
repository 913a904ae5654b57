from .dispatcher import HttpDispatcher

__all__ = ["HttpDispatcher"]
