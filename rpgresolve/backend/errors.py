"""Error taxonomy for the resolution engines."""

from __future__ import annotations


class ResolutionError(Exception):
    """Base class for contract violations raised by the engines."""


class InvalidInput(ResolutionError, ValueError):
    """A value lies outside its declared range."""


class InvalidTransition(ResolutionError):
    """An operation was invoked in a phase that does not permit it."""

    def __init__(self, operation: str, phase: str) -> None:
        super().__init__(f"{operation} is not allowed in phase '{phase}'")
        self.operation = operation
        self.phase = phase
