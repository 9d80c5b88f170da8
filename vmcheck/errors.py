"""Exceptions raised by vmcheck components."""

from __future__ import annotations

ALARM_NOT_EXCLUDED_MESSAGE = "alarm detected and not excluded from evaluation"


class VMCheckError(Exception):
    """Base class for all vmcheck errors."""


class AlarmNotFoundError(VMCheckError, KeyError):
    """Raised when a key does not match any triggered alarm in a collection."""

    def __init__(self, key: str) -> None:
        super().__init__(f"provided key does not match a triggered alarm in this collection: {key}")
        self.key = key

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class FilterConfigError(VMCheckError, ValueError):
    """Raised when an include and an exclude list are both set for one filter dimension."""

    def __init__(self, dimension: str, include_option: str, exclude_option: str) -> None:
        super().__init__(f"only one of {include_option!r} or {exclude_option!r} may be specified")
        self.dimension = dimension


class CollectorError(VMCheckError, ValueError):
    """Raised when raw triggered alarm data cannot be turned into records."""
