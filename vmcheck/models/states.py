"""Status and service-state enumerations."""

from __future__ import annotations

from enum import StrEnum


class ManagedEntityStatus(StrEnum):
    """vSphere overall status color of an alarm or managed entity."""

    GRAY = "gray"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class ServiceState(StrEnum):
    """Nagios service state a check reports."""

    OK = "OK"
    WARNING = "WARNING"
    UNKNOWN = "UNKNOWN"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Position in the total order OK < WARNING < UNKNOWN < CRITICAL."""
        return _STATE_RANK[self]


_STATE_RANK: dict[ServiceState, int] = {
    ServiceState.OK: 0,
    ServiceState.WARNING: 1,
    ServiceState.UNKNOWN: 2,
    ServiceState.CRITICAL: 3,
}
