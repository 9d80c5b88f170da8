"""Severity aggregation over a filtered collection of triggered alarms.

Every alarm's overall status color maps to a Nagios service state; the
collection's state is the worst state among eligible alarms, using the total
order OK < WARNING < UNKNOWN < CRITICAL. An unrecognized color counts as
CRITICAL so that a bad value can never hide a problem.
"""

from __future__ import annotations

from collections.abc import Iterator

from vmcheck.models.alarms import TriggeredAlarm, TriggeredAlarms
from vmcheck.models.states import ManagedEntityStatus, ServiceState
from vmcheck.observability.logging import get_logger

_logger = get_logger("severity")

_STATUS_STATES: dict[str, ServiceState] = {
    ManagedEntityStatus.GRAY: ServiceState.UNKNOWN,
    ManagedEntityStatus.GREEN: ServiceState.OK,
    ManagedEntityStatus.YELLOW: ServiceState.WARNING,
    ManagedEntityStatus.RED: ServiceState.CRITICAL,
}


def entity_status_to_state(status: str) -> ServiceState:
    """Convert a managed entity status color (e.g. "red") to a service state."""
    state = _STATUS_STATES.get(status.lower())
    if state is None:
        _logger.warning("unknown_entity_status", status=status, assumed=ServiceState.CRITICAL.value)
        return ServiceState.CRITICAL
    return state


class SeverityAggregator:
    """Answers severity questions about a collection.

    With ``include_excluded`` false (the default) only alarms that survived
    filtering are considered; with it true every alarm is, which is useful
    for diagnostics. Filtering must already have run.
    """

    def __init__(self, alarms: TriggeredAlarms, include_excluded: bool = False) -> None:
        self._alarms = alarms
        self._include_excluded = include_excluded

    def _eligible_states(self) -> Iterator[ServiceState]:
        for alarm in self._alarms:
            if alarm.excluded and not self._include_excluded:
                continue
            yield alarm_state(alarm)

    def has_state(self, state: ServiceState) -> bool:
        return any(s is state for s in self._eligible_states())

    def count_state(self, state: ServiceState) -> int:
        return sum(1 for s in self._eligible_states() if s is state)

    def is_ok(self) -> bool:
        """True if no eligible alarm is WARNING, UNKNOWN or CRITICAL."""
        return all(s is ServiceState.OK for s in self._eligible_states())

    def overall_state(self) -> ServiceState:
        """Worst state among eligible alarms; OK when there are none."""
        return max(self._eligible_states(), key=lambda s: s.rank, default=ServiceState.OK)

    def counts(self) -> dict[ServiceState, int]:
        counts = dict.fromkeys(ServiceState, 0)
        for state in self._eligible_states():
            counts[state] += 1
        return counts


def alarm_state(alarm: TriggeredAlarm) -> ServiceState:
    return entity_status_to_state(alarm.overall_status)
