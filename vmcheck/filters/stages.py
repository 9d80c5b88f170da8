"""Filter stages: single include/exclude rules applied to every triggered alarm.

Each stage looks at one field of a record and reports a StageOutcome for it;
the record's classification then moves according to the transition table in
``vmcheck.models.classification``. A stage given an include list marks
matches as explicitly included and implicitly excludes the rest (unless an
earlier stage already explicitly included them). A stage given an exclude
list explicitly excludes matches and leaves everything else untouched.

Stages trust the caller to pass at most one non-empty list; if both are set
the include list is used. ``FilterPipeline`` validates this before running.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from vmcheck.filters.observer import FilterObserver, NullObserver
from vmcheck.models.alarms import TriggeredAlarm, TriggeredAlarms
from vmcheck.models.classification import StageOutcome


def _non_excluded(alarms: TriggeredAlarms) -> int:
    return len(alarms) - alarms.num_excluded()


def equals_any(value: str, entries: Sequence[str]) -> bool:
    """Case-insensitive exact match of *value* against any entry."""
    value = value.lower()
    return any(value == entry.lower() for entry in entries)


def contains_any(value: str, entries: Sequence[str]) -> bool:
    """Case-insensitive exact or substring match of *value* against any entry."""
    value = value.lower()
    for entry in entries:
        entry = entry.lower()
        if value == entry or entry in value:
            return True
    return False


class FilterStage(ABC):
    """Base class for all filter stages.

    Subclasses set ``stage_id`` (used in logs and metrics) and ``label``
    (recorded as the exclude reason of records this stage excludes).
    """

    stage_id: str = ""
    label: str = ""

    def _classify_all(
        self,
        alarms: TriggeredAlarms,
        observer: FilterObserver,
        outcome_for: Callable[[TriggeredAlarm], StageOutcome],
    ) -> None:
        t_start = time.monotonic()
        non_excluded_before = _non_excluded(alarms)

        for alarm in alarms:
            previous = alarm.classify(outcome_for(alarm), self.label)
            if alarm.classification is not previous:
                observer.alarm_classified(self.stage_id, alarm, previous)

        observer.stage_finished(
            self.stage_id,
            non_excluded_before,
            _non_excluded(alarms),
            time.monotonic() - t_start,
        )


class AcknowledgedStateStage(FilterStage):
    """Explicitly excludes acknowledged alarms unless they are to be evaluated.

    There is no include side: an unacknowledged alarm is left as it is.
    """

    stage_id = "acknowledged_state"
    label = "alarm is acknowledged"

    def run(
        self,
        alarms: TriggeredAlarms,
        evaluate_acknowledged: bool,
        observer: FilterObserver | None = None,
    ) -> None:
        observer = observer or NullObserver()
        if len(alarms) == 0:
            observer.stage_skipped(self.stage_id, "empty collection")
            return
        if evaluate_acknowledged:
            observer.stage_skipped(self.stage_id, "acknowledged alarms are evaluated")
            return

        observer.stage_started(self.stage_id, 0, 0)
        self._classify_all(
            alarms,
            observer,
            lambda alarm: StageOutcome.EXCLUDE_MATCH if alarm.acknowledged else StageOutcome.EXCLUDE_MISS,
        )


class ListFilterStage(FilterStage):
    """A stage driven by an include list or an exclude list."""

    @abstractmethod
    def matches(self, alarm: TriggeredAlarm, entries: Sequence[str]) -> bool:
        """Return True if the stage's field on *alarm* matches any of *entries*."""

    def run(
        self,
        alarms: TriggeredAlarms,
        include: Sequence[str],
        exclude: Sequence[str],
        observer: FilterObserver | None = None,
    ) -> None:
        observer = observer or NullObserver()
        if len(alarms) == 0:
            observer.stage_skipped(self.stage_id, "empty collection")
            return
        if not include and not exclude:
            observer.stage_skipped(self.stage_id, "inclusion and exclusion lists are empty")
            return

        if include:
            entries, hit, miss = include, StageOutcome.INCLUDE_MATCH, StageOutcome.INCLUDE_MISS
            observer.stage_started(self.stage_id, len(include), 0)
        else:
            entries, hit, miss = exclude, StageOutcome.EXCLUDE_MATCH, StageOutcome.EXCLUDE_MISS
            observer.stage_started(self.stage_id, 0, len(exclude))

        self._before_run(observer)
        self._classify_all(
            alarms,
            observer,
            lambda alarm: hit if self.matches(alarm, entries) else miss,
        )

    def _before_run(self, observer: FilterObserver) -> None:
        """Hook for stages that need to report configuration problems."""


class EntityTypeStage(ListFilterStage):
    """Matches the managed object type of the affected entity (e.g. Datastore)."""

    stage_id = "entity_type"
    label = "object type"

    def matches(self, alarm: TriggeredAlarm, entries: Sequence[str]) -> bool:
        return equals_any(alarm.entity_type, entries)


class StatusStage(ListFilterStage):
    """Matches the alarm's overall status color (red, yellow, gray, green)."""

    stage_id = "alarm_status"
    label = "alarm status"

    def matches(self, alarm: TriggeredAlarm, entries: Sequence[str]) -> bool:
        return equals_any(alarm.overall_status, entries)


class ResourcePoolStage(ListFilterStage):
    """Matches any resource pool the affected entity belongs to.

    Entities outside of any pool (datastores, networks) never match, so an
    include pass implicitly excludes them and an exclude pass ignores them.
    """

    stage_id = "resource_pool"
    label = "resource pool"

    def matches(self, alarm: TriggeredAlarm, entries: Sequence[str]) -> bool:
        return any(equals_any(pool, entries) for pool in alarm.entity.resource_pools)


# field keyword -> (stage id, exclude reason, accessor)
_SUBSTRING_FIELDS: dict[str, tuple[str, str, Callable[[TriggeredAlarm], str]]] = {
    "name": ("alarm_name", "alarm name", lambda alarm: alarm.name),
    "description": ("alarm_description", "alarm description", lambda alarm: alarm.description),
    "entity_name": ("entity_name", "entity name", lambda alarm: alarm.entity_name),
}

_DEFAULT_SUBSTRING_FIELD = "name"


class SubstringStage(ListFilterStage):
    """Matches a free-text field by case-insensitive equality or containment.

    ``field`` is one of ``name`` (alarm name), ``description`` (alarm
    description) or ``entity_name``. Any other keyword falls back to the
    alarm name and is reported through the observer as a warning.
    """

    def __init__(self, field: str = _DEFAULT_SUBSTRING_FIELD) -> None:
        self.field = field
        self.unknown_field = field not in _SUBSTRING_FIELDS
        self.stage_id, self.label, self._value_of = _SUBSTRING_FIELDS.get(
            field, _SUBSTRING_FIELDS[_DEFAULT_SUBSTRING_FIELD]
        )

    def matches(self, alarm: TriggeredAlarm, entries: Sequence[str]) -> bool:
        return contains_any(self._value_of(alarm), entries)

    def _before_run(self, observer: FilterObserver) -> None:
        if self.unknown_field:
            observer.warning(
                self.stage_id,
                "unknown_substring_field",
                field=self.field,
                fallback=_DEFAULT_SUBSTRING_FIELD,
            )
