"""Triggered alarm records and the collection the filter pipeline works on."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime

from vmcheck.errors import AlarmNotFoundError
from vmcheck.models.classification import Classification, StageOutcome, apply, sets_exclude_reason


def _casefold_sorted(values: Iterable[str]) -> list[str]:
    return sorted(values, key=str.lower)


@dataclass(frozen=True)
class ManagedObjectRef:
    """Managed Object Reference: the type keyword and the MOID value."""

    type: str
    value: str


@dataclass(frozen=True)
class AlarmEntity:
    """The inventory object a triggered alarm fired against.

    For a triggered "Datastore usage on disk" alarm this is the datastore.
    """

    name: str
    ref: ManagedObjectRef
    overall_status: str = ""
    resource_pools: list[str] = field(default_factory=list)  # self and parent; empty for datastores etc.


@dataclass
class TriggeredAlarm:
    """A live alarm instance together with its affected entity.

    Built fresh for every check run. Descriptive fields are never changed
    after construction; ``classification`` and ``exclude_reason`` are written
    only by the filter pipeline through ``classify()``.
    """

    key: str
    name: str
    entity: AlarmEntity
    alarm_ref: ManagedObjectRef
    overall_status: str
    description: str = ""
    datacenter: str = ""
    triggered_at: datetime | None = None
    acknowledged: bool = False
    acknowledged_at: datetime | None = None
    acknowledged_by: str = ""
    classification: Classification = Classification.UNDECIDED
    exclude_reason: str = ""

    @property
    def entity_name(self) -> str:
        return self.entity.name

    @property
    def entity_type(self) -> str:
        return self.entity.ref.type

    @property
    def excluded(self) -> bool:
        """True if implicitly (for now) or explicitly (permanently) excluded."""
        return self.classification.excluded

    @property
    def explicitly_included(self) -> bool:
        return self.classification is Classification.EXPLICITLY_INCLUDED

    @property
    def explicitly_excluded(self) -> bool:
        return self.classification is Classification.EXPLICITLY_EXCLUDED

    def classify(self, outcome: StageOutcome, reason: str) -> Classification:
        """Apply a stage outcome and return the classification held before it."""
        previous = self.classification
        if sets_exclude_reason(previous, outcome):
            self.exclude_reason = reason
        self.classification = apply(previous, outcome)
        if not self.classification.excluded:
            self.exclude_reason = ""
        return previous


class TriggeredAlarms:
    """Ordered collection of triggered alarms across one or more datacenters.

    The filter pipeline never drops records from the collection; it only
    reclassifies them, so every query here sees the full set.
    """

    def __init__(self, alarms: Iterable[TriggeredAlarm] = ()) -> None:
        self._alarms: list[TriggeredAlarm] = list(alarms)

    def __iter__(self) -> Iterator[TriggeredAlarm]:
        return iter(self._alarms)

    def __len__(self) -> int:
        return len(self._alarms)

    def __getitem__(self, index: int) -> TriggeredAlarm:
        return self._alarms[index]

    def __repr__(self) -> str:
        return f"TriggeredAlarms({len(self._alarms)} alarms, {self.num_excluded()} excluded)"

    def num_excluded(self) -> int:
        """Number of alarms implicitly or explicitly excluded."""
        return sum(1 for alarm in self._alarms if alarm.excluded)

    def num_excluded_final(self) -> int:
        """Number of alarms explicitly excluded from further evaluation."""
        return sum(1 for alarm in self._alarms if alarm.explicitly_excluded)

    def get_by_key(self, key: str) -> TriggeredAlarm:
        """Return the alarm with *key*.

        Raises:
            AlarmNotFoundError: no alarm in the collection has this key.
        """
        for alarm in self._alarms:
            if alarm.key == key:
                return alarm
        raise AlarmNotFoundError(key)

    def count_per_datacenter(self) -> dict[str, int]:
        return dict(Counter(alarm.datacenter for alarm in self._alarms))

    def keys(self, evaluate_acknowledged: bool = False, evaluate_excluded: bool = False) -> list[str]:
        """Keys of the alarms in the collection, sorted case-insensitively.

        Acknowledged alarms are skipped unless *evaluate_acknowledged* is set,
        excluded alarms unless *evaluate_excluded* is set.
        """
        keys = []
        for alarm in self._alarms:
            if alarm.acknowledged and not evaluate_acknowledged:
                continue
            if alarm.excluded and not evaluate_excluded:
                continue
            keys.append(alarm.key)
        return _casefold_sorted(keys)

    def keys_excluded(self) -> list[str]:
        return _casefold_sorted(alarm.key for alarm in self._alarms if alarm.excluded)

    def datacenters(self) -> list[str]:
        return _casefold_sorted({alarm.datacenter for alarm in self._alarms})

    def resource_pools(self) -> list[str]:
        return _casefold_sorted({pool for alarm in self._alarms for pool in alarm.entity.resource_pools})
