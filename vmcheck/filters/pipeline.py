"""Filter pipeline: the fixed sequence of stages applied to triggered alarms.

Stage order is part of the contract. Later stages only implicitly exclude
records no earlier stage explicitly included, and nothing resurrects a
record an earlier stage explicitly excluded, so reordering stages changes
results:

    1. acknowledged state   (explicit exclude only)
    2. entity type
    3. alarm name           (substring)
    4. alarm description    (substring)
    5. alarm status
    6. entity name          (substring)
    7. resource pool
"""

from __future__ import annotations

from collections.abc import Sequence

from vmcheck.filters.observer import FilterObserver, NullObserver
from vmcheck.filters.stages import (
    AcknowledgedStateStage,
    EntityTypeStage,
    ResourcePoolStage,
    StatusStage,
    SubstringStage,
)
from vmcheck.models.alarms import TriggeredAlarms
from vmcheck.models.config import AlarmFilters


class FilterPipeline:
    """Classifies every alarm in a collection as included or excluded.

    The pipeline mutates the records in place and returns nothing. Running it
    again with the same filters leaves every classification unchanged.
    """

    def __init__(self, observer: FilterObserver | None = None) -> None:
        self._observer = observer or NullObserver()
        self._acknowledged = AcknowledgedStateStage()
        self._entity_type = EntityTypeStage()
        self._alarm_name = SubstringStage("name")
        self._alarm_description = SubstringStage("description")
        self._status = StatusStage()
        self._entity_name = SubstringStage("entity_name")
        self._resource_pool = ResourcePoolStage()

    def filter(self, alarms: TriggeredAlarms, filters: AlarmFilters) -> None:
        """Run all stages in order against *alarms*.

        Raises:
            FilterConfigError: *filters* sets both an include and an exclude
                list for the same dimension. Raised before any record changes.
        """
        filters.validate()

        self.filter_by_acknowledged_state(alarms, filters.evaluate_acknowledged_alarms)
        self._entity_type.run(
            alarms, filters.included_entity_types, filters.excluded_entity_types, self._observer
        )
        self._alarm_name.run(
            alarms, filters.included_alarm_names, filters.excluded_alarm_names, self._observer
        )
        self._alarm_description.run(
            alarms,
            filters.included_alarm_descriptions,
            filters.excluded_alarm_descriptions,
            self._observer,
        )
        self._status.run(
            alarms, filters.included_alarm_statuses, filters.excluded_alarm_statuses, self._observer
        )
        self._entity_name.run(
            alarms, filters.included_entity_names, filters.excluded_entity_names, self._observer
        )
        self._resource_pool.run(
            alarms, filters.included_resource_pools, filters.excluded_resource_pools, self._observer
        )

    # ------------------------------------------------------------------
    # Single-stage entry points
    # ------------------------------------------------------------------

    def filter_by_acknowledged_state(self, alarms: TriggeredAlarms, evaluate_acknowledged: bool) -> None:
        """Explicitly exclude acknowledged alarms unless *evaluate_acknowledged* is set."""
        self._acknowledged.run(alarms, evaluate_acknowledged, self._observer)

    def filter_by_included_entity_type(self, alarms: TriggeredAlarms, include: Sequence[str]) -> None:
        self._entity_type.run(alarms, include, (), self._observer)

    def filter_by_excluded_entity_type(self, alarms: TriggeredAlarms, exclude: Sequence[str]) -> None:
        self._entity_type.run(alarms, (), exclude, self._observer)

    def filter_by_included_name_substring(self, alarms: TriggeredAlarms, include: Sequence[str]) -> None:
        self._alarm_name.run(alarms, include, (), self._observer)

    def filter_by_excluded_name_substring(self, alarms: TriggeredAlarms, exclude: Sequence[str]) -> None:
        self._alarm_name.run(alarms, (), exclude, self._observer)

    def filter_by_included_description_substring(
        self, alarms: TriggeredAlarms, include: Sequence[str]
    ) -> None:
        self._alarm_description.run(alarms, include, (), self._observer)

    def filter_by_excluded_description_substring(
        self, alarms: TriggeredAlarms, exclude: Sequence[str]
    ) -> None:
        self._alarm_description.run(alarms, (), exclude, self._observer)

    def filter_by_included_status(self, alarms: TriggeredAlarms, include: Sequence[str]) -> None:
        self._status.run(alarms, include, (), self._observer)

    def filter_by_excluded_status(self, alarms: TriggeredAlarms, exclude: Sequence[str]) -> None:
        self._status.run(alarms, (), exclude, self._observer)

    def filter_by_included_entity_name_substring(
        self, alarms: TriggeredAlarms, include: Sequence[str]
    ) -> None:
        self._entity_name.run(alarms, include, (), self._observer)

    def filter_by_excluded_entity_name_substring(
        self, alarms: TriggeredAlarms, exclude: Sequence[str]
    ) -> None:
        self._entity_name.run(alarms, (), exclude, self._observer)

    def filter_by_included_resource_pool(self, alarms: TriggeredAlarms, include: Sequence[str]) -> None:
        self._resource_pool.run(alarms, include, (), self._observer)

    def filter_by_excluded_resource_pool(self, alarms: TriggeredAlarms, exclude: Sequence[str]) -> None:
        self._resource_pool.run(alarms, (), exclude, self._observer)
