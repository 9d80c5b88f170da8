"""Audit observers for the filter pipeline.

FilterObserver  -- ABC the pipeline reports stage progress and record
                   transitions to.
NullObserver    -- Discards everything; the pipeline default.
LoggingObserver -- Emits structlog events and records Prometheus metrics.

Observers are never load-bearing: classification results do not depend on
which observer is installed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog

from vmcheck.models.alarms import TriggeredAlarm
from vmcheck.models.classification import Classification
from vmcheck.observability.logging import get_logger
from vmcheck.observability.metrics import filter_stage_duration_seconds, filter_transitions_total


class FilterObserver(ABC):
    """Receives audit events from filter stages."""

    @abstractmethod
    def stage_started(self, stage_id: str, num_include: int, num_exclude: int) -> None:
        """A stage is about to classify the collection.

        Both counts are zero for a stage driven by a flag rather than a list.
        """

    @abstractmethod
    def stage_skipped(self, stage_id: str, reason: str) -> None:
        """A stage had nothing to do (empty collection or no lists)."""

    @abstractmethod
    def alarm_classified(self, stage_id: str, alarm: TriggeredAlarm, previous: Classification) -> None:
        """*alarm* moved from *previous* to ``alarm.classification``."""

    @abstractmethod
    def stage_finished(
        self,
        stage_id: str,
        non_excluded_before: int,
        non_excluded_after: int,
        duration_seconds: float,
    ) -> None:
        """A stage finished classifying the collection."""

    @abstractmethod
    def warning(self, stage_id: str, message: str, **details: object) -> None:
        """A stage hit a recoverable problem and applied a fallback."""


class NullObserver(FilterObserver):
    """Observer that ignores every event."""

    def stage_started(self, stage_id: str, num_include: int, num_exclude: int) -> None:
        pass

    def stage_skipped(self, stage_id: str, reason: str) -> None:
        pass

    def alarm_classified(self, stage_id: str, alarm: TriggeredAlarm, previous: Classification) -> None:
        pass

    def stage_finished(
        self,
        stage_id: str,
        non_excluded_before: int,
        non_excluded_after: int,
        duration_seconds: float,
    ) -> None:
        pass

    def warning(self, stage_id: str, message: str, **details: object) -> None:
        pass


class LoggingObserver(FilterObserver):
    """Observer writing structured audit logs and filter metrics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger or get_logger("filters")

    def stage_started(self, stage_id: str, num_include: int, num_exclude: int) -> None:
        if num_include:
            mode = "include"
        elif num_exclude:
            mode = "exclude"
        else:
            mode = "flag"
        self._log.debug(
            "filter_stage_started",
            stage=stage_id,
            mode=mode,
            entries=num_include or num_exclude,
        )

    def stage_skipped(self, stage_id: str, reason: str) -> None:
        self._log.debug("filter_stage_skipped", stage=stage_id, reason=reason)

    def alarm_classified(self, stage_id: str, alarm: TriggeredAlarm, previous: Classification) -> None:
        current = alarm.classification
        filter_transitions_total.labels(stage=stage_id, classification=current.value).inc()

        # explicit unless the record merely missed an include list
        explicit = current is not Classification.IMPLICITLY_EXCLUDED
        self._log.debug(
            "alarm_marked",
            stage=stage_id,
            marked="excluded" if current.excluded else "included",
            explicit=explicit,
            previous=previous.value,
            key=alarm.key,
            status=alarm.overall_status,
            entity=alarm.entity_name,
            entity_type=alarm.entity_type,
            alarm=alarm.name,
        )

    def stage_finished(
        self,
        stage_id: str,
        non_excluded_before: int,
        non_excluded_after: int,
        duration_seconds: float,
    ) -> None:
        filter_stage_duration_seconds.labels(stage=stage_id).observe(duration_seconds)
        self._log.info(
            "filter_stage_finished",
            stage=stage_id,
            non_excluded_before=non_excluded_before,
            non_excluded_after=non_excluded_after,
            duration_ms=round(duration_seconds * 1000.0, 3),
        )

    def warning(self, stage_id: str, message: str, **details: object) -> None:
        self._log.warning(message, stage=stage_id, **details)
