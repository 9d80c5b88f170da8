"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from vmcheck.errors import FilterConfigError

# dimension -> (include option, exclude option) as named in configuration
FILTER_DIMENSIONS: dict[str, tuple[str, str]] = {
    "entity_types": ("include-entity-type", "exclude-entity-type"),
    "entity_names": ("include-entity-name", "exclude-entity-name"),
    "resource_pools": ("include-entity-rp", "exclude-entity-rp"),
    "alarm_names": ("include-name", "exclude-name"),
    "alarm_descriptions": ("include-desc", "exclude-desc"),
    "alarm_statuses": ("include-status", "exclude-status"),
}


@dataclass(frozen=True)
class AlarmFilters:
    """Operator-supplied include/exclude lists for triggered alarms.

    Every list defaults to empty, meaning no restriction. At most one of the
    include or exclude list may be set per dimension; construction fails
    otherwise.
    """

    included_entity_types: list[str] = field(default_factory=list)
    excluded_entity_types: list[str] = field(default_factory=list)
    included_entity_names: list[str] = field(default_factory=list)
    excluded_entity_names: list[str] = field(default_factory=list)
    included_resource_pools: list[str] = field(default_factory=list)
    excluded_resource_pools: list[str] = field(default_factory=list)
    included_alarm_names: list[str] = field(default_factory=list)
    excluded_alarm_names: list[str] = field(default_factory=list)
    included_alarm_descriptions: list[str] = field(default_factory=list)
    excluded_alarm_descriptions: list[str] = field(default_factory=list)
    included_alarm_statuses: list[str] = field(default_factory=list)
    excluded_alarm_statuses: list[str] = field(default_factory=list)
    evaluate_acknowledged_alarms: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def lists_for(self, dimension: str) -> tuple[list[str], list[str]]:
        """Return the (include, exclude) pair for *dimension*."""
        return getattr(self, f"included_{dimension}"), getattr(self, f"excluded_{dimension}")

    def validate(self) -> None:
        """Raise FilterConfigError if any dimension sets both lists."""
        for dimension, (include_option, exclude_option) in FILTER_DIMENSIONS.items():
            include, exclude = self.lists_for(dimension)
            if include and exclude:
                raise FilterConfigError(dimension, include_option, exclude_option)


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class VMCheckConfig:
    """Top-level vmcheck configuration."""

    filters: AlarmFilters = field(default_factory=AlarmFilters)
    log: LogConfig = field(default_factory=LogConfig)
