"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from vmcheck.models.config import AlarmFilters, LogConfig, VMCheckConfig
from vmcheck.observability.logging import get_logger

_logger = get_logger("config")

# accepted status keyword -> managed entity status color
ALARM_STATUS_KEYWORDS: dict[str, str] = {
    "red": "red",
    "critical": "red",
    "yellow": "yellow",
    "warning": "yellow",
    "green": "green",
    "ok": "green",
    "gray": "gray",
    "unknown": "gray",
}

# alarms clear instead of triggering in this color; a filter on it never matches
_CLEARED_STATUS = "green"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off", ""})
_LOG_LEVELS = ("debug", "info", "warning", "error")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"VMCHECK_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    raw = _env(key, str(default)).strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"VMCHECK_{key}: expected a boolean (true/false, 1/0, yes/no, on/off), got {raw!r}")


def _env_list(key: str) -> list[str]:
    return [item.strip() for item in _env(key).split(",") if item.strip()]


def _validate_log_level(value: str) -> str:
    level = value.strip().lower()
    if level not in _LOG_LEVELS:
        raise ValueError(f"VMCHECK_LOG_LEVEL: invalid log level {value!r}, must be one of {', '.join(_LOG_LEVELS)}")
    return level


def normalize_alarm_statuses(keywords: list[str], purpose: str) -> list[str]:
    """Map status keywords to de-duplicated status colors, keeping first-seen order.

    *purpose* ("inclusion" or "exclusion") is only used in messages.
    """
    colors: list[str] = []
    for keyword in keywords:
        requested = keyword.lower()
        if requested not in ALARM_STATUS_KEYWORDS:
            raise ValueError(f"invalid triggered alarm status for {purpose}: {keyword!r}")
        color = ALARM_STATUS_KEYWORDS[requested]
        if color == _CLEARED_STATUS:
            _logger.debug("status_filter_never_matches", keyword=keyword, purpose=purpose)
        if color not in colors:
            colors.append(color)
    return colors


def load_filters() -> AlarmFilters:
    """Load triggered alarm filters from VMCHECK_* environment variables.

    Raises:
        FilterConfigError: both include and exclude values are set for a dimension.
        ValueError: a status keyword is unknown or a boolean value is malformed.
    """
    return AlarmFilters(
        included_entity_types=_env_list("INCLUDE_ENTITY_TYPE"),
        excluded_entity_types=_env_list("EXCLUDE_ENTITY_TYPE"),
        included_entity_names=_env_list("INCLUDE_ENTITY_NAME"),
        excluded_entity_names=_env_list("EXCLUDE_ENTITY_NAME"),
        included_resource_pools=_env_list("INCLUDE_ENTITY_RP"),
        excluded_resource_pools=_env_list("EXCLUDE_ENTITY_RP"),
        included_alarm_names=_env_list("INCLUDE_NAME"),
        excluded_alarm_names=_env_list("EXCLUDE_NAME"),
        included_alarm_descriptions=_env_list("INCLUDE_DESC"),
        excluded_alarm_descriptions=_env_list("EXCLUDE_DESC"),
        included_alarm_statuses=normalize_alarm_statuses(_env_list("INCLUDE_STATUS"), "inclusion"),
        excluded_alarm_statuses=normalize_alarm_statuses(_env_list("EXCLUDE_STATUS"), "exclusion"),
        evaluate_acknowledged_alarms=_env_bool("EVAL_ACKNOWLEDGED", False),
    )


def load_config() -> VMCheckConfig:
    """Load configuration from VMCHECK_* environment variables."""
    return VMCheckConfig(
        filters=load_filters(),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
