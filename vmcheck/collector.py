"""Builds TriggeredAlarm records from raw datacenter properties.

The session with vCenter and the property retrieval happen elsewhere; this
module only turns the retrieved values (plain dicts, one per datacenter with
its triggered alarm states) into the records the filter pipeline works on.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from vmcheck.errors import CollectorError
from vmcheck.models.alarms import AlarmEntity, ManagedObjectRef, TriggeredAlarm, TriggeredAlarms
from vmcheck.observability.logging import get_logger

_logger = get_logger("collector")


def _parse_time(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise CollectorError(f"invalid timestamp: {value!r}") from exc


def _parse_ref(raw: Mapping[str, Any] | None) -> ManagedObjectRef:
    raw = raw or {}
    return ManagedObjectRef(type=str(raw.get("type", "")), value=str(raw.get("value", "")))


def _parse_alarm_state(datacenter: str, raw: Mapping[str, Any]) -> TriggeredAlarm:
    key = raw.get("key")
    if not key:
        raise CollectorError(f"triggered alarm state without key in datacenter {datacenter!r}")

    alarm = raw.get("alarm") or {}
    entity = raw.get("entity") or {}
    acknowledged = raw.get("acknowledged")
    if acknowledged is None:
        acknowledged = False
    elif not isinstance(acknowledged, bool):
        raise CollectorError(f"invalid acknowledged value for {key}: {acknowledged!r}")

    return TriggeredAlarm(
        key=str(key),
        name=str(alarm.get("name", "")),
        description=str(alarm.get("description", "")),
        alarm_ref=_parse_ref(alarm.get("ref")),
        entity=AlarmEntity(
            name=str(entity.get("name", "")),
            ref=_parse_ref(entity.get("ref")),
            overall_status=str(entity.get("overall_status", "")),
            resource_pools=[str(pool) for pool in entity.get("resource_pools") or []],
        ),
        overall_status=str(raw.get("overall_status", "")),
        datacenter=datacenter,
        triggered_at=_parse_time(raw.get("time")),
        acknowledged=acknowledged,
        acknowledged_at=_parse_time(raw.get("acknowledged_time")),
        acknowledged_by=str(raw.get("acknowledged_by_user") or ""),
    )


def parse_triggered_alarms(datacenters: Sequence[Mapping[str, Any]] | None) -> TriggeredAlarms:
    """Build the collection of triggered alarms for the given datacenters.

    Records are sorted case-insensitively by entity name. This is the only
    place ordering is established; filtering keeps every record in place.

    Raises:
        CollectorError: *datacenters* is None, or a record lacks a key or
            carries an unparsable timestamp or a non-boolean acknowledged flag.
    """
    if datacenters is None:
        raise CollectorError("empty datacenters list provided")

    alarms: list[TriggeredAlarm] = []
    for dc in datacenters:
        dc_name = str(dc.get("name", ""))
        for raw in dc.get("triggered_alarm_state") or []:
            alarms.append(_parse_alarm_state(dc_name, raw))

    alarms.sort(key=lambda alarm: alarm.entity_name.lower())

    _logger.debug(
        "triggered_alarms_collected",
        alarms=len(alarms),
        datacenters=len(datacenters),
    )
    return TriggeredAlarms(alarms)
