"""Shared factories for vmcheck unit tests."""

from __future__ import annotations

from datetime import UTC, datetime

from vmcheck.models.alarms import AlarmEntity, ManagedObjectRef, TriggeredAlarm, TriggeredAlarms

_TS = datetime(2026, 2, 18, 12, 0, 0, tzinfo=UTC)


def make_alarm(
    key: str = "alarm-8.datastore-50119",
    name: str = "Datastore usage on disk",
    description: str = "Default alarm to monitor datastore disk usage",
    entity_name: str = "RES-DC1-S6200-vol11",
    entity_type: str = "Datastore",
    status: str = "yellow",
    resource_pools: list[str] | None = None,
    datacenter: str = "Example",
    acknowledged: bool = False,
) -> TriggeredAlarm:
    """Create a TriggeredAlarm with sensible defaults for testing."""
    return TriggeredAlarm(
        key=key,
        name=name,
        description=description,
        entity=AlarmEntity(
            name=entity_name,
            ref=ManagedObjectRef(type=entity_type, value=key.split(".", 1)[-1]),
            overall_status=status,
            resource_pools=resource_pools or [],
        ),
        alarm_ref=ManagedObjectRef(type="Alarm", value=key.split(".", 1)[0]),
        overall_status=status,
        datacenter=datacenter,
        triggered_at=_TS,
        acknowledged=acknowledged,
        acknowledged_at=_TS if acknowledged else None,
        acknowledged_by="Ash" if acknowledged else "",
    )


def make_alarms(*alarms: TriggeredAlarm) -> TriggeredAlarms:
    return TriggeredAlarms(alarms)
