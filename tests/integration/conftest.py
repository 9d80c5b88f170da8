"""Shared fixtures for vmcheck integration tests.

Provides a fixed inventory of six triggered alarms across datastores and
virtual machines, built through the collector from the same property layout
the vCenter retrieval layer hands over, so tests exercise collection,
filtering and severity evaluation together.
"""

from __future__ import annotations

from typing import Any

import pytest

from vmcheck.collector import parse_triggered_alarms
from vmcheck.models.alarms import TriggeredAlarms

_DATASTORE_USAGE = ("alarm-8", "Datastore usage on disk", "Default alarm to monitor datastore disk usage")
_VM_CPU = ("alarm-6", "Virtual machine CPU usage", "Default alarm to monitor virtual machine CPU usage")
_VM_MEMORY = ("alarm-7", "Virtual machine memory usage", "Default alarm to monitor virtual machine memory usage")


# ---------------------------------------------------------------------------
# Raw property factory
# ---------------------------------------------------------------------------


def make_alarm_state(
    alarm: tuple[str, str, str],
    entity_type: str,
    entity_moid: str,
    entity_name: str,
    status: str,
    entity_status: str = "",
    resource_pools: list[str] | None = None,
    acknowledged: bool = False,
) -> dict[str, Any]:
    """Create a raw triggered alarm state as returned by property retrieval."""
    alarm_moid, alarm_name, alarm_description = alarm
    state: dict[str, Any] = {
        "key": f"{alarm_moid}.{entity_moid}",
        "overall_status": status,
        "time": "2026-02-17T08:14:03+00:00",
        "acknowledged": acknowledged,
        "alarm": {
            "ref": {"type": "Alarm", "value": alarm_moid},
            "name": alarm_name,
            "description": alarm_description,
        },
        "entity": {
            "ref": {"type": entity_type, "value": entity_moid},
            "name": entity_name,
            "overall_status": entity_status or status,
            "resource_pools": resource_pools or [],
        },
    }
    if acknowledged:
        state["acknowledged_time"] = "2026-02-17T09:02:41+00:00"
        state["acknowledged_by_user"] = "VSPHERE.LOCAL\\Administrator"
    return state


def example_datacenters() -> list[dict[str, Any]]:
    return [
        {
            "name": "Example",
            "triggered_alarm_state": [
                make_alarm_state(
                    _DATASTORE_USAGE,
                    "Datastore",
                    "datastore-50120",
                    "RES-DC1-S6200-vol12",
                    "yellow",
                    entity_status="red",
                    acknowledged=True,
                ),
                make_alarm_state(_DATASTORE_USAGE, "Datastore", "datastore-50119", "RES-DC1-S6200-vol11", "yellow"),
                make_alarm_state(_DATASTORE_USAGE, "Datastore", "datastore-141490", "HUSVM-DC1-DigColl-vol8", "red"),
                make_alarm_state(
                    _VM_CPU, "VirtualMachine", "vm-197", "node1.example.com", "red", resource_pools=["Production"]
                ),
                make_alarm_state(
                    _VM_MEMORY, "VirtualMachine", "vm-197", "node1.example.com", "red", resource_pools=["Production"]
                ),
                make_alarm_state(
                    _VM_MEMORY, "VirtualMachine", "vm-198", "node2.example.com", "red", resource_pools=["Development"]
                ),
            ],
        }
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def inventory() -> TriggeredAlarms:
    """Fresh, unfiltered collection of the six example alarms."""
    return parse_triggered_alarms(example_datacenters())
