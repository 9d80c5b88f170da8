"""Integration tests for filter combinations over the example inventory.

Each test exercises: raw properties -> collector -> filter pipeline ->
severity evaluation, and checks which alarm keys remain for evaluation.
"""

from __future__ import annotations

import pytest

from vmcheck.check import evaluate_alarms
from vmcheck.errors import FilterConfigError
from vmcheck.filters.pipeline import FilterPipeline
from vmcheck.models.alarms import TriggeredAlarms
from vmcheck.models.config import AlarmFilters
from vmcheck.models.states import ServiceState

pytestmark = pytest.mark.integration

_DS_50119 = "alarm-8.datastore-50119"
_DS_50120 = "alarm-8.datastore-50120"
_DS_141490 = "alarm-8.datastore-141490"
_CPU_197 = "alarm-6.vm-197"
_MEM_197 = "alarm-7.vm-197"
_MEM_198 = "alarm-7.vm-198"


def _remaining(alarms: TriggeredAlarms, filters: AlarmFilters) -> list[str]:
    FilterPipeline().filter(alarms, filters)
    return alarms.keys(evaluate_acknowledged=filters.evaluate_acknowledged_alarms)


# ---------------------------------------------------------------------------
# Filter combinations
# ---------------------------------------------------------------------------


class TestFilterCombinations:
    """Remaining keys for combinations of include and exclude lists."""

    def test_no_filters_skips_only_acknowledged(self, inventory: TriggeredAlarms) -> None:
        assert _remaining(inventory, AlarmFilters()) == sorted(
            [_CPU_197, _MEM_197, _MEM_198, _DS_141490, _DS_50119], key=str.lower
        )

    def test_include_vms_exclude_cpu_alarm(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(
            included_entity_types=["VirtualMachine"],
            excluded_alarm_names=["Virtual machine CPU usage"],
        )
        assert _remaining(inventory, filters) == [_MEM_197, _MEM_198]

    def test_include_vms_exclude_cpu_and_memory_alarms(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(
            included_entity_types=["VirtualMachine"],
            excluded_alarm_names=["Virtual machine CPU usage", "memory usage"],
        )
        assert _remaining(inventory, filters) == []

    def test_later_include_rescues_datastore(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(
            included_entity_types=["VirtualMachine"],
            excluded_alarm_names=["Virtual machine CPU usage"],
            included_alarm_statuses=["yellow"],
            excluded_entity_names=["node1"],
        )
        assert _remaining(inventory, filters) == [_MEM_198, _DS_50119]

    def test_include_status_and_pool(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(included_alarm_statuses=["yellow"], included_resource_pools=["development"])
        assert _remaining(inventory, filters) == [_MEM_198, _DS_50119]

    def test_include_development_pool(self, inventory: TriggeredAlarms) -> None:
        assert _remaining(inventory, AlarmFilters(included_resource_pools=["Development"])) == [_MEM_198]

    def test_include_production_pool(self, inventory: TriggeredAlarms) -> None:
        assert _remaining(inventory, AlarmFilters(included_resource_pools=["production"])) == [_CPU_197, _MEM_197]

    def test_exclude_both_pools_leaves_datastores(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(excluded_resource_pools=["development", "production"])
        assert _remaining(inventory, filters) == [_DS_141490, _DS_50119]

    def test_exclude_both_pools_with_acknowledged(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(
            excluded_resource_pools=["development", "production"],
            evaluate_acknowledged_alarms=True,
        )
        assert _remaining(inventory, filters) == [_DS_141490, _DS_50119, _DS_50120]

    def test_include_and_exclude_pool_rejected(self) -> None:
        with pytest.raises(FilterConfigError):
            AlarmFilters(included_resource_pools=["production"], excluded_resource_pools=["development"])


# ---------------------------------------------------------------------------
# Exclude reasons
# ---------------------------------------------------------------------------


class TestExcludeReasons:
    """Recorded reasons after a full pipeline run."""

    def test_reasons(self, inventory: TriggeredAlarms) -> None:
        filters = AlarmFilters(
            included_entity_types=["VirtualMachine"],
            excluded_alarm_names=["CPU"],
            excluded_entity_names=["node1"],
        )
        FilterPipeline().filter(inventory, filters)

        assert inventory.get_by_key(_DS_50120).exclude_reason == "object type"
        assert inventory.get_by_key(_DS_50119).exclude_reason == "object type"
        assert inventory.get_by_key(_CPU_197).exclude_reason == "entity name"
        assert inventory.get_by_key(_MEM_197).exclude_reason == "entity name"
        assert inventory.get_by_key(_MEM_198).exclude_reason == ""
        assert inventory.num_excluded() == 5
        assert inventory.num_excluded_final() == 3


# ---------------------------------------------------------------------------
# Full evaluation
# ---------------------------------------------------------------------------


class TestEvaluation:
    """Collector -> pipeline -> severity aggregation."""

    def test_unfiltered_inventory_is_critical(self, inventory: TriggeredAlarms) -> None:
        evaluation = evaluate_alarms(inventory, AlarmFilters())

        assert evaluation.state is ServiceState.CRITICAL
        assert evaluation.total == 6
        assert evaluation.num_excluded == 1
        assert evaluation.state_counts[ServiceState.CRITICAL] == 4
        assert evaluation.state_counts[ServiceState.WARNING] == 1
        assert evaluation.datacenters == ["Example"]
        assert evaluation.resource_pools == ["Development", "Production"]

    def test_only_yellow_datastore_left_is_warning(self, inventory: TriggeredAlarms) -> None:
        evaluation = evaluate_alarms(inventory, AlarmFilters(included_alarm_statuses=["yellow"]))

        assert evaluation.state is ServiceState.WARNING
        assert evaluation.keys == [_DS_50119]

    def test_excluding_everything_is_ok(self, inventory: TriggeredAlarms) -> None:
        evaluation = evaluate_alarms(inventory, AlarmFilters(excluded_alarm_names=["usage"]))

        assert evaluation.state is ServiceState.OK
        assert evaluation.error is None
        assert evaluation.num_excluded_final == 6
