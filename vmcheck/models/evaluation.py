"""Evaluation result handed to the reporting layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from vmcheck.models.config import AlarmFilters
from vmcheck.models.states import ServiceState


@dataclass
class AlarmsEvaluation:
    """Outcome of filtering and aggregating one collection of triggered alarms.

    Contract between the check and whatever renders the Nagios output.
    Counts refer to the collection after filtering; ``state`` is computed from
    non-excluded alarms only.
    """

    state: ServiceState
    state_counts: dict[ServiceState, int]
    total: int
    num_excluded: int
    num_excluded_final: int
    filters: AlarmFilters
    keys: list[str] = field(default_factory=list)
    keys_excluded: list[str] = field(default_factory=list)
    datacenters: list[str] = field(default_factory=list)
    resource_pools: list[str] = field(default_factory=list)
    error: str | None = None  # set when non-excluded alarms are in a non-OK state

    @property
    def num_evaluated(self) -> int:
        return self.total - self.num_excluded

    @property
    def problem_detected(self) -> bool:
        return self.state is not ServiceState.OK
