"""Triggered alarms check: filter, aggregate, and hand off for reporting."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from vmcheck import __version__
from vmcheck.collector import parse_triggered_alarms
from vmcheck.config import load_config
from vmcheck.errors import ALARM_NOT_EXCLUDED_MESSAGE
from vmcheck.filters.observer import FilterObserver, LoggingObserver
from vmcheck.filters.pipeline import FilterPipeline
from vmcheck.models.alarms import TriggeredAlarms
from vmcheck.models.config import AlarmFilters, VMCheckConfig
from vmcheck.models.evaluation import AlarmsEvaluation
from vmcheck.observability.logging import get_logger, setup_logging
from vmcheck.observability.metrics import evaluations_total
from vmcheck.severity import SeverityAggregator

_logger = get_logger("check")


def evaluate_alarms(
    alarms: TriggeredAlarms,
    filters: AlarmFilters,
    observer: FilterObserver | None = None,
) -> AlarmsEvaluation:
    """Classify *alarms* with *filters* and compute the resulting service state.

    The collection is modified in place by the filter pipeline.
    """
    FilterPipeline(observer).filter(alarms, filters)

    aggregator = SeverityAggregator(alarms)
    state = aggregator.overall_state()

    evaluation = AlarmsEvaluation(
        state=state,
        state_counts=aggregator.counts(),
        total=len(alarms),
        num_excluded=alarms.num_excluded(),
        num_excluded_final=alarms.num_excluded_final(),
        filters=filters,
        keys=alarms.keys(evaluate_acknowledged=filters.evaluate_acknowledged_alarms),
        keys_excluded=alarms.keys_excluded(),
        datacenters=alarms.datacenters(),
        resource_pools=alarms.resource_pools(),
    )
    evaluations_total.labels(state=state.value).inc()

    if evaluation.problem_detected:
        evaluation.error = ALARM_NOT_EXCLUDED_MESSAGE
        _logger.error(
            "non_excluded_alarms_detected",
            state=state.value,
            total_alarms=evaluation.total,
            evaluated_alarms=evaluation.num_evaluated,
            excluded_alarms=evaluation.num_excluded,
        )
    else:
        _logger.info(
            "no_non_excluded_alarms_detected",
            total_alarms=evaluation.total,
            excluded_alarms=evaluation.num_excluded,
        )

    return evaluation


def run_check(
    datacenters: Sequence[Mapping[str, Any]] | None,
    config: VMCheckConfig | None = None,
    observer: FilterObserver | None = None,
) -> AlarmsEvaluation:
    """Evaluate the triggered alarms of retrieved datacenter properties.

    Loads configuration from the environment when *config* is not given,
    configures logging and audits filtering with a LoggingObserver unless
    another observer is passed.

    Raises:
        CollectorError: *datacenters* cannot be turned into records.
        FilterConfigError: the filters set both lists for a dimension.
    """
    # --- 1. Configuration -------------------------------------------
    if config is None:
        config = load_config()

    # --- 2. Logging -------------------------------------------------
    setup_logging(config.log.level)
    _logger.info("vmcheck starting", version=__version__)

    # --- 3. Records -------------------------------------------------
    alarms = parse_triggered_alarms(datacenters)
    _logger.info("triggered_alarms_found", alarms=len(alarms), per_datacenter=alarms.count_per_datacenter())

    # --- 4. Filter and evaluate -------------------------------------
    return evaluate_alarms(alarms, config.filters, observer or LoggingObserver())
