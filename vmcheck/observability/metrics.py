"""Prometheus metrics for the filter pipeline and check evaluation."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

filter_transitions_total = Counter(
    "vmcheck_filter_transitions_total",
    "Triggered alarm classification changes made by filter stages",
    ["stage", "classification"],
)

filter_stage_duration_seconds = Histogram(
    "vmcheck_filter_stage_duration_seconds",
    "Time spent running a single filter stage",
    ["stage"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
)

evaluations_total = Counter(
    "vmcheck_evaluations_total",
    "Triggered alarm collections evaluated, by resulting service state",
    ["state"],
)
