"""Core data structures for vmcheck."""

from vmcheck.models.alarms import AlarmEntity, ManagedObjectRef, TriggeredAlarm, TriggeredAlarms
from vmcheck.models.classification import Classification, StageOutcome
from vmcheck.models.config import AlarmFilters, LogConfig, VMCheckConfig
from vmcheck.models.evaluation import AlarmsEvaluation
from vmcheck.models.states import ManagedEntityStatus, ServiceState

__all__ = [
    "AlarmEntity",
    "AlarmFilters",
    "AlarmsEvaluation",
    "Classification",
    "LogConfig",
    "ManagedEntityStatus",
    "ManagedObjectRef",
    "ServiceState",
    "StageOutcome",
    "TriggeredAlarm",
    "TriggeredAlarms",
    "VMCheckConfig",
]
