"""py-sched — pluggable CPU-scheduling policies for a tick-based simulator.

Re-exports public symbols so callers can write::

    from py_sched import ProcessSnapshot, resolve_policy
"""

from py_sched.config import ConfigError, SchedulerConfig, load_config
from py_sched.feedback import FeedbackQueues, PriorityLevel, PriorityThresholds
from py_sched.logging import LogEntry, Logger, LogLevel
from py_sched.policies import (
    MLFQ_LOW_THRESHOLD,
    MLFQ_MEDIUM_THRESHOLD,
    ROUND_ROBIN_QUANTUM,
    FIFOPolicy,
    MLFQPolicy,
    RoundRobinPolicy,
    SchedulingPolicy,
    SJFPolicy,
    STCFPolicy,
    decide,
)
from py_sched.registry import POLICY_NAMES, UnknownPolicyError, lookup_policy, resolve_policy
from py_sched.snapshot import (
    NO_PID,
    DecisionContext,
    ProcessSnapshot,
    TotalTimeOracle,
    ready_processes,
)
from py_sched.trace import TracedPolicy, build_policy

__all__ = [
    "MLFQ_LOW_THRESHOLD",
    "MLFQ_MEDIUM_THRESHOLD",
    "NO_PID",
    "POLICY_NAMES",
    "ROUND_ROBIN_QUANTUM",
    "ConfigError",
    "DecisionContext",
    "FIFOPolicy",
    "FeedbackQueues",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MLFQPolicy",
    "PriorityLevel",
    "PriorityThresholds",
    "ProcessSnapshot",
    "RoundRobinPolicy",
    "SJFPolicy",
    "STCFPolicy",
    "SchedulerConfig",
    "SchedulingPolicy",
    "TotalTimeOracle",
    "TracedPolicy",
    "UnknownPolicyError",
    "build_policy",
    "decide",
    "load_config",
    "lookup_policy",
    "ready_processes",
    "resolve_policy",
]
