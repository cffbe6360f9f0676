"""Tests for decision tracing and config-driven policy construction."""

import pytest

from py_sched.config import SchedulerConfig
from py_sched.logging import Logger, LogLevel
from py_sched.policies import FIFOPolicy, RoundRobinPolicy, SJFPolicy
from py_sched.snapshot import NO_PID, ProcessSnapshot
from py_sched.trace import TracedPolicy, build_policy


def _total_time(pid: int) -> int:  # noqa: ARG001
    """Give every PID the same burst."""
    return 5


class TestTracedPolicy:
    """Verify the tracing wrapper logs without changing decisions."""

    def test_decision_unchanged(self) -> None:
        """The wrapper returns exactly what the policy returns."""
        snapshot = (ProcessSnapshot(pid=1), ProcessSnapshot(pid=2), ProcessSnapshot(pid=3))
        traced = TracedPolicy(RoundRobinPolicy(), Logger())
        assert traced(snapshot, 10, 2) == 3
        assert traced.select_next(snapshot, 11, 2) == 2

    def test_exposes_wrapped_attributes(self) -> None:
        """name and preemptive come from the wrapped policy."""
        inner = RoundRobinPolicy()
        traced = TracedPolicy(inner, Logger())
        assert traced.name == "round_robin_io"
        assert traced.preemptive is True
        assert traced.policy is inner

    def test_logs_each_decision(self) -> None:
        """One DEBUG entry per decision, tagged with tick and source."""
        logger = Logger()
        traced = TracedPolicy(FIFOPolicy(), logger)
        traced((ProcessSnapshot(pid=4),), 7, NO_PID)
        (entry,) = logger.entries
        assert entry.level is LogLevel.DEBUG
        assert entry.source == "fifo_io"
        expected_tick = 7
        assert entry.tick == expected_tick
        assert "-> 4" in entry.message
        assert entry.running_pid == NO_PID
        expected_pid = 4
        assert entry.chosen_pid == expected_pid

    def test_idle_logged_as_info(self) -> None:
        """An idle decision adds an INFO entry."""
        logger = Logger()
        traced = TracedPolicy(SJFPolicy(total_time=_total_time), logger)
        snapshot = (ProcessSnapshot(pid=1, on_io=True),)
        assert traced(snapshot, 3, 1) == NO_PID
        infos = logger.filter(min_level=LogLevel.INFO)
        assert [e.message for e in infos] == ["CPU idle"]

    def test_missing_running_pid_logged_as_warning(self) -> None:
        """Round Robin losing its running PID is a host bug worth flagging."""
        logger = Logger()
        traced = TracedPolicy(RoundRobinPolicy(), logger)
        assert traced((ProcessSnapshot(pid=1),), 5, 9) == NO_PID
        warnings = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings) == 1
        assert "9" in warnings[0].message


class TestBuildPolicy:
    """Verify building a policy from configuration."""

    def test_untraced_returns_bare_policy(self) -> None:
        """trace=False returns the registry policy itself."""
        policy = build_policy(SchedulerConfig(policy="fifo_io"), total_time=_total_time)
        assert isinstance(policy, FIFOPolicy)

    def test_traced_wraps_policy(self) -> None:
        """trace=True wraps the policy around the given logger."""
        logger = Logger()
        policy = build_policy(
            SchedulerConfig(policy="sjf_io", trace=True),
            total_time=_total_time,
            logger=logger,
        )
        assert isinstance(policy, TracedPolicy)
        assert policy.logger is logger
        policy((ProcessSnapshot(pid=1),), 0, NO_PID)
        assert len(logger) == 1

    def test_traced_without_logger_creates_one(self) -> None:
        """A logger is created when none is passed."""
        policy = build_policy(SchedulerConfig(policy="stcf", trace=True), total_time=_total_time)
        assert isinstance(policy, TracedPolicy)
        assert len(policy.logger) == 0

    def test_unknown_policy_is_fatal(self) -> None:
        """A bad configured name terminates via the registry."""
        with pytest.raises(SystemExit):
            build_policy(SchedulerConfig(policy="nope"), total_time=_total_time)
