"""Decision tracing — log what a policy decided without changing it.

``TracedPolicy`` wraps any policy and writes one log entry per decision
to a ``Logger``.  The wrapped policy stays pure; all side effects live
in the wrapper, which the host opts into through ``SchedulerConfig.trace``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_sched.logging import Logger, LogLevel
from py_sched.registry import resolve_policy
from py_sched.snapshot import NO_PID

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.config import SchedulerConfig
    from py_sched.policies import SchedulingPolicy
    from py_sched.snapshot import ProcessSnapshot, TotalTimeOracle


class TracedPolicy:
    """A policy decorator that records every decision.

    Logged events:
        - DEBUG for every decision (``tick``, running PID, chosen PID).
        - INFO when the decision is to idle.
        - WARNING when the running PID is missing from the snapshot,
          which means the host broke its own bookkeeping.
    """

    def __init__(self, policy: SchedulingPolicy, logger: Logger) -> None:
        """Wrap *policy*, logging to *logger*."""
        self._policy = policy
        self._logger = logger

    @property
    def name(self) -> str:
        """Return the wrapped policy's registry name."""
        return self._policy.name

    @property
    def preemptive(self) -> bool:
        """Return whether the wrapped policy is preemptive."""
        return self._policy.preemptive

    @property
    def policy(self) -> SchedulingPolicy:
        """Return the wrapped policy."""
        return self._policy

    @property
    def logger(self) -> Logger:
        """Return the logger decisions are written to."""
        return self._logger

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        """Ask the wrapped policy, log the outcome, and return it unchanged."""
        pid = self._policy.select_next(snapshot, current_tick, running_pid)
        source = self._policy.name
        self._logger.record_decision(
            source=source,
            tick=current_tick,
            running_pid=running_pid,
            chosen_pid=pid,
        )
        if pid == NO_PID:
            if running_pid != NO_PID and all(p.pid != running_pid for p in snapshot):
                self._logger.log(
                    LogLevel.WARNING,
                    f"running PID {running_pid} is not in the snapshot",
                    source=source,
                    tick=current_tick,
                )
            else:
                self._logger.log(LogLevel.INFO, "CPU idle", source=source, tick=current_tick)
        return pid

    def __call__(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        """Delegate to ``select_next``."""
        return self.select_next(snapshot, current_tick, running_pid)


def build_policy(
    config: SchedulerConfig,
    *,
    total_time: TotalTimeOracle,
    logger: Logger | None = None,
) -> SchedulingPolicy:
    """Resolve the configured policy, wrapping it when tracing is on.

    An unknown policy name is fatal (see ``resolve_policy``).

    Args:
        config: Loaded scheduler configuration.
        total_time: Oracle passed to burst-aware policies.
        logger: Destination for traces; a fresh one is made if omitted.

    """
    policy = resolve_policy(config.policy, total_time=total_time)
    if not config.trace:
        return policy
    return TracedPolicy(policy, logger if logger is not None else Logger())
