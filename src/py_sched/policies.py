"""Scheduling policies — decide which process gets the CPU next.

The host simulator owns the process table, the clock and context
switching.  Once per tick it asks the selected policy a single question:
"given this snapshot, this tick, and whoever is running now, which PID
should run?".  Five policies answer it:

- **FIFOPolicy**: always the first process in the snapshot.
- **SJFPolicy** (Shortest Job First): smallest *total* burst among the
  processes not blocked on I/O.
- **STCFPolicy** (Shortest Time to Completion First): smallest
  *remaining* burst, re-evaluated every tick, so a shorter job that
  becomes ready preempts the running one.
- **RoundRobinPolicy**: keep the running process until the tick lands
  on a quantum boundary, then move to the next snapshot entry.
- **MLFQPolicy** (Multilevel Feedback Queue): bucket ready processes
  into HIGH/MEDIUM/LOW by executed time and serve the highest bucket.

Every policy returns ``NO_PID`` (-1) when nothing is eligible.  None of
them keeps state between calls, so the same inputs always produce the
same answer.

Design: Strategy pattern
    ``SchedulingPolicy`` is the strategy; the host (or the registry)
    picks one concrete class and calls it every tick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from py_sched.feedback import (
    MLFQ_LOW_THRESHOLD,
    MLFQ_MEDIUM_THRESHOLD,
    FeedbackQueues,
    PriorityThresholds,
)
from py_sched.snapshot import NO_PID, ready_processes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.snapshot import DecisionContext, ProcessSnapshot, TotalTimeOracle

__all__ = [
    "MLFQ_LOW_THRESHOLD",
    "MLFQ_MEDIUM_THRESHOLD",
    "ROUND_ROBIN_QUANTUM",
    "FIFOPolicy",
    "MLFQPolicy",
    "RoundRobinPolicy",
    "SJFPolicy",
    "STCFPolicy",
    "SchedulingPolicy",
    "decide",
]

ROUND_ROBIN_QUANTUM = 5


class SchedulingPolicy(Protocol):
    """Interface that every scheduling algorithm must satisfy.

    ``name`` is the registry name; ``preemptive`` says whether the
    policy may take the CPU away from a running process.
    """

    @property
    def name(self) -> str:
        """Return the registry name."""
        ...  # pragma: no cover

    @property
    def preemptive(self) -> bool:
        """Return True if the policy can preempt a running process."""
        ...  # pragma: no cover

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        """Return the PID that should run next, or ``NO_PID`` to idle."""
        ...  # pragma: no cover

    def __call__(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        """Alias for ``select_next``."""
        ...  # pragma: no cover


class _PolicyBase:
    """Make policies callable so they can stand in for plain functions."""

    name = ""
    preemptive = False

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        raise NotImplementedError  # pragma: no cover

    def __call__(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        """Delegate to ``select_next``."""
        return self.select_next(snapshot, current_tick, running_pid)

    def __repr__(self) -> str:
        """Return the class name and registry name."""
        return f"{type(self).__name__}(name={self.name!r})"


class FIFOPolicy(_PolicyBase):
    """First In, First Out — whoever heads the snapshot runs.

    Ignores the tick, the running PID and I/O state entirely.  The host
    guarantees at least one process whenever it asks for a decision.
    """

    name = "fifo_io"

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,  # noqa: ARG002
        running_pid: int,  # noqa: ARG002
    ) -> int:
        """Return the PID at index 0.

        Raises:
            IndexError: If the snapshot is empty.

        """
        if not snapshot:
            msg = "FIFO needs at least one process in the snapshot"
            raise IndexError(msg)
        return snapshot[0].pid


class SJFPolicy(_PolicyBase):
    """Shortest Job First — smallest total burst wins.

    Non-preemptive in spirit: on the very first decision (nothing
    running yet) it simply picks the head of the snapshot.  After that
    it scans every ready process and picks the one whose *total* burst
    is smallest.  Ties go to the earlier snapshot entry, since only a
    strictly smaller burst replaces the current best.
    """

    name = "sjf_io"

    def __init__(self, *, total_time: TotalTimeOracle) -> None:
        """Create an SJF policy.

        Args:
            total_time: Oracle returning a PID's total CPU burst.

        """
        self._total_time = total_time

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,  # noqa: ARG002
        running_pid: int,
    ) -> int:
        """Return the ready PID with the shortest total burst."""
        if running_pid == NO_PID:
            return snapshot[0].pid
        best_pid = NO_PID
        best_burst: int | None = None
        for proc in ready_processes(snapshot):
            burst = self._total_time(proc.pid)
            if best_burst is None or burst < best_burst:
                best_pid = proc.pid
                best_burst = burst
        return best_pid


class STCFPolicy(_PolicyBase):
    """Shortest Time to Completion First — preemptive SJF.

    Same bootstrap rule as SJF, but ranks by *remaining* time
    (``total - executed``) and is meant to be asked every tick, so a
    newly ready short job takes the CPU from a longer one.
    """

    name = "stcf"
    preemptive = True

    def __init__(self, *, total_time: TotalTimeOracle) -> None:
        """Create an STCF policy.

        Args:
            total_time: Oracle returning a PID's total CPU burst.

        """
        self._total_time = total_time

    def remaining_time(self, proc: ProcessSnapshot) -> int:
        """Return how many ticks *proc* still needs."""
        return self._total_time(proc.pid) - proc.executed_time

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,  # noqa: ARG002
        running_pid: int,
    ) -> int:
        """Return the ready PID with the least remaining time."""
        if running_pid == NO_PID:
            return snapshot[0].pid
        best_pid = NO_PID
        best_remaining: int | None = None
        for proc in ready_processes(snapshot):
            remaining = self.remaining_time(proc)
            if best_remaining is None or remaining < best_remaining:
                best_pid = proc.pid
                best_remaining = remaining
        return best_pid


class RoundRobinPolicy(_PolicyBase):
    """Round Robin — rotate through the snapshot every quantum.

    The quantum is measured on the global clock: a switch happens
    whenever ``current_tick`` is a multiple of the quantum.  The next
    process is simply the next snapshot entry (wrapping to the first),
    even if that process is blocked on I/O.
    """

    name = "round_robin_io"
    preemptive = True

    def __init__(self, *, quantum: int = ROUND_ROBIN_QUANTUM) -> None:
        """Create a Round Robin policy.

        Args:
            quantum: Ticks between forced switches (default 5).

        Raises:
            ValueError: If *quantum* is less than 1.

        """
        if quantum < 1:
            msg = f"quantum must be at least 1, got {quantum}"
            raise ValueError(msg)
        self._quantum = quantum

    @property
    def quantum(self) -> int:
        """Return the time quantum (ticks per slice)."""
        return self._quantum

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,
        running_pid: int,
    ) -> int:
        """Keep the running PID mid-quantum, otherwise advance one entry.

        Returns ``NO_PID`` if the running PID is not in the snapshot.
        """
        if running_pid == NO_PID:
            return snapshot[0].pid
        for index, proc in enumerate(snapshot):
            if proc.pid != running_pid:
                continue
            if current_tick % self._quantum != 0:
                return running_pid
            return snapshot[(index + 1) % len(snapshot)].pid
        return NO_PID


class MLFQPolicy(_PolicyBase):
    """Multilevel Feedback Queue — serve the least-used processes first.

    Each call rebuilds three queues from scratch.  A ready process lands
    in HIGH, MEDIUM or LOW purely by its executed time, and the front of
    the highest non-empty queue runs.  Within a level, snapshot order
    decides.
    """

    name = "mlfq_io"
    preemptive = True

    def __init__(self, *, thresholds: PriorityThresholds | None = None) -> None:
        """Create an MLFQ policy.

        Args:
            thresholds: Level boundaries (default 5 and 10 ticks).

        """
        self._thresholds = thresholds if thresholds is not None else PriorityThresholds()

    @property
    def thresholds(self) -> PriorityThresholds:
        """Return the executed-time level boundaries."""
        return self._thresholds

    def select_next(
        self,
        snapshot: Sequence[ProcessSnapshot],
        current_tick: int,  # noqa: ARG002
        running_pid: int,  # noqa: ARG002
    ) -> int:
        """Return the front of the highest non-empty level, or ``NO_PID``."""
        queues = FeedbackQueues.from_snapshot(snapshot, self._thresholds)
        return queues.front()


def decide(policy: SchedulingPolicy, context: DecisionContext) -> int:
    """Apply *policy* to a bundled decision context."""
    return policy.select_next(context.snapshot, context.current_tick, context.running_pid)
