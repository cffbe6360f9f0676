"""Multilevel feedback queues — the structure behind the MLFQ policy.

Three FIFO queues, one per priority level.  The scheduler always serves
the highest non-empty level first; within a level, first in is first out.

Unlike a textbook MLFQ (see OSTEP ch. 8), nothing here survives between
decisions.  The queues are rebuilt on every call, and a process's level
is a pure function of how much CPU it has already used:

    executed < 5   → HIGH
    5 ≤ executed < 10 → MEDIUM
    executed ≥ 10  → LOW

So "demotion" happens implicitly as executed time grows, and there is
no aging or boosting state to manage.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from py_sched.snapshot import NO_PID, ready_processes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.snapshot import ProcessSnapshot

MLFQ_MEDIUM_THRESHOLD = 5
MLFQ_LOW_THRESHOLD = 10


class PriorityLevel(IntEnum):
    """Feedback queue levels, lowest value served first.

    IntEnum keeps ``HIGH < MEDIUM < LOW`` so iterating the enum walks
    the levels in service order.
    """

    HIGH = 0
    MEDIUM = 1
    LOW = 2


@dataclass(frozen=True)
class PriorityThresholds:
    """Executed-time boundaries between the three levels.

    Attributes:
        medium: First executed time that lands in MEDIUM.
        low: First executed time that lands in LOW.

    """

    medium: int = MLFQ_MEDIUM_THRESHOLD
    low: int = MLFQ_LOW_THRESHOLD

    def __post_init__(self) -> None:
        """Validate that the boundaries are ordered and non-negative."""
        if self.medium < 0 or self.low < 0:
            msg = f"Thresholds must be non-negative, got {self.medium}/{self.low}"
            raise ValueError(msg)
        if self.medium > self.low:
            msg = f"medium threshold ({self.medium}) exceeds low threshold ({self.low})"
            raise ValueError(msg)

    def level_for(self, executed_time: int) -> PriorityLevel:
        """Return the level a process belongs to given its executed time."""
        if executed_time < self.medium:
            return PriorityLevel.HIGH
        if executed_time < self.low:
            return PriorityLevel.MEDIUM
        return PriorityLevel.LOW


class FeedbackQueues:
    """One growable FIFO of PIDs per priority level.

    A PID may sit in at most one level at a time; enqueuing it twice is
    a bug in the caller and raises ``ValueError``.
    """

    def __init__(self) -> None:
        """Create three empty queues."""
        self._queues: dict[PriorityLevel, deque[int]] = {level: deque() for level in PriorityLevel}
        self._members: set[int] = set()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Sequence[ProcessSnapshot],
        thresholds: PriorityThresholds,
    ) -> FeedbackQueues:
        """Build the queues for one decision from the ready processes.

        Processes blocked on I/O are skipped.  Snapshot order is kept
        inside each level.
        """
        queues = cls()
        for proc in ready_processes(snapshot):
            queues.enqueue(thresholds.level_for(proc.executed_time), proc.pid)
        return queues

    def enqueue(self, level: PriorityLevel, pid: int) -> None:
        """Append *pid* to the back of *level*'s queue.

        Raises:
            ValueError: If *pid* is already queued at any level.

        """
        if pid in self._members:
            msg = f"PID {pid} is already queued"
            raise ValueError(msg)
        self._queues[level].append(pid)
        self._members.add(pid)

    def front(self) -> int:
        """Return the PID at the front of the highest non-empty level.

        Returns ``NO_PID`` if every queue is empty.
        """
        for level in PriorityLevel:
            queue = self._queues[level]
            if queue:
                return queue[0]
        return NO_PID

    def dequeue(self) -> int:
        """Remove and return the PID that ``front()`` would report."""
        for level in PriorityLevel:
            queue = self._queues[level]
            if queue:
                pid = queue.popleft()
                self._members.discard(pid)
                return pid
        return NO_PID

    def level_size(self, level: PriorityLevel) -> int:
        """Return how many PIDs are waiting at *level*."""
        return len(self._queues[level])

    def pids(self, level: PriorityLevel) -> list[int]:
        """Return the PIDs at *level* in queue order."""
        return list(self._queues[level])

    def __len__(self) -> int:
        """Return the total number of queued PIDs."""
        return len(self._members)

    def __contains__(self, pid: object) -> bool:
        """Return True if *pid* is queued at any level."""
        return pid in self._members
