"""Decision log — what the scheduler chose, tick by tick.

Policies are pure functions, so they never write anything themselves.
When the host wants a record of a run (for debugging a workload, or to
replay which process held the CPU at each tick) it routes decisions
through ``TracedPolicy``, which appends them here.

Two kinds of entry share one buffer:

- **Decision entries** carry the running PID going in and the chosen
  PID coming out, so a run can be reconstructed from the log alone.
- **Notes** (idle ticks, host bookkeeping problems) carry only a message.

Severity uses ``LogLevel`` so callers can drop the per-tick DEBUG noise
and keep just the idle ticks and warnings.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """How much a log entry matters; higher values are more serious."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One line of the decision log.

    Attributes:
        level: Severity.
        message: Short description.
        source: Registry name of the policy (or "host").
        tick: Simulated tick, -1 when not tied to a tick.
        running_pid: PID on the CPU when the decision was asked for.
        chosen_pid: PID the policy returned; None for notes.

    """

    level: LogLevel
    message: str
    source: str
    tick: int = -1
    running_pid: int | None = None
    chosen_pid: int | None = None

    @property
    def is_decision(self) -> bool:
        """Return True if this entry records a policy's answer."""
        return self.chosen_pid is not None

    def __str__(self) -> str:
        """Format as ``[LEVEL] policy@tick: message``."""
        where = self.source if self.tick < 0 else f"{self.source}@{self.tick}"
        return f"[{self.level.name}] {where}: {self.message}"


class Logger:
    """In-memory buffer of decisions and notes for one simulated run."""

    def __init__(self) -> None:
        """Start with an empty buffer."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every entry, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        tick: int = -1,
    ) -> None:
        """Append a note that is not itself a decision."""
        self._entries.append(LogEntry(level=level, message=message, source=source, tick=tick))

    def record_decision(
        self,
        *,
        source: str,
        tick: int,
        running_pid: int,
        chosen_pid: int,
    ) -> None:
        """Append a DEBUG entry for one answer from a policy.

        Args:
            source: Registry name of the deciding policy.
            tick: Tick the decision was made for.
            running_pid: PID that held the CPU before the decision.
            chosen_pid: PID the policy picked (-1 for idle).

        """
        self._entries.append(
            LogEntry(
                level=LogLevel.DEBUG,
                message=f"running={running_pid} -> {chosen_pid}",
                source=source,
                tick=tick,
                running_pid=running_pid,
                chosen_pid=chosen_pid,
            )
        )

    def decisions(self) -> list[LogEntry]:
        """Return only the decision entries, oldest first."""
        return [e for e in self._entries if e.is_decision]

    def timeline(self) -> list[tuple[int, int]]:
        """Return ``(tick, chosen_pid)`` pairs for every decision."""
        return [(e.tick, e.chosen_pid) for e in self._entries if e.chosen_pid is not None]

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries at or above *min_level* and/or from *source*."""
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result

    def clear(self) -> None:
        """Drop every entry, e.g. between simulated runs."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)
