"""Process snapshot view — what the host simulator shows a policy.

Every simulated tick the host hands the policy a read-only picture of
its process table.  Each entry is a ``ProcessSnapshot``: the PID, whether
the process is blocked on I/O, and how many ticks of CPU it has already
consumed.  The ordering of the entries is the host's own; policies only
use it as a tie-break (earlier entries win).

The second thing the host provides is the *total-time oracle*: a
function that answers "how many ticks does process P need in total?".
Policies that care about burst length (SJF, STCF) take it as a
collaborator instead of reaching into host state.

Design choices:
    - **Frozen dataclasses** — a snapshot must not change during a
      decision, so we make mutation impossible.
    - **Tuples, not lists** — the snapshot sequence is immutable too.
    - **Sentinel, not None** — ``NO_PID`` (-1) is what the host expects
      back when the CPU should idle.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

TotalTimeOracle = Callable[[int], int]
"""Host function returning a PID's total CPU burst."""

NO_PID = -1
"""Returned when no process is eligible for the CPU (the CPU idles)."""

_REQUIRED_FIELDS = ("pid", "on_io", "executed_time")


@dataclass(frozen=True)
class ProcessSnapshot:
    """One process as seen by the scheduler at a single tick.

    Attributes:
        pid: Stable identifier, unique among live processes.
        on_io: True while the process is blocked on I/O (not eligible).
        executed_time: CPU ticks the process has consumed so far.

    """

    pid: int
    on_io: bool = False
    executed_time: int = 0

    def __post_init__(self) -> None:
        """Reject a negative executed time."""
        if self.executed_time < 0:
            msg = f"executed_time must be non-negative, got {self.executed_time}"
            raise ValueError(msg)


@dataclass(frozen=True)
class DecisionContext:
    """Everything a policy needs for one scheduling decision.

    Attributes:
        snapshot: The process table, in host order.
        current_tick: The simulated clock value.
        running_pid: PID currently on the CPU, or ``NO_PID``.

    """

    snapshot: tuple[ProcessSnapshot, ...]
    current_tick: int
    running_pid: int = NO_PID

    def __post_init__(self) -> None:
        """Reject a negative tick."""
        if self.current_tick < 0:
            msg = f"current_tick must be non-negative, got {self.current_tick}"
            raise ValueError(msg)

    @property
    def has_running(self) -> bool:
        """Return True if some process currently owns the CPU."""
        return self.running_pid != NO_PID


def ready_processes(snapshot: Sequence[ProcessSnapshot]) -> Iterator[ProcessSnapshot]:
    """Yield the entries that are not blocked on I/O, in snapshot order."""
    return (proc for proc in snapshot if not proc.on_io)


def snapshot_from_records(records: Iterable[Mapping[str, object]]) -> tuple[ProcessSnapshot, ...]:
    """Build a snapshot tuple from plain mappings (e.g. decoded JSON).

    Args:
        records: Mappings with ``pid``, ``on_io`` and ``executed_time`` keys.

    Returns:
        The snapshot, preserving record order.

    Raises:
        ValueError: If a record is missing a field, has a bad value,
            or repeats a PID seen earlier.

    """
    result: list[ProcessSnapshot] = []
    seen: set[int] = set()
    for index, record in enumerate(records):
        missing = [key for key in _REQUIRED_FIELDS if key not in record]
        if missing:
            msg = f"Snapshot entry {index} is missing {', '.join(missing)}"
            raise ValueError(msg)
        pid = record["pid"]
        executed = record["executed_time"]
        if not isinstance(pid, int) or not isinstance(executed, int):
            msg = f"Snapshot entry {index}: pid and executed_time must be integers"
            raise ValueError(msg)
        if pid in seen:
            msg = f"Snapshot entry {index} repeats PID {pid}"
            raise ValueError(msg)
        seen.add(pid)
        result.append(
            ProcessSnapshot(pid=pid, on_io=bool(record["on_io"]), executed_time=executed)
        )
    return tuple(result)
