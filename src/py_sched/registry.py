"""Policy registry — map configuration names to policies.

The host picks its scheduling algorithm once, before the simulation
loop starts, by name.  The mapping is closed: five names, five
policies, no plugin loading.

Two lookups are offered:

- ``lookup_policy`` raises ``UnknownPolicyError`` so callers that can
  recover (the web service) turn a bad name into an error response.
- ``resolve_policy`` treats a bad name as a fatal configuration
  mistake: it prints a diagnostic to stderr and exits with status 1.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from py_sched.policies import (
    FIFOPolicy,
    MLFQPolicy,
    RoundRobinPolicy,
    SJFPolicy,
    STCFPolicy,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from py_sched.policies import SchedulingPolicy
    from py_sched.snapshot import TotalTimeOracle


class UnknownPolicyError(LookupError):
    """Raise when a policy name is not in the registry."""


def _missing_oracle(pid: int) -> int:
    msg = f"No total-time oracle configured (asked for PID {pid})"
    raise RuntimeError(msg)


_FACTORIES: dict[str, Callable[[TotalTimeOracle], SchedulingPolicy]] = {
    "fifo_io": lambda _oracle: FIFOPolicy(),
    "sjf_io": lambda oracle: SJFPolicy(total_time=oracle),
    "round_robin_io": lambda _oracle: RoundRobinPolicy(),
    "mlfq_io": lambda _oracle: MLFQPolicy(),
    "stcf": lambda oracle: STCFPolicy(total_time=oracle),
}

POLICY_NAMES: tuple[str, ...] = tuple(_FACTORIES)


def lookup_policy(name: str, *, total_time: TotalTimeOracle = _missing_oracle) -> SchedulingPolicy:
    """Return a fresh policy for *name*.

    Args:
        name: Registry name (case-sensitive), e.g. ``"mlfq_io"``.
        total_time: Oracle for burst-aware policies.  Policies that
            never ask for burst lengths ignore it.

    Raises:
        UnknownPolicyError: If *name* is not registered.

    """
    factory = _FACTORIES.get(name)
    if factory is None:
        msg = f"Invalid scheduler name: '{name}'"
        raise UnknownPolicyError(msg)
    return factory(total_time)


def resolve_policy(name: str, *, total_time: TotalTimeOracle = _missing_oracle) -> SchedulingPolicy:
    """Return the policy for *name*, or terminate on an unknown name.

    Policy selection happens once at configuration time, so a bad name
    is a programming error with nothing to recover to.

    Raises:
        SystemExit: With status 1 after writing the diagnostic to stderr.

    """
    try:
        return lookup_policy(name, total_time=total_time)
    except UnknownPolicyError as e:
        print(e.args[0], file=sys.stderr)
        raise SystemExit(1) from e
