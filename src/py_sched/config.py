"""Scheduler configuration — which policy to run and whether to trace it.

The host reads its configuration once, before the simulation loop.
Configuration lives in a small JSON file::

    {"policy": "mlfq_io", "trace": true}

Both keys are optional.  The policy *name* is only checked when the
registry resolves it, so a typo surfaces as the registry's fatal
"Invalid scheduler name" diagnostic.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_POLICY = "fifo_io"


class ConfigError(RuntimeError):
    """Raise when the configuration file cannot be used.

    Examples: unreadable file, malformed JSON, wrong value types.
    """


@dataclass(frozen=True)
class SchedulerConfig:
    """Settings chosen at configuration time.

    Attributes:
        policy: Registry name of the scheduling policy.
        trace: Wrap the policy so every decision is logged.

    """

    policy: str = DEFAULT_POLICY
    trace: bool = False


def load_config(path: Path | None = None) -> SchedulerConfig:
    """Load configuration from a JSON file, or return the defaults.

    Args:
        path: JSON file to read.  None means "use defaults".

    Raises:
        ConfigError: If the file cannot be read or holds bad values.

    """
    if path is None:
        return SchedulerConfig()
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load scheduler config: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        msg = "Scheduler config must be a JSON object"
        raise ConfigError(msg)
    policy = data.get("policy", DEFAULT_POLICY)
    trace = data.get("trace", False)
    if not isinstance(policy, str):
        msg = f"'policy' must be a string, got {type(policy).__name__}"
        raise ConfigError(msg)
    if not isinstance(trace, bool):
        msg = f"'trace' must be a boolean, got {type(trace).__name__}"
        raise ConfigError(msg)
    return SchedulerConfig(policy=policy, trace=trace)
