"""Flask application factory for the decision service.

The ``create_app`` function returns a Flask app with two endpoints:

- ``GET /api/policies`` — registered policy names.
- ``POST /api/select`` — one scheduling decision.

The request body for ``/api/select`` carries the whole decision
context, plus the burst lengths for policies that need them::

    {
        "policy": "stcf",
        "snapshot": [{"pid": 1, "on_io": false, "executed_time": 0}],
        "current_tick": 3,
        "running_pid": 1,
        "total_times": {"1": 10}
    }

Unknown policy names are a client error here (HTTP 400), not a fatal
one, because the service outlives any single request.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from py_sched.logging import Logger
from py_sched.policies import decide
from py_sched.registry import POLICY_NAMES, UnknownPolicyError, lookup_policy
from py_sched.snapshot import NO_PID, DecisionContext, snapshot_from_records
from py_sched.trace import TracedPolicy

_HTTP_BAD_REQUEST = 400


def _parse_total_times(raw: Any) -> dict[int, int]:
    """Convert ``{"pid": burst}`` (JSON keys are strings) to ints."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        msg = "'total_times' must be an object"
        raise ValueError(msg)
    return {int(pid): int(burst) for pid, burst in raw.items()}


def create_app(*, logger: Logger | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        logger: If given, every decision is traced into it.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/api/policies")
    def policies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the registered policy names."""
        return jsonify({"policies": list(POLICY_NAMES)})

    @app.route("/api/select", methods=["POST"])
    def select() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run one decision and return the chosen PID.

        Returns:
            JSON with ``pid`` and ``idle`` fields, or ``error`` on 400.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Expected a JSON object"}), _HTTP_BAD_REQUEST
        for field in ("policy", "snapshot", "current_tick"):
            if field not in data:
                return jsonify({"error": f"Missing '{field}' field"}), _HTTP_BAD_REQUEST

        try:
            totals = _parse_total_times(data.get("total_times"))
            context = DecisionContext(
                snapshot=snapshot_from_records(data["snapshot"]),
                current_tick=int(data["current_tick"]),
                running_pid=int(data.get("running_pid", NO_PID)),
            )
            policy = lookup_policy(str(data["policy"]), total_time=totals.__getitem__)
        except (TypeError, ValueError, UnknownPolicyError) as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        if not context.snapshot:
            return jsonify({"error": "Snapshot must not be empty"}), _HTTP_BAD_REQUEST
        if logger is not None:
            policy = TracedPolicy(policy, logger)

        try:
            pid = decide(policy, context)
        except KeyError as e:
            msg = f"No total time given for PID {e.args[0]}"
            return jsonify({"error": msg}), _HTTP_BAD_REQUEST
        except ValueError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        return jsonify({"pid": pid, "idle": pid == NO_PID})

    return app


def main() -> None:
    """Run the decision service development server.

    This is the ``py-sched-web`` console entry point.
    """
    app = create_app(logger=Logger())
    app.run(debug=True, port=8080)
