"""Scheduling decisions over HTTP.

A host simulator that is not written in Python can still use these
policies: it posts its per-tick snapshot as JSON and reads back the
PID to run.  Flask is only needed for this subpackage, so it ships
behind the ``web`` extra (``pip install py-sched[web]``).

See ``app.create_app`` for the routes and the request format.
"""
