"""Optimizer process package.

The core (`dispatch.optimize`, `stats.compute_statistics`) is a pure function
of its inputs and does no I/O. `adapter.py` wires it to the catalog store and
the CLI; it is not imported by the core modules.
"""
