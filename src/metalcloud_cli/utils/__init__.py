"""Shared utilities — small pure helpers usable by any layer.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""
