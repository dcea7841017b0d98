"""Repository layer: SQL helpers that work on an already-open connection.

Services own the connection and call these instead of writing SQL themselves.
"""
from __future__ import annotations
