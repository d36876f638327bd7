"""Consistency progression engine for a group fitness challenge."""

from consistency_engine.engine import ConsistencyEngine

__all__ = ["ConsistencyEngine"]
