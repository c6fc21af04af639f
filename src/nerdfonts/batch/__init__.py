"""Bounded parallel execution of per-font operations."""

from .dispatcher import (
    DispatchCallback,
    DispatchProgressInfo,
    LoggingDispatchCallback,
    ParallelDispatcher,
)

__all__ = [
    "DispatchCallback",
    "DispatchProgressInfo",
    "LoggingDispatchCallback",
    "ParallelDispatcher",
]
