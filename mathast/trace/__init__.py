"""Trace logging helpers for parse runs."""

from mathast.trace.event import new_event, parse_events
from mathast.trace.logger import TraceLogger

__all__ = ["TraceLogger", "new_event", "parse_events"]
