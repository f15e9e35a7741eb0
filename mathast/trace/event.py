"""Trace events describing parse runs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from mathast.latex.parser import ParseResult


def timestamp() -> str:
    """Current UTC time as ISO 8601 with millisecond precision and ``Z``."""

    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def new_event(kind: str, message: str, *, data: dict | None = None) -> dict:
    return {
        "event_id": uuid4().hex,
        "ts": timestamp(),
        "kind": kind,
        "message": message,
        "data": data,
    }


def parse_events(result: ParseResult) -> list[dict]:
    """One ``parse`` summary event, then a ``warning`` event per diagnostic.

    Warning events carry the diagnostic payload plus its index in
    ``result.warnings`` so they can be matched back to the JSON result.
    """

    summary = {
        "status": result.status,
        "raw_latex": result.raw_latex,
        "nodes": len(result.ast.children),
        "warnings": len(result.warnings),
    }
    events = [new_event("parse", f"{result.status}: {len(result.raw_latex)} chars", data=summary)]
    for index, warning in enumerate(result.warnings):
        payload = warning.model_dump(mode="json", exclude_none=True)
        payload["index"] = index
        events.append(new_event("warning", f"{warning.code.value}: {warning.message}", data=payload))
    return events
