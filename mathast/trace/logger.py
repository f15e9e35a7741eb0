"""JSONL sink for parse trace events."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

from mathast.trace.event import parse_events

if TYPE_CHECKING:
    from mathast.latex.parser import ParseResult


class TraceLogger:
    """Appends events to a JSONL file, stamping each with the logger's run id.

    All events written through one logger share ``run_id``, so several runs
    can append to the same file and still be told apart.
    """

    def __init__(self, path: str | Path, *, run_id: str | None = None) -> None:
        self.path = Path(path)
        self.run_id = run_id or uuid4().hex
        self.events_written = 0
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")

    def append(self, event: dict) -> None:
        record = {"run_id": self.run_id, **event}
        self._fh.write(json.dumps(record, ensure_ascii=False, separators=(",", ":")) + "\n")
        self.events_written += 1

    def record_parse(self, result: ParseResult) -> int:
        """Append the events for one parse; returns how many were written."""

        events = parse_events(result)
        for event in events:
            self.append(event)
        return len(events)

    def flush(self) -> None:
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> "TraceLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
