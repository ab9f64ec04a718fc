"""Read run logs back into their pydantic records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

from gridbot.sim.events import RunHeader, RunSummary, TickRecord


def read_tick_records(path: Path) -> Iterator[TickRecord]:
    for record in _records(path, "tick"):
        payload = record.get("payload")
        if payload is None:
            continue
        yield TickRecord.model_validate(payload)


def read_header(path: Path) -> RunHeader | None:
    for record in _records(path, "header"):
        return RunHeader.model_validate(record.get("metadata", {}))
    return None


def read_summary(path: Path) -> RunSummary | None:
    """Footer of a finished run; `None` while the run is still being written."""
    for record in _records(path, "footer"):
        return RunSummary.model_validate(record.get("summary", {}))
    return None


def _records(path: Path, record_type: str) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = _parse_record(line)
            if isinstance(record, dict) and record.get("type") == record_type:
                yield record


def _parse_record(line: str) -> dict | None:
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        return None
