"""Run logging helpers (JSONL).

A run log holds one header line, one line per tick and a closing footer.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from gridbot.sim.events import RunHeader, RunSummary, TickRecord

SCHEMA_VERSION = 1
RUN_LOG_NAME = "run.jsonl"


def create_run_folder(
    base_dir: Path, *, timestamp: str | None = None
) -> tuple[Path, Path]:
    run_id = timestamp or _format_timestamp(datetime.now(timezone.utc))
    run_dir = base_dir / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir, run_dir / RUN_LOG_NAME


def write_header(path: Path, header: RunHeader) -> None:
    _append_record(path, "header", metadata=header.model_dump(mode="json"))


def append_tick_record(path: Path, tick: TickRecord) -> None:
    _append_record(path, "tick", payload=tick.model_dump(mode="json"))


def write_footer(path: Path, summary: RunSummary) -> None:
    _append_record(path, "footer", summary=summary.model_dump(mode="json"))


def record_run(path: Path, header: RunHeader, ticks: Iterable[TickRecord]) -> int:
    """Write the header and stream every tick record; return the tick count."""
    write_header(path, header)
    count = 0
    for tick in ticks:
        append_tick_record(path, tick)
        count += 1
    return count


def _append_record(path: Path, record_type: str, **fields: Any) -> None:
    record: dict[str, Any] = {"type": record_type, "schema_version": SCHEMA_VERSION}
    record.update(fields)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record))
        handle.write("\n")


def _format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H-%M-%SZ")
