# mirror/report.py
from __future__ import annotations
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from mirror.engine import ScanRecord

REPORT_TIME_FORMAT = "%Y-%m-%d-%H-%M-%S"


def report_filename(when: Optional[datetime] = None) -> str:
    when = when or datetime.now()
    return f"scan-report-{when.strftime(REPORT_TIME_FORMAT)}.json"


def report_dict(record: ScanRecord) -> dict:
    return {
        "meta": {
            "start": record.start.isoformat(),
            "end": record.end.isoformat() if record.end else None,
            "duration": str(record.duration),
        },
        "errors": list(record.errors),
        "queue": list(record.queue),
    }


def write_scan_report(record: ScanRecord, storage_root: str | os.PathLike, when: Optional[datetime] = None) -> Path:
    """Serialize `record` next to the mirrored copies and return the report path."""
    path = Path(storage_root) / report_filename(when)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report_dict(record), f, ensure_ascii=False, indent=2)
        f.write("\n")
    return path


def summary_lines(record: ScanRecord) -> list[tuple[str, str]]:
    """(label, value) pairs printed at the end of a run."""
    return [
        ("Run started", record.start.isoformat(sep=" ", timespec="seconds")),
        ("Run ended", record.end.isoformat(sep=" ", timespec="seconds") if record.end else "-"),
        ("Run took", str(record.duration)),
        ("Total URLs scanned", str(len(record.queue))),
        ("Total errors while scanning", str(len(record.errors))),
    ]
