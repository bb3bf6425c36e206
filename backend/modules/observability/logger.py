"""
Structured JSON audit logger: append-only, one object per line (.jsonl).

Usage:
    from modules.observability.logger import StructuredLogger

    audit = StructuredLogger()
    audit.log("trip_abc123", "context_built", {"issues": 4, "warnings": 0})

Records are written to  <LOGS_DIR>/<stream>.jsonl  where stream is usually the
trip id. Stream names come from untrusted documents, so anything outside
[A-Za-z0-9_-] is replaced before it reaches the filesystem.
"""

from __future__ import annotations

import json
import os
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import IO

import config

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_ANONYMOUS_STREAM = "anonymous"


def stream_name(key: str) -> str:
    cleaned = _UNSAFE_CHARS.sub("_", key or "")[:128]
    return cleaned or _ANONYMOUS_STREAM


class StructuredLogger:
    """Thread-safe, append-only JSONL logger keyed by stream name."""

    def __init__(self, logs_dir: Path | str | None = None) -> None:
        self._logs_dir = Path(logs_dir) if logs_dir else config.LOGS_DIR
        self._lock = threading.Lock()
        self._handles: dict[str, IO[str]] = {}

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    @property
    def open_streams(self) -> list[str]:
        with self._lock:
            return sorted(self._handles)

    # ── public API ────────────────────────────────────────────────────────

    def log(self, stream: str, event_type: str, payload: dict) -> None:
        """Append one structured JSON record to ``<stream>.jsonl``."""
        name = stream_name(stream)
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "stream": name,
            "event_type": event_type,
            "payload": payload,
        }
        line = json.dumps(record, default=str, ensure_ascii=False) + "\n"

        with self._lock:
            fh = self._handles.get(name)
            if fh is None:
                fh = self._open(name)
            fh.write(line)
            fh.flush()

    def close(self, stream: str | None = None) -> None:
        """Close one or all open file handles."""
        with self._lock:
            if stream:
                fh = self._handles.pop(stream_name(stream), None)
                if fh:
                    fh.close()
            else:
                for fh in self._handles.values():
                    fh.close()
                self._handles.clear()

    # ── internals ─────────────────────────────────────────────────────────

    def _open(self, name: str) -> IO[str]:
        os.makedirs(self._logs_dir, exist_ok=True)
        path = self._logs_dir / f"{name}.jsonl"
        fh = open(path, "a", encoding="utf-8")  # noqa: SIM115
        self._handles[name] = fh
        return fh
