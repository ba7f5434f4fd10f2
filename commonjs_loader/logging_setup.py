"""
CLI JSONL logging bootstrap.
Installs a single JSONL file sink on the root logger at CLI startup.
Library code only ever logs through module-level loggers, tagging loader
records with ``extra={"event": ..., "specifier": ..., "path": ...}``.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("CJS_LOADER_LOG_PATH", "./cjs-loader.log.jsonl")
DEFAULT_LEVEL = os.environ.get("CJS_LOADER_LOG_LEVEL", "WARNING").upper()

# Structured fields carried by loader records, copied into the payload when set
MODULE_FIELDS = ("specifier", "requester", "path", "field", "cached")


class JsonlHandler(logging.Handler):
    """Append one JSON object per record to a file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def format_record(self, record: logging.LogRecord) -> dict:
        payload = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "cjs-loader.log", "ver": "1.1.0"},
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        module = {name: getattr(record, name) for name in MODULE_FIELDS if hasattr(record, name)}
        if module:
            payload["module"] = module
        if record.exc_info:
            payload["error"] = logging.Formatter().formatException(record.exc_info)
        return payload

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.format_record(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None) -> JsonlHandler:
    """Install the JSONL sink on the root logger, replacing an earlier one."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.WARNING))
    for handler in [h for h in root.handlers if isinstance(h, JsonlHandler)]:
        root.removeHandler(handler)
        handler.close()
    sink = JsonlHandler(path or DEFAULT_PATH)
    root.addHandler(sink)
    return sink
