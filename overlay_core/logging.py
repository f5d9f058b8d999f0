"""
Structured logging for the overlays.

All loggers live under the ``overlay`` namespace and share the handlers
of that root: one JSON-lines file (``overlay.jsonl``, DEBUG+, rotating
10 MB / 5 backups) in the configured logs directory, and a console
handler (INFO+ unless changed with :func:`set_console_level`).

Redraw records can carry visualization context through ``extra``::

    logger.debug("Redrawn", extra={"marker": "bubbleMarker", "dims": [0, 1]})

Those fields end up as top-level keys of the JSON line.
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_NAME = "overlay"

# Record attributes copied into the JSON line when present.
CONTEXT_FIELDS = ("marker", "dims", "redraw", "layer_size")

_MAX_BYTES = 10 * 1024 * 1024   # 10 MB
_BACKUP_COUNT = 5
_CONSOLE_FMT = "%(asctime)s | %(name)-32s | %(levelname)-7s | %(message)s"

_log_dir: Optional[Path] = None
_console_handler: Optional[logging.Handler] = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with any visualization context fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _resolve_log_dir() -> Path:
    """Logs directory from ``paths.logs_dir`` in config.json, else ./logs."""
    global _log_dir
    if _log_dir is not None:
        return _log_dir

    # overlay_core.config logs through this module, so config.json is read directly.
    log_path = Path("logs")
    config_file = Path("config.json")
    if config_file.exists():
        try:
            cfg = json.loads(config_file.read_text())
        except (OSError, ValueError) as e:
            print(f"Ignoring unreadable config.json for logging: {e}", file=sys.stderr)
            cfg = {}
        paths = cfg.get("paths") if isinstance(cfg, dict) else None
        if isinstance(paths, dict) and paths.get("logs_dir"):
            log_path = Path(paths["logs_dir"])

    try:
        log_path.mkdir(parents=True, exist_ok=True)
    except OSError:
        log_path = Path("logs")
        log_path.mkdir(parents=True, exist_ok=True)

    _log_dir = log_path
    return _log_dir


def _root_logger() -> logging.Logger:
    global _console_handler
    root = logging.getLogger(ROOT_NAME)
    if root.handlers:
        return root

    root.setLevel(logging.DEBUG)
    root.propagate = False

    file_handler = RotatingFileHandler(
        _resolve_log_dir() / f"{ROOT_NAME}.jsonl",
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JsonFormatter())
    root.addHandler(file_handler)

    _console_handler = logging.StreamHandler(sys.stdout)
    _console_handler.setLevel(logging.INFO)
    _console_handler.setFormatter(logging.Formatter(_CONSOLE_FMT))
    root.addHandler(_console_handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Logger ``overlay.<name>`` (e.g. ``get_logger("visualization.bubble")``).

    The shared handlers are installed on first use; further calls add
    nothing.
    """
    _root_logger()
    if name == ROOT_NAME or name.startswith(ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_NAME}.{name}")


def set_console_level(level: Union[int, str]) -> None:
    """Change the console threshold (the file handler keeps DEBUG)."""
    _root_logger()
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved
    _console_handler.setLevel(level)
