from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

TEXT_FMT = "[%(asctime)s] %(levelname)s %(name)s | %(message)s"

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, lvl, name, msg + call site."""

    def format(self, record: logging.LogRecord) -> str:
        obj = {
            "ts": record.created,
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
            "filename": record.filename,
            "lineno": record.lineno,
            "funcName": record.funcName,
        }
        if record.exc_info:
            obj["exc"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False)


def _resolve_level(name: str) -> int:
    lvl = logging.getLevelName(name.upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def setup(level: Optional[str] = None, json_mode: Optional[bool] = None, *, force: bool = False) -> None:
    """Configure root logger.
    - Loads .env, then reads LOG_LEVEL / LOG_JSON for args left as None
    - If already configured, do nothing unless force=True
    """
    global _configured
    if _configured and not force:
        return

    load_dotenv()

    py_level = _resolve_level(level or os.getenv("LOG_LEVEL", "INFO"))
    json_flag = json_mode if json_mode is not None else (os.getenv("LOG_JSON", "0") == "1")

    root = logging.getLogger()
    # Reset handlers to avoid duplicate logs (pytest re-runs etc.)
    root.handlers.clear()
    root.setLevel(py_level)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter() if json_flag else logging.Formatter(fmt=TEXT_FMT))
    root.addHandler(handler)

    _configured = True


def get(name: str) -> logging.Logger:
    """Helper to get a namespaced logger."""
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Adjust root log level at runtime (e.g., during tests)."""
    logging.getLogger().setLevel(_resolve_level(level))
