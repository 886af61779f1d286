# src/ringbuf/config.py
from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from ringbuf.core import log
from ringbuf.core.buffer import RingBuffer

DEFAULT_CAPACITY = 256


class ConfigError(ValueError):
    """Malformed buffer configuration document."""


def _read_yaml(path: str | Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _as_capacity(name: str, raw: Any) -> int:
    # YAML ints, or digit strings from the env; no bools, no floats
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ConfigError(f"buffer {name!r}: capacity must be an integer, got {raw!r}")
    try:
        cap = int(raw)
    except ValueError as e:
        raise ConfigError(f"buffer {name!r}: capacity must be an integer, got {raw!r}") from e
    if cap <= 0:
        raise ConfigError(f"buffer {name!r}: capacity must be positive, got {cap}")
    return cap


def load_settings(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Read the YAML document (if any) and layer env overrides on top.

    Env: RINGBUF_CAPACITY (default capacity), LOG_LEVEL, LOG_JSON.
    """
    data = _read_yaml(path) if path else {}

    log_cfg = data.get("logging") or {}
    if not isinstance(log_cfg, dict):
        raise ConfigError("'logging' section must be a mapping")
    buffers = data.get("buffers") or {}
    if not isinstance(buffers, dict):
        raise ConfigError("'buffers' section must be a mapping of name -> capacity")

    default_cap = _as_capacity(
        "<default>", os.getenv("RINGBUF_CAPACITY", data.get("default_capacity", DEFAULT_CAPACITY))
    )

    level = os.getenv("LOG_LEVEL", log_cfg.get("level"))
    json_env = os.getenv("LOG_JSON")
    json_mode = (json_env == "1") if json_env is not None else log_cfg.get("json")

    return {
        "default_capacity": default_cap,
        "logging": {"level": level, "json": json_mode},
        "buffers": buffers,
    }


def build_from_yaml(yaml_path: str | Path) -> Dict[str, RingBuffer]:
    """Read a buffers YAML file, set up logging, and build the named buffers."""
    settings = load_settings(yaml_path)
    lcfg = settings["logging"]
    log.setup(lcfg["level"], lcfg["json"], force=True)
    lg = log.get("ringbuf.config")

    out: Dict[str, RingBuffer] = {}
    for name, spec in settings["buffers"].items():
        name = str(name)
        # name: 8 | name: {capacity: 8} | name: (empty -> default)
        if spec is None:
            cap = settings["default_capacity"]
        elif isinstance(spec, dict):
            raw = spec.get("capacity")
            cap = settings["default_capacity"] if raw is None else _as_capacity(name, raw)
        else:
            cap = _as_capacity(name, spec)
        out[name] = RingBuffer(cap, name=f"ringbuf.{name}")
        lg.info("buffer built name=%s cap=%d", name, cap)
    return out
