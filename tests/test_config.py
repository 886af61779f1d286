import logging
from pathlib import Path

import pytest

from ringbuf.config import DEFAULT_CAPACITY, ConfigError, build_from_yaml, load_settings
from ringbuf.core.buffer import BufferFullError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in ("RINGBUF_CAPACITY", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(k, raising=False)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "buffers.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_load_settings_defaults():
    s = load_settings()
    assert s["default_capacity"] == DEFAULT_CAPACITY
    assert s["buffers"] == {}
    assert s["logging"] == {"level": None, "json": None}


def test_env_overrides_yaml(tmp_path: Path, monkeypatch):
    p = _write(tmp_path, "default_capacity: 16\nlogging:\n  level: INFO\n  json: true\n")
    monkeypatch.setenv("RINGBUF_CAPACITY", "32")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.setenv("LOG_JSON", "0")
    s = load_settings(p)
    assert s["default_capacity"] == 32
    assert s["logging"] == {"level": "ERROR", "json": False}


def test_build_from_yaml(tmp_path: Path, restore_logging):
    p = _write(tmp_path, (
        "logging:\n"
        "  level: WARNING\n"
        "buffers:\n"
        "  frames: 2\n"
        "  events: {capacity: 64}\n"
        "  scratch:\n"
    ))
    bufs = build_from_yaml(p)
    assert set(bufs) == {"frames", "events", "scratch"}
    assert bufs["frames"].capacity == 2
    assert bufs["events"].capacity == 64
    assert bufs["scratch"].capacity == DEFAULT_CAPACITY
    assert bufs["frames"].name == "ringbuf.frames"

    frames = bufs["frames"]
    frames.push("a")
    frames.push("b")
    with pytest.raises(BufferFullError):
        frames.push("c")


def test_empty_file_builds_nothing(tmp_path: Path, restore_logging):
    assert build_from_yaml(_write(tmp_path, "")) == {}


@pytest.mark.parametrize("text", [
    "- just\n- a list\n",
    "buffers: [1, 2]\n",
    "buffers:\n  frames: 0\n",
    "buffers:\n  frames: lots\n",
    "buffers:\n  frames: {capacity: -3}\n",
    "logging: loud\n",
    "buffers: {frames: [\n",
    "buffers:\n  frames: 2.5\n",
    "buffers:\n  frames: true\n",
    "buffers:\n  frames: {capacity: 7.9}\n",
    "buffers:\n  frames: {capacity: false}\n",
])
def test_malformed_config_raises(tmp_path: Path, restore_logging, text):
    with pytest.raises(ConfigError):
        build_from_yaml(_write(tmp_path, text))


def test_bad_env_capacity(monkeypatch):
    monkeypatch.setenv("RINGBUF_CAPACITY", "0")
    with pytest.raises(ConfigError):
        load_settings()


def test_null_capacity_means_default(tmp_path: Path, restore_logging):
    p = _write(tmp_path, "buffers:\n  frames: {capacity: null}\n  events:\n")
    bufs = build_from_yaml(p)
    assert bufs["frames"].capacity == DEFAULT_CAPACITY
    assert bufs["events"].capacity == DEFAULT_CAPACITY


def test_env_capacity_string_is_accepted(monkeypatch):
    monkeypatch.setenv("RINGBUF_CAPACITY", "12")
    assert load_settings()["default_capacity"] == 12
