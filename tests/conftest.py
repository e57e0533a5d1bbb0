"""Pytest configuration and shared fixtures for Paradox Presence tests."""

from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from paradox_presence.config import Config
from paradox_presence.core.presence import PresenceSink
from paradox_presence.plugins.hoi4.plugin import Hoi4Extractor
from paradox_presence.plugins.plugin_manager import PluginManager
from paradox_presence.plugins.stellaris.plugin import StellarisExtractor


class FakeClock:
    """Manually advanced clock usable as ``now`` or ``monotonic``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class RecordingSink(PresenceSink):
    """Presence sink that remembers every call."""

    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.calls: list[tuple] = []
        self.updates: list[tuple] = []

    def initialize(self, app_id: str) -> bool:
        self.calls.append(("initialize", app_id))
        return self.accept

    def update(self, details, state, start, large_image, large_text) -> None:
        self.calls.append(("update", details, state))
        self.updates.append((details, state, start, large_image, large_text))

    def clear(self) -> None:
        self.calls.append(("clear",))

    def run_pending_callbacks(self) -> None:
        self.calls.append(("callbacks",))

    def shutdown(self) -> None:
        self.calls.append(("shutdown",))

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


def set_mtime(path: Path, seconds: int) -> None:
    ns = seconds * 1_000_000_000
    os.utime(path, ns=(ns, ns))


def write_hoi4(path: Path, body: str = "", header: bytes = b"HOI4txt", mtime: int | None = None) -> Path:
    """Write a HOI4 save: magic header line followed by *body*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(header + b"\n" + body.encode("utf-8"))
    if mtime is not None:
        set_mtime(path, mtime)
    return path


def write_stellaris(
    path: Path,
    meta: str | None = None,
    gamestate: str | None = None,
    mtime: int | None = None,
) -> Path:
    """Write a Stellaris save archive with the given members."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        if meta is not None:
            zf.writestr("meta", meta)
        if gamestate is not None:
            zf.writestr("gamestate", gamestate)
    if mtime is not None:
        set_mtime(path, mtime)
    return path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def config(tmp_path):
    """A fresh Config singleton backed by a temporary file."""
    Config.reset()
    cfg = Config(tmp_path / "data" / "config.json")
    yield cfg
    Config.reset()


@pytest.fixture
def save_root(tmp_path) -> Path:
    root = tmp_path / "saves"
    root.mkdir()
    return root


@pytest.fixture
def plugin_manager(config, save_root, clock) -> PluginManager:
    """Plugin manager whose games save into *save_root* with no throttle."""
    config.set("refresh_interval_ms", 0)
    config.set_save_dir("hoi4", str(save_root / "hoi4"))
    config.set_save_dir("stellaris", str(save_root / "stellaris"))
    pm = PluginManager(config, monotonic=clock)
    pm.register(Hoi4Extractor)
    pm.register(StellarisExtractor)
    return pm
