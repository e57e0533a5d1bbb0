"""Abstract base class for per-game save extractors."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

from loguru import logger

from paradox_presence.core.locator import find_latest


class SaveExtractor(ABC):
    """Base class that every game's save extractor must implement.

    Refresh cycle
    ~~~~~~~~~~~~~
    :meth:`refresh` is cheap to call on every poll tick.  It throttles
    itself on its own clock, locates the newest save, and only calls
    :meth:`_decode` when the (path, mtime) pair differs from the last one
    seen.  Subclasses keep their telemetry in instance attributes and
    must only overwrite a field when a value was actually extracted, so
    a broken or half-written save never erases good data.
    """

    #: Unique plugin name (e.g. ``"hoi4"``).
    name: str = ""

    #: Filename suffix of this game's saves (e.g. ``".sav"``).
    extension: str = ""

    def __init__(
        self,
        save_dir: Path | None,
        refresh_interval_ms: int = 5000,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._save_dir = save_dir
        self._interval = refresh_interval_ms / 1000.0
        self._monotonic = monotonic
        self._last_check: float | None = None
        self._last_path: Path | None = None
        self._last_mtime: int | None = None
        self.decode_count = 0

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def save_dir(self) -> Path | None:
        return self._save_dir

    @property
    def last_save(self) -> Path | None:
        """The save file decoded most recently."""
        return self._last_path

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    def keep_candidate(self, path: Path) -> bool:
        """Return False to hide *path* from the locator.  Accepts all by default."""
        return True

    def find_latest_save(self) -> Path | None:
        return find_latest(self._save_dir, self.extension, self.keep_candidate)

    def refresh(self) -> bool:
        """Re-read the newest save if it changed.

        Returns True when a decode was performed this call.
        """
        now = self._monotonic()
        if self._last_check is not None and now - self._last_check < self._interval:
            return False
        self._last_check = now

        latest = self.find_latest_save()
        if latest is None:
            logger.debug("[{}] No save file available for update check", self.name)
            return False

        try:
            mtime = latest.stat().st_mtime_ns
        except OSError as e:
            logger.warning("[{}] Cannot read modification time of {}: {}", self.name, latest, e)
            return False

        if latest == self._last_path and mtime == self._last_mtime:
            return False

        logger.info("[{}] New or updated save file detected: {}", self.name, latest.name)
        self._last_path = latest
        self._last_mtime = mtime
        self.decode_count += 1
        self._decode(latest)
        return True

    @abstractmethod
    def _decode(self, save_file: Path) -> None:
        """Parse *save_file* into the cached telemetry fields.

        Must not raise for I/O or format problems; log and keep the cache.
        """
        ...

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @abstractmethod
    def details_text(self) -> str:
        """First presence line.  Never empty."""
        ...

    @abstractmethod
    def state_text(self) -> str | None:
        """Optional second presence line."""
        ...
