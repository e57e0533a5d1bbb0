"""Stellaris plugin: reads the empire name and date from ``.sav`` archives.

A Stellaris save is a zip archive with two text members:

- ``meta``       small header with ``date="2250.03.01"`` and ``name="..."``
- ``gamestate``  the full game state (tens of MB)

When ``meta`` carries no name, the first ``name="..."`` in ``gamestate`` is
used instead.  That value is not guaranteed to be the player's empire (the
gamestate holds many named objects); it is a best-effort guess and is kept
that way on purpose.
"""

from __future__ import annotations

import re
import zipfile
import zlib
from pathlib import Path

from loguru import logger

from paradox_presence.plugins.base import SaveExtractor

_DATE_RE = re.compile(r'date="([^"]+)"')
_NAME_RE = re.compile(r'name="([^"]+)"')

_META_ENTRY = "meta"
_GAMESTATE_ENTRY = "gamestate"

# Ironman autosaves live next to regular saves as ``ironman*.sav``.
_EXCLUDED_PREFIX = "ironman"

DEFAULT_DETAILS = "Exploring the Galaxy"


def _read_entry(zf: zipfile.ZipFile, entry: str) -> str | None:
    """Return the UTF-8 text of *entry*, or ``None`` if it is absent."""
    try:
        data = zf.read(entry)
    except KeyError:
        logger.debug("No '{}' entry found in save file", entry)
        return None
    return data.decode("utf-8", errors="replace")


class StellarisExtractor(SaveExtractor):
    """Save extractor for Stellaris."""

    name = "stellaris"
    extension = ".sav"

    def __init__(self, *args, **kwargs) -> None:  # noqa: ANN002, ANN003
        super().__init__(*args, **kwargs)
        self.game_date: str | None = None
        self.empire_name: str | None = None

    def keep_candidate(self, path: Path) -> bool:
        return not path.name.startswith(_EXCLUDED_PREFIX)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, save_file: Path) -> None:
        logger.info("Extracting data from: {}", save_file.name)
        try:
            with zipfile.ZipFile(save_file) as zf:
                meta = _read_entry(zf, _META_ENTRY)
                name_found = False
                if meta is not None:
                    name_found = self._extract_from_meta(meta)

                if not name_found:
                    gamestate = _read_entry(zf, _GAMESTATE_ENTRY)
                    if gamestate is not None:
                        self._extract_from_gamestate(gamestate)
        except (zipfile.BadZipFile, zlib.error, EOFError, OSError, RuntimeError, ValueError) as e:
            # Truncated or half-written archives fail in several ways.
            logger.error("Error extracting data from save file {}: {}", save_file.name, e)
            return

        logger.info("Extracted data: Date: {}, Empire: {}", self.game_date, self.empire_name)

    def _extract_from_meta(self, content: str) -> bool:
        """Update the cache from ``meta``.  Returns True if a name was found."""
        m = _DATE_RE.search(content)
        if m:
            self.game_date = m.group(1)

        m = _NAME_RE.search(content)
        if m:
            self.empire_name = m.group(1)
            return True
        return False

    def _extract_from_gamestate(self, content: str) -> None:
        m = _NAME_RE.search(content)
        if m:
            self.empire_name = m.group(1)
            logger.debug("Empire name taken from gamestate: {}", self.empire_name)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def year(self) -> str | None:
        if not self.game_date:
            return None
        return self.game_date.split(".")[0]

    def details_text(self) -> str:
        if self.empire_name:
            return f"Playing as {self.empire_name}"
        return DEFAULT_DETAILS

    def state_text(self) -> str | None:
        year = self.year
        if year:
            return f"Year: {year}"
        return None
