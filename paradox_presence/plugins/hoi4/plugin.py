"""Hearts of Iron IV plugin: reads the player country and year from ``.hoi4`` saves."""

from __future__ import annotations

import re
from enum import Enum
from itertools import islice
from pathlib import Path

from loguru import logger

from paradox_presence.plugins.base import SaveExtractor
from paradox_presence.plugins.hoi4.countries import get_country_name

# Every save starts with a 7-byte magic.  Ironman saves are binary and are
# deliberately not parsed.
_TXT_HEADER = b"HOI4txt"
_BIN_HEADER = b"HOI4bin"
_HEADER_LEN = 7

# The player tag and date sit near the top of a plaintext save, so only the
# first lines after the header are scanned.
_MAX_LINES = 1000

_TAG_RE = re.compile(r'player="([A-Z]{3})"')
# Saves written in-game carry an hour suffix: date="1936.1.1.12"
_DATE_RE = re.compile(r'date="(\d{4})\.(\d+)\.(\d+)(?:\.\d+)?"')

DEFAULT_DETAILS = "Conquering the World"
IRONMAN_STATE = "Ironman Mode"


class SaveFormat(str, Enum):
    """What the header says about a save."""

    PLAINTEXT = "plaintext"
    BINARY = "binary"
    UNKNOWN = "unknown"


def detect_format(save_file: Path) -> SaveFormat:
    """Classify *save_file* by its magic header.

    Raises ``OSError`` if the file cannot be opened.
    """
    with open(save_file, "rb") as f:
        header = f.read(_HEADER_LEN)

    if len(header) < _HEADER_LEN:
        logger.debug("File too short to have valid header: {}", save_file.name)
        return SaveFormat.UNKNOWN
    if header == _BIN_HEADER:
        return SaveFormat.BINARY
    if header == _TXT_HEADER:
        return SaveFormat.PLAINTEXT
    logger.debug("Unknown header format {!r} in {}", header, save_file.name)
    return SaveFormat.UNKNOWN


class Hoi4Extractor(SaveExtractor):
    """Save extractor for Hearts of Iron IV."""

    name = "hoi4"
    extension = ".hoi4"

    def __init__(self, *args, **kwargs) -> None:  # noqa: ANN002, ANN003
        super().__init__(*args, **kwargs)
        self.country_tag: str | None = None
        self.country_name: str | None = None
        self.year: str | None = None
        self.is_ironman = False

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, save_file: Path) -> None:
        logger.info("Extracting data from: {}", save_file.name)
        try:
            fmt = detect_format(save_file)
            if fmt is SaveFormat.PLAINTEXT:
                self._extract_from_plaintext(save_file)
                self.is_ironman = False
            else:
                # Binary saves are not parsed; unknown ones cannot be.
                self.is_ironman = fmt is SaveFormat.BINARY
                self.country_tag = None
                self.country_name = None
                self.year = None
        except OSError as e:
            logger.error("Error extracting data from save file {}: {}", save_file.name, e)
            return

        logger.info(
            "Extracted data: Ironman: {}, Country: {}, Year: {}",
            self.is_ironman, self.country_name, self.year,
        )

    def _extract_from_plaintext(self, save_file: Path) -> None:
        with open(save_file, "r", encoding="utf-8", errors="replace") as f:
            f.readline()  # header line
            content = "".join(islice(f, _MAX_LINES))

        m = _TAG_RE.search(content)
        if m:
            self.country_tag = m.group(1)
            self.country_name = get_country_name(self.country_tag)
            logger.debug("Found player tag: {} ({})", self.country_tag, self.country_name)

        m = _DATE_RE.search(content)
        if m:
            self.year = m.group(1)
            logger.debug("Found year: {}", self.year)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def details_text(self) -> str:
        if not self.is_ironman and self.country_name:
            return f"Playing as {self.country_name}"
        return DEFAULT_DETAILS

    def state_text(self) -> str | None:
        if self.is_ironman:
            return IRONMAN_STATE
        if self.year:
            return f"Year: {self.year}"
        return None
