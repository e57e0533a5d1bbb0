"""Process scanner: matches the running process names against the game registry."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence

import psutil
from loguru import logger

from paradox_presence.core import registry
from paradox_presence.models.game import GameSignature

ProcessLister = Callable[[], Iterable[str]]


def list_processes() -> Iterator[str]:
    """Yield the name of every running process.

    Processes that vanish or deny access while being listed are skipped.
    """
    for proc in psutil.process_iter(["name"]):
        try:
            name = proc.info["name"]
        except psutil.Error as e:
            logger.debug("Skipping process {}: {}", proc.pid, e)
            continue
        if name:
            yield name


class ProcessScanner:
    """Finds which supported game, if any, is currently running."""

    def __init__(
        self,
        signatures: Sequence[GameSignature] | None = None,
        lister: ProcessLister | None = None,
    ) -> None:
        self._signatures = tuple(signatures if signatures is not None else registry.SIGNATURES)
        self._keys = [(sig, sig.process_name.lower()) for sig in self._signatures]
        self._lister = lister or list_processes

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_signatures(self) -> list[GameSignature]:
        return list(self._signatures)

    def scan(self) -> GameSignature | None:
        """Return the running game's signature, or ``None``.

        Every signature is tested against every line.  When several games
        are running, the one registered first wins regardless of where it
        appears in the listing; reading stops as soon as the top-priority
        signature matches.  Any failure of the listing counts as "no game".
        """
        if not self._keys:
            return None

        lines = None
        best: int | None = None
        try:
            lines = self._lister()
            for line in lines:
                lowered = line.lower()
                limit = len(self._keys) if best is None else best
                for index in range(limit):
                    if self._keys[index][1] in lowered:
                        best = index
                        break
                if best == 0:
                    break
        except Exception as e:
            logger.error("Error detecting running games: {}", e)
            return None
        finally:
            close = getattr(lines, "close", None)
            if close is not None:
                try:
                    close()
                except Exception as e:
                    logger.debug("Error closing process listing: {}", e)
        return self._keys[best][0] if best is not None else None
