"""Find the newest save file beneath a game's save directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from loguru import logger

# Base directory entries plus one level of sub-folders
# (e.g. ``save games/<campaign>/autosave.sav``).
MAX_DEPTH = 2


def _iter_files(base_dir: Path, depth: int):
    """Yield regular files under *base_dir*, descending *depth* levels."""
    try:
        entries = list(os.scandir(base_dir))
    except OSError as e:
        logger.debug("Cannot list {}: {}", base_dir, e)
        return

    for entry in entries:
        try:
            if entry.is_file():
                yield Path(entry.path)
            elif entry.is_dir() and depth > 1:
                yield from _iter_files(Path(entry.path), depth - 1)
        except OSError as e:
            logger.debug("Skipping {}: {}", entry.path, e)


def find_latest(
    base_dir: Path | None,
    extension: str,
    keep: Callable[[Path], bool] | None = None,
) -> Path | None:
    """Return the most recently modified ``*extension`` file in *base_dir*.

    Parameters
    ----------
    base_dir : Path
        Root of the search.  ``None`` or a missing directory yields ``None``.
    extension : str
        Filename suffix to match (e.g. ``".sav"``).
    keep : callable, optional
        Extra filter; candidates for which it returns False are ignored.

    Returns
    -------
    Path | None
        The newest candidate.  Files sharing the newest modification time
        are ordered by path so repeated calls pick the same one.
    """
    if base_dir is None or not base_dir.is_dir():
        logger.debug("Save directory not found: {}", base_dir)
        return None

    best: Path | None = None
    best_key: tuple[int, str] | None = None

    for path in _iter_files(base_dir, MAX_DEPTH):
        if not path.name.endswith(extension):
            continue
        if keep is not None and not keep(path):
            continue
        try:
            mtime = path.stat().st_mtime_ns
        except OSError as e:
            logger.debug("Cannot stat {}: {}", path, e)
            continue

        key = (mtime, str(path))
        if best_key is None or key > best_key:
            best, best_key = path, key

    if best is None:
        logger.debug("No {} files found in {}", extension, base_dir)
    return best
