"""Cross-platform lookup of the Paradox save-game directories.

On Windows the "Documents" folder can be relocated by the user (e.g. to
``D:\\Documents``).  ``Path.home() / "Documents"`` does **not** reflect
this, it always returns ``C:\\Users\\<user>\\Documents``.  We must use
the Windows Shell API to obtain the real location.

Paradox titles keep their saves under::

    Windows / macOS:  <Documents>/Paradox Interactive/<Game>/save games
    Linux:            ~/.local/share/Paradox Interactive/<Game>/save games
"""

from __future__ import annotations

import platform
from pathlib import Path

from loguru import logger

# ---------------------------------------------------------------------------
# Actual directory lookups (cached)
# ---------------------------------------------------------------------------

_cache: dict[str, Path] = {}


def _get_windows_documents() -> Path | None:
    """Use the Windows Shell API to retrieve the Documents folder."""
    try:
        import ctypes
        import ctypes.wintypes

        CSIDL_PERSONAL = 0x0005

        buf = ctypes.create_unicode_buffer(1024)
        # SHGetFolderPathW(hwnd, nFolder, hToken, dwFlags, pszPath)
        result = ctypes.windll.shell32.SHGetFolderPathW(  # type: ignore[attr-defined]
            0, CSIDL_PERSONAL, 0, 0, buf
        )
        if result == 0:  # S_OK
            return Path(buf.value)
    except Exception as e:
        logger.debug("SHGetFolderPathW failed for Documents: {}", e)
    return None


def get_documents_dir() -> Path:
    """Return the real user Documents directory.

    On Windows this queries the Shell API so it respects any relocation.
    On other platforms it falls back to ``~/Documents``.
    """
    if "documents" in _cache:
        return _cache["documents"]

    result: Path | None = None
    if platform.system() == "Windows":
        result = _get_windows_documents()

    if result is None or not result.exists():
        result = Path.home() / "Documents"

    _cache["documents"] = result
    logger.debug("Documents directory resolved to: {}", result)
    return result


def get_paradox_dir() -> Path:
    """Return the directory that contains ``Paradox Interactive``."""
    if platform.system() == "Linux":
        return Path.home() / ".local" / "share"
    return get_documents_dir()


def default_save_dir(game_folder: str) -> Path:
    """Return the default ``save games`` directory for *game_folder*."""
    return get_paradox_dir() / "Paradox Interactive" / game_folder / "save games"
