"""Application configuration management."""

import json
import platform
from pathlib import Path
from typing import Any, Optional

from loguru import logger


def _default_data_dir() -> Path:
    """Return the default data directory for the application."""
    if platform.system() == "Windows":
        return Path.home() / "Documents" / "ParadoxPresence"
    elif platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / "ParadoxPresence"
    else:
        return Path.home() / ".config" / "ParadoxPresence"


_DEFAULT_CONFIG: dict[str, Any] = {
    "language": "en_US",
    "poll_interval_ms": 5000,
    "refresh_interval_ms": 5000,
    "presence_enabled": True,
    "show_notifications": True,
    "tray_enabled": True,
    "games": {},
}


class Config:
    """Singleton application configuration."""

    _instance: Optional["Config"] = None
    _data: dict[str, Any]
    _path: Path
    _data_dir: Path

    def __new__(cls, config_path: Optional[Path] = None) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if self._initialized:  # type: ignore[has-type]
            return
        self._initialized = True
        if config_path is not None:
            self._data_dir = config_path.parent
        else:
            self._data_dir = _default_data_dir()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._path = config_path or (self._data_dir / "config.json")
        self._data = dict(_DEFAULT_CONFIG)
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def language(self) -> str:
        return self._data.get("language", "en_US")

    @property
    def poll_interval_ms(self) -> int:
        return max(100, int(self._data.get("poll_interval_ms", 5000)))

    @property
    def refresh_interval_ms(self) -> int:
        return max(0, int(self._data.get("refresh_interval_ms", 5000)))

    @property
    def presence_enabled(self) -> bool:
        return bool(self._data.get("presence_enabled", True))

    @property
    def show_notifications(self) -> bool:
        return bool(self._data.get("show_notifications", True))

    @property
    def tray_enabled(self) -> bool:
        return bool(self._data.get("tray_enabled", True))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def get_save_dir(self, game_key: str) -> Path | None:
        """Get the user-configured save directory override for a game."""
        games_cfg = self._data.get("games", {})
        p = games_cfg.get(game_key, {}).get("save_dir", "")
        return Path(p) if p else None

    def set_save_dir(self, game_key: str, path: str) -> None:
        if "games" not in self._data:
            self._data["games"] = {}
        if game_key not in self._data["games"]:
            self._data["games"][game_key] = {}
        self._data["games"][game_key]["save_dir"] = path
        self._save()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if self._path.exists():
            try:
                with open(self._path, "r", encoding="utf-8") as f:
                    saved = json.load(f)
                self._data.update(saved)
                logger.info("Configuration loaded from {}", self._path)
            except Exception as e:
                logger.warning("Failed to load config, using defaults: {}", e)

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=4, ensure_ascii=False)
        except Exception as e:
            logger.error("Failed to save config: {}", e)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None
