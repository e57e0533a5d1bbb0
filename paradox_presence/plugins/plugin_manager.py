"""Save-extractor plugin discovery and construction."""

from __future__ import annotations

import importlib
import pkgutil
import time
from pathlib import Path
from typing import Callable

from loguru import logger

from paradox_presence.config import Config
from paradox_presence.core.path_resolver import default_save_dir
from paradox_presence.models.game import GameSignature
from paradox_presence.plugins.base import SaveExtractor


class PluginManager:
    """Discovers save-extractor plugins and builds one extractor per session."""

    def __init__(
        self,
        config: Config | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cfg = config
        self._monotonic = monotonic
        self._plugins: dict[str, type[SaveExtractor]] = {}

    def discover(self) -> None:
        """Auto-discover all plugins in the ``paradox_presence.plugins`` package.

        Scans sub-packages for classes that inherit from ``SaveExtractor``
        and registers them.
        """
        plugins_dir = Path(__file__).parent
        for finder, module_name, is_pkg in pkgutil.iter_modules([str(plugins_dir)]):
            if module_name in ("base", "plugin_manager", "__init__"):
                continue
            if not is_pkg:
                continue
            full_module = f"paradox_presence.plugins.{module_name}.plugin"
            try:
                mod = importlib.import_module(full_module)
                # Look for SaveExtractor subclasses in the module
                for attr_name in dir(mod):
                    attr = getattr(mod, attr_name)
                    if (
                        isinstance(attr, type)
                        and issubclass(attr, SaveExtractor)
                        and attr is not SaveExtractor
                    ):
                        self.register(attr)
                        logger.info("Discovered plugin: {} ({})", attr.__name__, full_module)
            except Exception as e:
                logger.warning("Failed to load plugin {}: {}", full_module, e)

    def register(self, plugin_cls: type[SaveExtractor]) -> None:
        """Manually register an extractor class."""
        name = plugin_cls.name
        self._plugins[name] = plugin_cls

    def get_plugin(self, name: str) -> type[SaveExtractor] | None:
        return self._plugins.get(name)

    def get_plugin_names(self) -> list[str]:
        return list(self._plugins.keys())

    def save_dir_for(self, signature: GameSignature) -> Path:
        """Configured save directory for *signature*, else the platform default."""
        if self._cfg is not None:
            override = self._cfg.get_save_dir(signature.key)
            if override is not None:
                return override
        return default_save_dir(signature.save_folder or signature.display_name)

    def create_extractor(self, signature: GameSignature) -> SaveExtractor | None:
        """Build a fresh extractor for a new session of *signature*."""
        plugin_cls = self._plugins.get(signature.extractor)
        if plugin_cls is None:
            logger.warning("No save extractor registered for {}", signature.extractor)
            return None

        interval = self._cfg.refresh_interval_ms if self._cfg is not None else 5000
        save_dir = self.save_dir_for(signature)
        logger.info("Watching {} saves in {}", signature.display_name, save_dir)
        return plugin_cls(save_dir, refresh_interval_ms=interval, monotonic=self._monotonic)
