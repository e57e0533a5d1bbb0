"""Internationalization for tray and notification text.

Presence lines sent to Discord are not translated; everything the local
user sees in the tray is.
"""

import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

FALLBACK_LANGUAGE = "en_US"

_current_lang = FALLBACK_LANGUAGE
_translations: dict[str, dict[str, Any]] = {}
_i18n_dir = Path(__file__).parent


def load_language(lang: str) -> None:
    """Load a language file into the translation cache."""
    lang_file = _i18n_dir / f"{lang}.json"
    if not lang_file.exists():
        raise FileNotFoundError(f"Language file not found: {lang_file}")
    with open(lang_file, "r", encoding="utf-8") as f:
        _translations[lang] = json.load(f)


def set_language(lang: str) -> None:
    """Switch the current language."""
    global _current_lang
    if lang not in _translations:
        load_language(lang)
    _current_lang = lang


def _lookup(lang: str, keys: list[str]) -> Optional[str]:
    data: Any = _translations.get(lang, {})
    for k in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(k)
    return None if data is None else str(data)


def t(key: str, **kwargs: str) -> str:
    """Get a translated string by dot-separated key.

    Falls back to ``en_US``, then to the key itself.  Placeholders are
    written ``{name}``: ``t("tray.playing", game="Stellaris")``.
    """
    keys = key.split(".")
    result = _lookup(_current_lang, keys)
    if result is None:
        result = _lookup(FALLBACK_LANGUAGE, keys)
    if result is None:
        return key
    for k, v in kwargs.items():
        result = result.replace(f"{{{k}}}", str(v))
    return result


def get_current_language() -> str:
    """Return the current language code."""
    return _current_lang


def get_available_languages() -> list[str]:
    """Return list of available language codes."""
    return sorted(f.stem for f in _i18n_dir.glob("*.json"))


def init(lang: Optional[str] = None) -> None:
    """Load all available languages and set the active one."""
    for f in _i18n_dir.glob("*.json"):
        try:
            load_language(f.stem)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load language file {}: {}", f.name, e)
    if lang and lang in _translations:
        set_language(lang)
    elif lang:
        logger.warning("Unknown language {}, using {}", lang, FALLBACK_LANGUAGE)
        set_language(FALLBACK_LANGUAGE)
