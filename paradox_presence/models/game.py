"""Data model for supported games."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameSignature:
    """Static identity record for a supported game."""

    key: str
    """Short identifier used in config and plugin lookup (e.g. 'hoi4')."""

    process_name: str
    """Substring matched case-insensitively against the process listing."""

    display_name: str
    """Human-readable game title."""

    app_id: str
    """Presence sink application identifier (Discord client ID)."""

    large_image_key: str
    """Asset key of the large presence image."""

    large_image_text: str
    """Tooltip shown over the large presence image."""

    extractor: str
    """Name of the save-extractor plugin that understands this game's saves."""

    save_folder: str = ""
    """Folder name under ``Paradox Interactive`` holding ``save games``."""
