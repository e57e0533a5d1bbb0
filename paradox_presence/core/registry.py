"""Static catalog of supported games.

Order matters: when a process listing could satisfy several entries the
first one listed here wins.
"""

from __future__ import annotations

from paradox_presence.models.game import GameSignature

SIGNATURES: tuple[GameSignature, ...] = (
    GameSignature(
        key="stellaris",
        process_name="stellaris.exe",
        display_name="Stellaris",
        app_id="1426478074278580318",
        large_image_key="stellaris",
        large_image_text="Stellaris",
        extractor="stellaris",
        save_folder="Stellaris",
    ),
    GameSignature(
        key="hoi4",
        process_name="hoi4.exe",
        display_name="Hearts of Iron IV",
        app_id="1426482535223005217",
        large_image_key="hoi4",
        large_image_text="Hearts of Iron IV",
        extractor="hoi4",
        save_folder="Hearts of Iron IV",
    ),
)


def all_signatures() -> list[GameSignature]:
    """Return every registered signature in priority order."""
    return list(SIGNATURES)


def get_signature(key: str) -> GameSignature | None:
    for sig in SIGNATURES:
        if sig.key == key:
            return sig
    return None
