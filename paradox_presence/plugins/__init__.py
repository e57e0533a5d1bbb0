"""Per-game save extractors."""
