"""Paradox Presence: Discord Rich Presence for Paradox games."""

__version__ = "1.1.0"
