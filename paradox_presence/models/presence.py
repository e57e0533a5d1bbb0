"""Data models for presence payloads and session lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from paradox_presence.models.game import GameSignature


@dataclass(frozen=True)
class PresencePayload:
    """Everything the presence sink needs for one update."""

    details: str
    """First line (e.g. 'Playing as German Reich')."""

    state: str | None
    """Optional second line (e.g. 'Year: 1939')."""

    start: int
    """Session start as epoch seconds."""

    large_image: str
    large_image_text: str


class EventKind(str, Enum):
    """Kind of session transition."""

    DETECTED = "detected"
    CLOSED = "closed"


@dataclass(frozen=True)
class SessionEvent:
    """A session lifecycle transition, delivered to the notification surface."""

    kind: EventKind
    signature: GameSignature

    @property
    def message(self) -> str:
        if self.kind is EventKind.DETECTED:
            return f"Game detected: {self.signature.display_name}"
        return f"Game closed: {self.signature.display_name}"
