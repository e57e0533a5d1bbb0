"""Session tracking: decides when a game started or ended and what to publish.

States::

    Idle ──(game seen)──────────────▶ Active(game)
    Active(game) ──(same game)──────▶ Active(game)      no-op
    Active(game) ──(other game)─────▶ Active(other)     fresh session
    Active(game) ──(nothing)────────▶ Idle

A game switch emits a single DETECTED event for the new game; observers see
it as the old game closing and a new one opening without a CLOSED event in
between.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from paradox_presence.core.presence import PresenceSink
from paradox_presence.models.game import GameSignature
from paradox_presence.models.presence import EventKind, PresencePayload, SessionEvent
from paradox_presence.plugins.base import SaveExtractor
from paradox_presence.plugins.plugin_manager import PluginManager

EventCallback = Callable[[SessionEvent], None]


@dataclass
class Session:
    """The live tracking record for the currently running game."""

    signature: GameSignature
    start: int
    """Epoch seconds; fixed for the lifetime of the session."""

    extractor: SaveExtractor | None = None


class SessionTracker:
    """Owns at most one :class:`Session` and feeds the presence sink."""

    def __init__(
        self,
        plugin_manager: PluginManager,
        sink: PresenceSink,
        on_event: EventCallback | None = None,
        now: Callable[[], float] = time.time,
    ) -> None:
        self._pm = plugin_manager
        self._sink = sink
        self._on_event = on_event
        self._now = now
        self._session: Session | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def current(self) -> GameSignature | None:
        return self._session.signature if self._session else None

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def tick(self, detected: GameSignature | None) -> PresencePayload | None:
        """Apply one scan result and publish the current presence.

        Returns the payload forwarded to the sink, or ``None`` when idle or
        when the sink rejected it.
        """
        current = self.current
        if detected is None:
            if current is not None:
                self._end()
            return None

        if detected != current:
            self._start(detected)

        return self._publish()

    def close(self) -> None:
        """Drop the session and clear the sink (shutdown path)."""
        if self._session is not None:
            logger.info("Releasing session for {}", self._session.signature.display_name)
        self._session = None
        try:
            self._sink.clear()
        except Exception as e:
            logger.error("Failed to clear presence: {}", e)

    def build_payload(self) -> PresencePayload | None:
        """Presence derived from the current session's cached telemetry."""
        session = self._session
        if session is None:
            return None
        sig = session.signature
        if session.extractor is not None:
            details = session.extractor.details_text()
            state = session.extractor.state_text()
        else:
            details, state = f"Playing {sig.display_name}", None
        return PresencePayload(
            details=details,
            state=state,
            start=session.start,
            large_image=sig.large_image_key,
            large_image_text=sig.large_image_text,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _start(self, signature: GameSignature) -> None:
        if self._session is not None:
            logger.info(
                "Switching from {} to {}",
                self._session.signature.display_name, signature.display_name,
            )
        self._session = Session(
            signature=signature,
            start=int(self._now()),
            extractor=self._pm.create_extractor(signature),
        )
        logger.info("Game detected: {}", signature.display_name)
        self._emit(SessionEvent(EventKind.DETECTED, signature))

    def _end(self) -> None:
        if self._session is None:
            return
        signature = self._session.signature
        self._session = None
        try:
            self._sink.clear()
        except Exception as e:
            logger.error("Failed to clear presence: {}", e)
        logger.info("Game closed: {}", signature.display_name)
        self._emit(SessionEvent(EventKind.CLOSED, signature))

    def _emit(self, event: SessionEvent) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(event)
        except Exception as e:
            logger.error("Error in session event callback: {}", e)

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def _publish(self) -> PresencePayload | None:
        session = self._session
        if session is None:
            return None

        if session.extractor is not None:
            try:
                session.extractor.refresh()
            except Exception as e:
                logger.error("Error refreshing {} save data: {}", session.signature.display_name, e)

        payload = self.build_payload()
        if payload is None:
            return None
        try:
            if not self._sink.initialize(session.signature.app_id):
                logger.warning("Presence sink unavailable for {}", session.signature.display_name)
                return None
            self._sink.update(
                payload.details,
                payload.state,
                payload.start,
                payload.large_image,
                payload.large_image_text,
            )
        except Exception as e:
            logger.error("Failed to update presence for {}: {}", session.signature.display_name, e)
            return None
        return payload
