"""Presence sinks: where the per-tick status summary is published."""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger
from pypresence import Presence

# Discord rejects longer details/state strings.
_MAX_TEXT = 128


class PresenceSink(ABC):
    """Boundary to a presence-broadcasting service."""

    @abstractmethod
    def initialize(self, app_id: str) -> bool:
        """Connect for *app_id*.  Cheap when already connected to that id."""
        ...

    @abstractmethod
    def update(
        self,
        details: str,
        state: str | None,
        start: int,
        large_image: str,
        large_text: str,
    ) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def run_pending_callbacks(self) -> None:
        """Give the service a chance to process incoming events."""

    @abstractmethod
    def shutdown(self) -> None:
        ...


class NullPresence(PresenceSink):
    """Sink used when presence broadcasting is disabled; only logs."""

    def initialize(self, app_id: str) -> bool:
        return True

    def update(self, details, state, start, large_image, large_text) -> None:  # noqa: ANN001
        logger.debug("Presence: {} / {}", details, state)

    def clear(self) -> None:
        logger.debug("Presence cleared")

    def shutdown(self) -> None:
        pass


class DiscordPresence(PresenceSink):
    """Discord Rich Presence over local IPC via ``pypresence``.

    One client id per Discord application; switching games reconnects with
    the new id.
    """

    def __init__(self) -> None:
        self._rpc = None
        self._app_id: str | None = None

    @property
    def is_connected(self) -> bool:
        return self._rpc is not None

    def initialize(self, app_id: str) -> bool:
        if self._rpc is not None and self._app_id == app_id:
            return True
        if self._rpc is not None:
            self.shutdown()

        try:
            rpc = Presence(app_id)
            rpc.connect()
        except Exception as e:
            logger.error("Failed to initialize Discord RPC: {}", e)
            return False

        self._rpc = rpc
        self._app_id = app_id
        logger.info("Discord RPC initialized with client id {}", app_id)
        return True

    def update(self, details, state, start, large_image, large_text) -> None:  # noqa: ANN001
        if self._rpc is None:
            return
        kwargs = {
            "details": details[:_MAX_TEXT],
            "start": start,
            "large_image": large_image,
            "large_text": large_text,
        }
        if state:
            kwargs["state"] = state[:_MAX_TEXT]
        try:
            self._rpc.update(**kwargs)
        except Exception as e:
            logger.error("Failed to update Discord activity: {}", e)
            # Drop the connection so the next tick reconnects.
            self._drop()
            return
        logger.debug("Updated Discord RPC: {} / {}", details, state)

    def clear(self) -> None:
        if self._rpc is None:
            return
        try:
            self._rpc.clear()
            logger.info("Cleared Discord activity")
        except Exception as e:
            logger.error("Failed to clear Discord activity: {}", e)

    def shutdown(self) -> None:
        if self._rpc is None:
            return
        try:
            self._rpc.close()
            logger.info("Discord RPC shut down")
        except Exception as e:
            logger.error("Error during Discord RPC shutdown: {}", e)
        finally:
            self._drop()

    def _drop(self) -> None:
        self._rpc = None
        self._app_id = None
