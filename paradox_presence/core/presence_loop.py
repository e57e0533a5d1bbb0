"""The poll loop: scan, transition, publish, sleep."""

from __future__ import annotations

import threading

from loguru import logger

from paradox_presence.core.presence import PresenceSink
from paradox_presence.core.scanner import ProcessScanner
from paradox_presence.core.session import SessionTracker
from paradox_presence.models.presence import PresencePayload


class PresenceLoop:
    """Single-threaded loop driving a :class:`SessionTracker`.

    The wait between ticks is the only blocking point; setting the stop
    event wakes it immediately, after which the loop tears down.
    """

    def __init__(
        self,
        scanner: ProcessScanner,
        tracker: SessionTracker,
        sink: PresenceSink,
        poll_interval_ms: int = 5000,
    ) -> None:
        self._scanner = scanner
        self._tracker = tracker
        self._sink = sink
        self._interval = poll_interval_ms / 1000.0

    def tick(self) -> PresencePayload | None:
        detected = self._scanner.scan()
        payload = self._tracker.tick(detected)
        try:
            self._sink.run_pending_callbacks()
        except Exception as e:
            logger.error("Error running presence callbacks: {}", e)
        return payload

    def run(self, stop_event: threading.Event) -> None:
        """Tick until *stop_event* is set, then tear down."""
        logger.info("Starting main loop (every {:.1f}s)", self._interval)
        try:
            while not stop_event.is_set():
                try:
                    self.tick()
                except Exception as e:
                    logger.exception("Unexpected error in poll tick: {}", e)
                stop_event.wait(self._interval)
        finally:
            self.teardown()

    def teardown(self) -> None:
        logger.info("Cleaning up resources…")
        self._tracker.close()
        try:
            self._sink.shutdown()
        except Exception as e:
            logger.error("Error shutting down presence sink: {}", e)
