"""System tray surface: status line, lifecycle notifications and an exit action.

The poll loop runs in a :class:`PresenceWorker` thread so the Qt event loop
stays responsive; session events cross back to the GUI thread as a signal.
"""

from __future__ import annotations

import threading

from PySide6.QtCore import QObject, QThread, QTimer, Signal
from PySide6.QtWidgets import QApplication, QSystemTrayIcon
from qfluentwidgets import Action, FluentIcon as FIF, SystemTrayMenu
from loguru import logger

from paradox_presence.config import Config
from paradox_presence.core.presence_loop import PresenceLoop
from paradox_presence.i18n import t
from paradox_presence.models.presence import EventKind, SessionEvent


# -----------------------------------------------------------------------
# Worker
# -----------------------------------------------------------------------

class PresenceWorker(QThread):
    """Background thread running the presence loop until stopped."""

    session_event = Signal(object)  # SessionEvent

    def __init__(self, stop_event: threading.Event, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._stop_event = stop_event
        self._loop: PresenceLoop | None = None

    def set_loop(self, loop: PresenceLoop) -> None:
        self._loop = loop

    def publish(self, event: SessionEvent) -> None:
        """Session-event callback; safe to call from the worker thread."""
        self.session_event.emit(event)

    def run(self) -> None:
        if self._loop is None:
            logger.error("Presence worker started without a loop")
            return
        try:
            self._loop.run(self._stop_event)
        except Exception as e:
            logger.exception("Presence loop crashed: {}", e)


# -----------------------------------------------------------------------
# Tray
# -----------------------------------------------------------------------

class TrayApp(QObject):
    """Tray icon with a fluent context menu."""

    def __init__(
        self,
        config: Config,
        worker: PresenceWorker,
        stop_event: threading.Event,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._cfg = config
        self._worker = worker
        self._stop_event = stop_event
        self._init_tray()

        worker.session_event.connect(self._on_session_event)

        # Let the interpreter run Python signal handlers (Ctrl+C) while
        # Qt owns the main thread.
        self._signal_pump = QTimer(self)
        self._signal_pump.timeout.connect(lambda: None)
        self._signal_pump.start(500)

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _init_tray(self) -> None:
        self._tray = QSystemTrayIcon(FIF.GAME.icon(), self)
        self._tray.setToolTip(t("app.name"))

        self._status_action = Action(FIF.INFO, "")
        self._status_action.setEnabled(False)
        self._exit_action = Action(FIF.CLOSE, t("tray.exit"))
        self._exit_action.triggered.connect(self.quit)

        self._menu = SystemTrayMenu()
        self._menu.addActions([self._status_action, self._exit_action])
        self._tray.setContextMenu(self._menu)

        self.set_status(t("tray.waiting"))

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._tray.show()
        self._worker.start()
        logger.info("Tray started")

    def set_status(self, status: str) -> None:
        self._status_action.setText(t("tray.status", status=status))
        self._tray.setToolTip(f"{t('app.name')} - {status}")

    def notify(self, message: str) -> None:
        if not self._cfg.show_notifications:
            return
        self._tray.showMessage(
            t("app.name"), message, QSystemTrayIcon.MessageIcon.Information, 3000,
        )

    def quit(self) -> None:
        """Stop the loop, wait for its teardown, then leave the event loop."""
        logger.info("Exit requested from tray")
        self._stop_event.set()
        self._worker.wait()
        self._tray.hide()
        QApplication.quit()

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _on_session_event(self, event: SessionEvent) -> None:
        game = event.signature.display_name
        if event.kind is EventKind.DETECTED:
            self.set_status(t("tray.playing", game=game))
            self.notify(t("notify.tracking", game=game))
        else:
            self.set_status(t("tray.waiting"))
