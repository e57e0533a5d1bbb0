"""Paradox Presence: entry point."""

import argparse
import signal
import sys
import threading

from loguru import logger

from paradox_presence.config import Config
from paradox_presence.logger import setup_logger
from paradox_presence.i18n import init as i18n_init
from paradox_presence.plugins.plugin_manager import PluginManager
from paradox_presence.core.presence import DiscordPresence, NullPresence, PresenceSink
from paradox_presence.core.presence_loop import PresenceLoop
from paradox_presence.core.scanner import ProcessScanner
from paradox_presence.core.session import SessionTracker
from paradox_presence.models.presence import SessionEvent


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="paradox-presence",
        description="Discord Rich Presence for Paradox games.",
    )
    parser.add_argument("--debug", action="store_true", help="verbose console logging")
    parser.add_argument("--no-tray", action="store_true", help="run without the tray icon")
    return parser.parse_args(argv)


def _log_event(event: SessionEvent) -> None:
    logger.info(event.message)


def _probe(scanner: ProcessScanner) -> None:
    """Log the registered games and whether one is running right now."""
    logger.info("Registered games:")
    for sig in scanner.list_signatures():
        logger.info("  - {} ({})", sig.display_name, sig.process_name)
    detected = scanner.scan()
    if detected is not None:
        logger.info("Detected: {}", detected.display_name)
    else:
        logger.info("No supported games currently running")


def _run_headless(loop: PresenceLoop, stop_event: threading.Event) -> None:
    def _stop(signum, frame) -> None:  # noqa: ANN001
        logger.info("Shutting down…")
        stop_event.set()

    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)
    logger.info("Press Ctrl+C to exit")
    loop.run(stop_event)


def _run_tray(config: Config, pm: PluginManager, scanner: ProcessScanner,
              sink: PresenceSink, stop_event: threading.Event) -> int:
    from PySide6.QtWidgets import QApplication, QSystemTrayIcon
    from paradox_presence.ui.tray import PresenceWorker, TrayApp

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.warning("System tray not available, running headless")
        tracker = SessionTracker(pm, sink, on_event=_log_event)
        _run_headless(PresenceLoop(scanner, tracker, sink, config.poll_interval_ms), stop_event)
        return 0

    worker = PresenceWorker(stop_event)
    worker.session_event.connect(_log_event)
    tracker = SessionTracker(pm, sink, on_event=worker.publish)
    worker.set_loop(PresenceLoop(scanner, tracker, sink, config.poll_interval_ms))

    tray = TrayApp(config, worker, stop_event)
    signal.signal(signal.SIGINT, lambda signum, frame: tray.quit())
    signal.signal(signal.SIGTERM, lambda signum, frame: tray.quit())
    tray.start()
    return app.exec()


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    # ---- 1. Config ----
    config = Config()

    # ---- 2. Logger ----
    setup_logger(config.data_dir / "logs", debug=args.debug)
    logger.info("Paradox Presence starting…")

    # ---- 3. i18n ----
    i18n_init(config.language)
    logger.info("Language: {}", config.language)

    # ---- 4. Plugin discovery ----
    pm = PluginManager(config)
    pm.discover()
    logger.info("Plugins loaded: {}", pm.get_plugin_names())

    # ---- 5. Core services ----
    scanner = ProcessScanner()
    sink: PresenceSink = DiscordPresence() if config.presence_enabled else NullPresence()
    stop_event = threading.Event()
    _probe(scanner)

    # ---- 6. Loop ----
    if args.no_tray or not config.tray_enabled:
        tracker = SessionTracker(pm, sink, on_event=_log_event)
        _run_headless(PresenceLoop(scanner, tracker, sink, config.poll_interval_ms), stop_event)
        exit_code = 0
    else:
        exit_code = _run_tray(config, pm, scanner, sink, stop_event)

    logger.info("Paradox Presence stopped")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
