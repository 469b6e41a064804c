"""Allow running TimerDeck as a module: python -m timerdeck.

Without arguments, runs the tick engine headless until interrupted,
logging halfway and completion notifications.  ``export`` prints the
saved state as JSON and exits.
"""

import argparse
import logging
import signal
import sys

from PyQt6.QtCore import QCoreApplication

from .app import TimerDeckApp
from .settings import load_settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="timerdeck")
    parser.add_argument(
        "command", nargs="?", choices=("run", "export"), default="run",
    )
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QCoreApplication(sys.argv[:1])
    app.setApplicationName("TimerDeck")
    app.setOrganizationName("TimerDeck")

    deck = TimerDeckApp(settings)

    if args.command == "export":
        print(deck.commands.export_data())
        return 0

    signal.signal(signal.SIGINT, lambda *_: app.quit())
    app.aboutToQuit.connect(deck.shutdown)
    deck.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
