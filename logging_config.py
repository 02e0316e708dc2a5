"""
Logging configuration for cleaner CLI output.

Usage:
    import logging_config
    logging_config.setup()
"""

import logging
import sys

APP_LOGGERS = ("dex", "dex.runner", "sandwich_arbitrage")


def setup(level=logging.INFO):
    """
    Configure root logging for the sandwich CLI.

    - Uses shorter timestamp format (HH:MM:SS instead of full datetime)
    - Quiets web3 / HTTP client request chatter
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S"
        )
    )
    root.addHandler(console)

    # RPC request logs are noise unless debugging
    for noisy in ("web3", "urllib3", "asyncio"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    # App loggers emit through the root handler only
    for name in APP_LOGGERS:
        app_logger = logging.getLogger(name)
        app_logger.handlers.clear()
        app_logger.setLevel(level)


def setup_minimal():
    """Only warnings and errors."""
    setup(level=logging.WARNING)


def setup_debug():
    """
    Verbose logging for debugging.
    Shows everything including RPC requests.
    """
    setup(level=logging.DEBUG)
    logging.getLogger("web3").setLevel(logging.DEBUG)
    logging.getLogger("urllib3").setLevel(logging.DEBUG)
