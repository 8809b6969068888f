import logging
import sys

# Held at WARNING unless verbose.
_THIRD_PARTY_LOGGERS = ("discord", "werkzeug", "urllib3", "aiohttp")

# threadName separates command worker threads from ingestion request threads.
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Send league-bot logs to stderr; ``verbose`` adds DEBUG and third-party output."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)

    level = logging.NOTSET if verbose else logging.WARNING
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(level)
