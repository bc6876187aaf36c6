"""Logging setup for Robo Core entry points."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the ``robo`` logger hierarchy.

    Safe to call more than once; later calls only change the level.
    """
    global _configured

    root = logging.getLogger("robo")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True

    return root
