import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = os.getenv("TRACKER_LOG_LEVEL", "INFO").upper()


def setup_logging() -> logging.Logger:
    # Configure root once
    logging.basicConfig(level=getattr(logging, _DEFAULT_LEVEL, logging.INFO), format=LOG_FORMAT)

    logger = logging.getLogger("tracker")
    logger.setLevel(getattr(logging, _DEFAULT_LEVEL, logging.INFO))
    return logger
