"""Root logger setup shared by the API process and maintenance scripts."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    log_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Avoid stacking handlers when the factory runs more than once (tests).
    for handler in list(root_logger.handlers):
        if getattr(handler, "_playpulse", False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._playpulse = True
    root_logger.addHandler(handler)
