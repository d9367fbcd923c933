import logging
import os
import sys

LOG_LEVEL_ENV = "PCLOCATOR_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

def get_logger(name: str) -> logging.Logger:
    """
    Logger for a pclocator module, writing to stderr.
    The level is read from PCLOCATOR_LOG_LEVEL on every call; the handler
    is attached once per logger name.
    """
    logger = logging.getLogger(name)
    level = getattr(logging, os.getenv(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%SZ"))
        logger.addHandler(handler)

    # pclocator records go to its own handler only
    logger.propagate = False
    return logger

logger = get_logger("pclocator")
