import logging
import os

LOGGER_NAME = "sharinggen"
LEVEL_ENV = "SHARINGGEN_LOG_LEVEL"


def get_sharinggen_logger(level: str | None = None):
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.hasHandlers():
        handler = logging.StreamHandler()
        formatter = logging.Formatter('[%(asctime)s][%(levelname)s][%(name)s] %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    level_name = (level or os.getenv(LEVEL_ENV, "WARNING")).upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return logger
