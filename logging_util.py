import logging

from config import LOG_LEVEL, LOGGER_NAME


def setup_logger(name: str = LOGGER_NAME, level: int | str = LOG_LEVEL) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level)
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
