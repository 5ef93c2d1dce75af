import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_level = logging.INFO
_names = set()


def get_logger(name):
    """Named logger with a single stream handler attached."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_level)
        _names.add(name)
    return logger


def set_level(level):
    """Apply one level to every logger handed out by get_logger, now and later."""
    global _level
    _level = level
    for name in _names:
        logging.getLogger(name).setLevel(level)
