import logging
import os

LOGGER_NAME = "outgrid"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def _has_file_handler(logger: logging.Logger, filename: str) -> bool:
    target = os.path.abspath(filename)
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == target:
            return True
    return False


def setup_logger(filename: str, level: str = "WARNING") -> logging.Logger:
    """
    Send everything from the 'outgrid' logger tree to ``filename``.

    No stream handler is added; curses owns the terminal while a grid is shown.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    if not _has_file_handler(logger, filename):
        fh = logging.FileHandler(filename, encoding="utf-8")
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(fh)

    return logger
