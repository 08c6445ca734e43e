"""JSON log records for the ``review`` package."""

from typing import Optional
import logging

from pythonjsonlogger.json import JsonFormatter

FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_logger(level: int = logging.INFO,
                 logfile: Optional[str] = None) -> logging.Logger:
    """
    Send records from the ``review`` loggers through a JSON formatter.

    Calling this again only changes the level; the handler is installed once.
    """
    logger = logging.getLogger('review')
    logger.setLevel(level)
    if any(getattr(h, '_review_json', False) for h in logger.handlers):
        return logger

    if logfile:
        logHandler: logging.Handler = logging.FileHandler(logfile)
    else:
        logHandler = logging.StreamHandler()
    formatter = JsonFormatter(
        FORMAT,
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
    )
    logHandler.setFormatter(formatter)
    logHandler._review_json = True  # type: ignore
    logger.addHandler(logHandler)
    return logger
