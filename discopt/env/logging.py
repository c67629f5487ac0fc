import logging
import sys

from logging import (
    DEBUG, INFO, WARNING, ERROR, CRITICAL
)


###############################################################################


class MaxFilter(logging.Filter):

    """
    Logging filter specifying the maximum log level to be handled.
    """

    def __init__(self, maxlevel=100):
        super().__init__()
        self.maxlevel = maxlevel

    def filter(self, record):
        return record.levelno <= self.maxlevel


###############################################################################


LOG_FMT = logging.Formatter(
    "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
)


def _make_handler(stream, level, maxlevel=None):
    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(LOG_FMT)
    handler.setLevel(level)
    if maxlevel is not None:
        handler.addFilter(MaxFilter(maxlevel=maxlevel))
    return handler


# Each level is handled exactly once, errors go to stderr
HANDLERS = [
    _make_handler(sys.stdout, DEBUG, maxlevel=INFO-1),
    _make_handler(sys.stdout, INFO, maxlevel=WARNING-1),
    _make_handler(sys.stdout, WARNING, maxlevel=ERROR-1),
    _make_handler(sys.stderr, ERROR, maxlevel=CRITICAL-1),
    _make_handler(sys.stderr, CRITICAL),
]
LOGGERS = {}


###############################################################################


def get_logger(name, level=WARNING):
    """
    Gets a named logger instance.

    Handlers are attached once per logger, so repeated calls
    with the same name do not duplicate output.

    Parameters
    ----------
    name : `str`
        Name of logger. Should be hierarchically dot-separated.
    level : `int`
        Default log level.
        Use one of `DEBUG, INFO, WARNING, ERROR, CRITICAL`.

    Examples
    --------
    >>> logger = get_logger("discopt.math.optimize", level=logging.INFO)
    >>> logger.info("converged after 4 iterations")
    2020-02-02 20:20,002 [discopt.math.optimize] INFO: converged after 4 ...
    >>> logger.debug("iteration 1")
    >>> logger.setLevel(logging.DEBUG)
    >>> logger.debug("iteration 1")
    2020-02-02 20:20,200 [discopt.math.optimize] DEBUG: iteration 1
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in HANDLERS:
        if h not in logger.handlers:
            logger.addHandler(h)
    logger.propagate = False
    LOGGERS[name] = logger
    return logger


def set_level(level, prefix="discopt"):
    """
    Sets the log level of all loggers created by :py:func:`get_logger`
    whose name starts with `prefix`.
    """
    for name, logger in LOGGERS.items():
        if name.startswith(prefix):
            logger.setLevel(level)
