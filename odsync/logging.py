"""Odsync logging. All odsync loggers live below the ``odsync`` logger. The
subtrees can be tuned individually, e.g. to trace document mutations without
drowning in dictionary construction warnings::

    Logging:
      LEVEL: 30
      LEVELS:
        odsync.xdd: 10
        odsync.pipeline: 20

See Also:
    `Python Logging Not Outputting Anything <https://stackoverflow.com/questions/7016056/python-logging-not-outputting-anything>`_
"""
import logging
import logging.handlers
import os
from typing import Dict, Optional, Union
from logging import Logger

from odsync.configuration import CONFIG
from odsync.constants import MB


LEVEL = CONFIG['Logging']['LEVEL']
LEVELS = CONFIG['Logging']['LEVELS']
DIRECTORY = CONFIG['Logging']['DIRECTORY']
FILENAME = CONFIG['Logging']['FILENAME']

ODSYNC_LOGGER = logging.getLogger('odsync')
"""Odsync root logger."""

DEFAULT_EXCLUDES = ['canopen', 'ruamel', 'configobj']

VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]
"""Log level per ``-v`` count of the command line scripts."""

Level = Union[int, str]


def get_logger(name: Optional[str] = None, parent: Optional[Logger] = ODSYNC_LOGGER) -> Logger:
    """Get odsync logger. Wraps :func:`logging.getLogger`. Child loggers of
    :data:`odsync.logging.ODSYNC_LOGGER` by default.

    Args:
        name: Logger name. None for root logger if not parent logger.
        parent: Parent logger. ODSYNC_LOGGER by default.

    Returns:
        Requested logger for given name.
    """
    if name is None:
        return ODSYNC_LOGGER

    if parent:
        return parent.getChild(name)

    return logging.getLogger(name)


def verbosity_level(verbose: int) -> int:
    """Log level for the number of ``-v`` flags on the command line.

    Example:
        >>> verbosity_level(0), verbosity_level(1), verbosity_level(5)
        (30, 20, 10)
    """
    verbose = max(0, verbose)
    return VERBOSITY_LEVELS[min(verbose, len(VERBOSITY_LEVELS) - 1)]


def set_subtree_levels(levels: Dict[str, Level]):
    """Set log levels of odsync logger subtrees.

    Args:
        levels: Logger name -> level. Names outside of the odsync hierarchy
            get refused.

    Raises:
        ValueError: Name not below the odsync logger.
    """
    for name, level in levels.items():
        if name != ODSYNC_LOGGER.name and not name.startswith(ODSYNC_LOGGER.name + '.'):
            raise ValueError(f'{name!r} is not an odsync logger!')

        logging.getLogger(name).setLevel(level)


def suppress_other_loggers(*excludes):
    """Suppress log messages from some of the other common loggers."""
    if len(excludes) == 0:
        excludes = DEFAULT_EXCLUDES

    for name in logging.root.manager.loggerDict:
        for part in excludes:
            if part in name:
                logging.getLogger(name).disabled = True


def setup_logging(level: int = LEVEL, levels: Optional[Dict[str, Level]] = None) -> logging.Handler:
    """Setup odsync loggers.

    Args:
        level: Logging level.
        levels (optional): Subtree levels. Configured ones by default.

    Returns:
        Installed handler.
    """
    # Note using logging.basicConfig(level=level) would route all the other
    # loggers to stdout
    logging.root.setLevel(level)
    if levels is None:
        levels = LEVELS

    set_subtree_levels(levels)

    formatter = logging.Formatter(
        fmt='%(asctime)s.%(msecs)03d - %(levelname)5s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    if DIRECTORY:
        os.makedirs(DIRECTORY, exist_ok=True)
        filename = os.path.join(DIRECTORY, FILENAME)
        print(f'Logging to {filename!r}')
        handler = logging.handlers.RotatingFileHandler(
            filename,
            maxBytes=10 * MB,
            backupCount=5,
        )
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)
    logging.root.addHandler(handler)
    return handler
