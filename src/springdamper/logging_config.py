"""
Logging Configuration
Routes the package's debug records to a console stream for the CLI.
"""
import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "springdamper"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configures the 'springdamper' logger with a single console handler.

    Args:
        verbose: Emit debug records (settings retuning, driver creation).
            Otherwise only warnings and above get through.
        stream: Where to write records. Defaults to stderr so stdout stays
            free for the CLI summary.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Calling again replaces the handler instead of stacking another one
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(handler)

    return logger
