"""Provides a class for creating and configuring loggers."""

import logging

from utilities.config import LOG_LEVEL


class Logger:
    """
    Class for creating named loggers with standardized configuration.
    """

    @staticmethod
    def get_logger(name: str, level=None) -> logging.Logger:
        """Creates and returns a logger with the given name and logging level.

        The level defaults to LOG_LEVEL from the environment.
        """
        if level is None:
            level = logging.getLevelName(LOG_LEVEL.upper())
            if not isinstance(level, int):
                level = logging.DEBUG

        logger = logging.getLogger(name)
        logger.setLevel(level)

        if not logger.handlers:
            # Handler (console)
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)

            # Formatter
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            console_handler.setFormatter(formatter)

            # Add handler
            logger.addHandler(console_handler)

        return logger
