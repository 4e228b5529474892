"""Logging setup for cram-sqs.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
import logging
import sys
import typing
from pathlib import Path

import click

from cramsqs.types import PathType

cramsqs_root_logger = logging.getLogger("cramsqs")


# ------------------------------------------------------------
# Click logging
# ------------------------------------------------------------


class StyleDict(typing.TypedDict):
    """Style dictionary for kwargs to `click.style`."""

    fg: str


class ColorFormatter(logging.Formatter):
    """Click formatter with colored levels"""

    colors: dict[str, StyleDict] = {
        "debug": StyleDict(fg="blue"),
        "info": StyleDict(fg="green"),
        "warning": StyleDict(fg="yellow"),
        "error": StyleDict(fg="red"),
        "exception": StyleDict(fg="red"),
        "critical": StyleDict(fg="red"),
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format a record with colored level.

        :param record: The record to format.
        :returns str: A formatted log record.
        """
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()
            if level in self.colors:
                timestamp = self.formatTime(record, self.datefmt)
                colored_level = click.style(
                    f"{level.upper():<10}", **self.colors[level]
                )
                prefix = f"{timestamp} [{colored_level}]  "
                msg = "\n".join(prefix + x for x in msg.splitlines())
            return msg
        return logging.Formatter.format(self, record)


class DefaultCliFormatter(logging.Formatter):
    """Plain formatter: info messages as-is, other levels prefixed."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a record for CLI output."""
        if not record.exc_info:
            level = record.levelname.lower()
            msg = record.getMessage()

            if level == "info":
                return msg

            return f"{level.upper()}: {msg}"
        return logging.Formatter.format(self, record)


class ClickHandler(logging.Handler):
    """Click logging handler.

    Messages are forwarded to the console using `click.echo`.

    :param use_stderr: Log to sys.stderr instead of sys.stdout.
    """

    def __init__(self, use_stderr: bool = True):
        """Initialize the click handler."""
        super().__init__()
        self._use_stderr = use_stderr

    def emit(self, record: logging.LogRecord) -> None:
        """Do whatever it takes to actually log the specified logging record."""
        try:
            msg = self.format(record)
            click.echo(msg, err=self._use_stderr)
        except Exception:
            self.handleError(record)


class LoggingSetup:
    """Configure console and (optional) file logging for a single run.

    Use it as a context manager, the previous handlers and level of the
    configured logger are restored on exit.
    """

    def __init__(self, log_file: PathType | None, verbose: bool, logger=None):
        """Initialize the logging setup.

        :param log_file: the filename of the log output
        :param verbose: enable verbose logging and console output
        :param logger: the logger to configure, default is the root logger
        """
        self.log_file = Path(log_file) if log_file is not None else None
        self.verbose = verbose
        self._root_logger = logger or logging.getLogger()
        self._file_handler: logging.FileHandler | None = None
        self._saved_handlers: list[logging.Handler] = []
        self._saved_level = self._root_logger.level

    def initialize(self):
        """Install the console handler and, if requested, the file handler."""
        self._saved_handlers = list(self._root_logger.handlers)
        self._saved_level = self._root_logger.level

        handlers: list[logging.Handler] = []
        self._root_logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

        console_handler = ClickHandler()
        if self.verbose:
            console_handler.setFormatter(ColorFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        else:
            console_handler.setFormatter(DefaultCliFormatter())
        handlers.append(console_handler)

        if self.log_file:
            self._file_handler = logging.FileHandler(str(self.log_file), mode="w")
            self._file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s %(processName)-10s %(name)s %(levelname)-8s %(message)s"
                )
            )
            handlers.append(self._file_handler)

        self._root_logger.handlers = handlers

    def shutdown(self):
        """Flush and close the file handler and restore the previous handlers."""
        if self._file_handler is not None:
            self._file_handler.close()
            self._file_handler = None

        self._root_logger.handlers = self._saved_handlers
        self._root_logger.setLevel(self._saved_level)

    def __enter__(self):
        """Enter the context manager.

        This will initialize the logging setup.
        """
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Exit the context manager.

        This will close the log file if needed.
        """
        self.shutdown()
        # Reraise exception higher up the stack
        return False


def handle_unhandled_exception(exc_type, exc_value, exc_traceback):
    """Handle "unhandled" exceptions."""
    if issubclass(exc_type, KeyboardInterrupt):
        # Will call default excepthook
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    # Create a critical level log message with info from the except hook.
    cramsqs_root_logger.critical(
        "Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback)
    )


# Assign the excepthook to the handler
sys.excepthook = handle_unhandled_exception
