"""
Common functions and utilities for cramsqs

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import logging
import time
from functools import wraps
from typing import List, Optional

import click

from cramsqs import __version__

logger = logging.getLogger(__name__)


def click_echo(msg: str, err: bool = False):
    """
    Helper function that print a line to the console.

    :param msg: the message to print
    :param err: print to stderr instead of stdout
    """
    click.echo(msg, err=err)


def log_step_start(
    step_name: str,
    input_files: Optional[List[str]] = None,
    output: Optional[str] = None,
    **kwargs,
) -> None:
    """
    Utility function to add information about the start of a
    cram-sqs step to the logs

    :param step_name: name of the step that is starting
    :param input_files: optional collection of input file paths
    :param output: optional path to output
    :param kwargs: any additional parameters that you wish to log
    :returns: None
    """
    logger.info("Start cram-sqs %s %s", step_name, __version__)

    if input_files is not None:
        logger.info("Input file(s) %s", ",".join(input_files))

    if output is not None:
        logger.info("Output %s", output)

    if kwargs:
        params = [f"{key.replace('_', '-')}={value}" for key, value in kwargs.items()]
        logger.info("Parameters:%s", ",".join(params))


def timer(func):
    """
    Function decorator used to time the different steps
    """

    @wraps(func)
    def wrapper(*args, **kwds):
        start_time = time.perf_counter()
        res = func(*args, **kwds)
        run_time = time.perf_counter() - start_time
        logger.info("Finished cram-sqs %s in %.2fs", func.__name__, run_time)
        return res

    return wrapper
