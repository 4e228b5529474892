"""
This module contains all the extra exception classes and handling
defined by cramsqs

Copyright (c) 2024 Pixelgen Technologies AB.
"""

from pathlib import Path
from typing import Union


class SqsError(Exception):
    """
    Base class for all errors raised by cramsqs.

    Attributes:
        msg: the error message to output
    """

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class ResolutionEmpty(SqsError):
    """
    Raised when an input argument does not resolve to any archive file.

    Attributes:
        msg: the error message to output
        path: the path argument given by the user
    """

    def __init__(self, msg: str, path: str):
        super().__init__(msg)
        self.path = path

    def __reduce__(self):
        return self.__class__, (self.msg, self.path)


class ArchiveOpenError(SqsError):
    """
    Raised when a single archive file cannot be opened or decoded.

    Attributes:
        msg: the error message to output
        fname: the name of the file
    """

    def __init__(self, msg: str, fname: Union[str, Path]):
        super().__init__(msg)
        self.fname = fname

    # Needed to pass the error back from worker processes
    def __reduce__(self):
        return self.__class__, (self.msg, self.fname)


class OutputWriteError(SqsError):
    """
    Raised when a summary report cannot be written.

    Attributes:
        msg: the error message to output
        fname: the name of the report file
    """

    def __init__(self, msg: str, fname: Union[str, Path]):
        super().__init__(msg)
        self.fname = fname

    def __reduce__(self):
        return self.__class__, (self.msg, self.fname)
