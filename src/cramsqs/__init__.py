"""Top-level package for cram-sqs.

Copyright (c) 2024 Pixelgen Technologies AB.
"""

from importlib import metadata

__version__ = "0.0.0"

try:
    __version__ = metadata.version("cram-sqs")
except metadata.PackageNotFoundError:
    pass
