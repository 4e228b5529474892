"""Console scripts for cram-sqs.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from cramsqs.cli.main import main_cli

__all__ = ["main_cli"]
