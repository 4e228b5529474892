"""
Console script for cram-sqs (common functions)

Copyright (c) 2024 Pixelgen Technologies AB.
"""

import functools
import logging

import click

logger = logging.getLogger("cramsqs.cli")

USAGE_BANNER = """
============================================================
  cram-sqs - CRAM File Quality Summary Generator
============================================================
Usage:
  {prog} [OPTIONS] <CRAM file | CRAM prefix | directory>

Description:
  This tool generates a summary of sequencing quality statistics
  from one or more CRAM files. You can specify:
    - An absolute or relative path to a single CRAM file
    - A CRAM file name in the current directory
    - A file name prefix to process all matching CRAM files in the directory
    - A directory to process all CRAM files within

Examples:
  # Absolute path to a single CRAM file
    {prog} /path/to/14-1671.cram

  # File name in the current directory
    {prog} 14-1671.cram

  # Prefix for multiple CRAM files (e.g., 420071-S1_QSR-1*.cram)
    {prog} 420071-S1_QSR-1

  # All CRAM files in a directory
    {prog} /path/to/dir

------------------------------------------------------------
Output:
  For each run, a summary file <sample>.sqs will be generated
  in the current directory.
============================================================
"""


def usage_banner(prog: str) -> str:
    """Return the usage banner with the program name filled in."""
    return USAGE_BANNER.format(prog=prog)


class UsageBannerCommand(click.Command):
    """A click command that answers usage errors with the banner and exit 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as exc:
            prog = exc.ctx.command_path if exc.ctx is not None else info_name
            click.echo(usage_banner(prog), err=True)
            click.echo(f"Error: {exc.format_message()}", err=True)
            raise click.exceptions.Exit(1) from exc


def reference_option(func):
    """Wrap a Click entrypoint to add the --reference option."""

    @click.option(
        "--reference",
        required=False,
        default=None,
        type=click.Path(exists=True, dir_okay=False),
        help="Reference FASTA used to decode CRAM files",
    )
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper
