"""Main console script for cram-sqs.

Copyright (c) 2024 Pixelgen Technologies AB.
"""

import sys
import time
from typing import Optional, Tuple

import click

from cramsqs import __version__
from cramsqs.aggregate import summarize_sample
from cramsqs.cli.common import (
    UsageBannerCommand,
    logger,
    reference_option,
    usage_banner,
)
from cramsqs.constants import DEFAULT_MAX_FILES
from cramsqs.exception import OutputWriteError, ResolutionEmpty
from cramsqs.logging import LoggingSetup
from cramsqs.resolve import resolve
from cramsqs.utils import click_echo, log_step_start


def _resolve_or_fail(path: str, max_files: int):
    candidates = resolve(path, max_files=max_files)
    if not candidates:
        raise ResolutionEmpty(f"no .cram files for '{path}'", path=path)
    return candidates


@click.command(
    "cram-sqs",
    cls=UsageBannerCommand,
    short_help="summarize sequencing quality of one or more CRAM files",
    options_metavar="<options>",
)
@click.version_option(__version__)
@click.argument(
    "paths",
    nargs=-1,
    required=False,
    metavar="<CRAM file | CRAM prefix | directory>",
)
@click.option(
    "--verbose",
    type=click.BOOL,
    default=False,
    is_flag=True,
    help="Show extended messages during execution",
)
@click.option(
    "--log-file",
    required=False,
    default=None,
    type=click.Path(exists=False),
    help="The path to the log file (it is created if it does not exist)",
)
@click.option(
    "--cores",
    default=1,
    required=False,
    type=click.IntRange(min=1),
    show_default=True,
    help="The number of processes used to read files in parallel",
)
@click.option(
    "--max-files",
    default=DEFAULT_MAX_FILES,
    required=False,
    type=click.IntRange(min=0),
    show_default=True,
    help="The maximum number of CRAM files to include",
)
@click.option(
    "--json-report",
    required=False,
    default=None,
    type=click.Path(exists=False, dir_okay=False),
    help="Also write the summary as JSON to this path",
)
@reference_option
@click.pass_context
def main_cli(
    ctx,
    paths: Tuple[str, ...],
    verbose: bool,
    log_file: Optional[str],
    cores: int,
    max_files: int,
    json_report: Optional[str],
    reference: Optional[str],
):
    """
    Summarize base composition and Q20/Q30 quality of CRAM files

    The argument is a CRAM file, a directory holding CRAM files or a
    directory/prefix selecting the CRAM files whose name starts with prefix.
    All selected files are summarized as a single sample in <sample>.sqs.
    """
    if len(paths) != 1:
        click_echo(usage_banner(ctx.command_path), err=True)
        ctx.exit(1)

    path = paths[0]
    ctx.with_resource(LoggingSetup(log_file, verbose=verbose))

    if verbose:
        logger.info("Running in VERBOSE mode")

    log_step_start(
        "summary",
        input_files=[path],
        cores=cores,
        max_files=max_files,
        reference=reference,
    )

    start_time = time.perf_counter()

    try:
        candidates = _resolve_or_fail(path, max_files)
    except ResolutionEmpty as exc:
        logger.error(exc.msg)
        ctx.exit(1)

    logger.info("Found %d CRAM file(s) for '%s'", len(candidates), path)

    try:
        report, result = summarize_sample(
            path, candidates, reference=reference, cores=cores
        )
        if json_report is not None:
            report.write_json_file(json_report, indent=4)
    except OutputWriteError as exc:
        logger.error(exc.msg)
        ctx.exit(1)

    if result.skipped:
        logger.warning(
            "Skipped %d of %d file(s) that could not be read",
            len(result.skipped),
            len(candidates),
        )

    execution_time = time.perf_counter() - start_time
    click_echo(f"Execution Time: {execution_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main_cli())  # pragma: no cover
