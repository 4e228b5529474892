"""Aggregate quality statistics over a set of archive files.

All files are treated as one sample: the counters of every file are added
to a single accumulator, files that cannot be opened are skipped.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import dataclasses
import logging
import time
from concurrent import futures
from pathlib import Path
from typing import Callable, ContextManager, Iterable, Iterator, Optional, Tuple

from cramsqs.archive import ReadRecord, open_archive
from cramsqs.exception import ArchiveOpenError
from cramsqs.report import (
    SampleQualityReport,
    report_filename,
    sample_name_from_argument,
)
from cramsqs.statistics import SequenceQualityCounters
from cramsqs.types import CandidatePaths, PathType
from cramsqs.utils import timer

logger = logging.getLogger(__name__)

ArchiveOpener = Callable[..., ContextManager[Iterator[ReadRecord]]]


@dataclasses.dataclass
class AggregationResult:
    """Counters of a run together with what was (not) processed."""

    counters: SequenceQualityCounters
    elapsed: float
    processed: CandidatePaths = dataclasses.field(default_factory=list)
    skipped: CandidatePaths = dataclasses.field(default_factory=list)


def count_archive(
    path: str,
    reference: Optional[PathType] = None,
    opener: ArchiveOpener = open_archive,
) -> SequenceQualityCounters:
    """Count the reads of a single archive file.

    :param path: the archive to read
    :param reference: optional reference FASTA for CRAM decoding
    :param opener: the function used to open the archive
    :returns: the counters for this file only
    :raises ArchiveOpenError: if the file cannot be opened
    """
    counters = SequenceQualityCounters()
    with opener(path, reference=reference) as records:
        counters.consume(records)

    logger.debug("Counted %d reads in %s", counters.total_reads, path)
    return counters


def _count_sequential(
    paths: Iterable[str], reference: Optional[PathType], opener: ArchiveOpener
) -> Iterator[Tuple[str, Optional[SequenceQualityCounters]]]:
    for path in paths:
        try:
            yield path, count_archive(path, reference=reference, opener=opener)
        except ArchiveOpenError as exc:
            logger.warning(exc.msg)
            yield path, None


def _count_parallel(
    paths: CandidatePaths, reference: Optional[PathType], cores: int
) -> Iterator[Tuple[str, Optional[SequenceQualityCounters]]]:
    with futures.ProcessPoolExecutor(max_workers=cores) as executor:
        jobs = [
            executor.submit(count_archive, path, reference=reference)
            for path in paths
        ]
        # Results are collected in submission order to keep the merge order fixed
        for path, job in zip(paths, jobs):
            try:
                yield path, job.result()
            except ArchiveOpenError as exc:
                logger.warning(exc.msg)
                yield path, None


@timer
def aggregate(
    paths: Iterable[str],
    reference: Optional[PathType] = None,
    cores: int = 1,
    opener: ArchiveOpener = open_archive,
) -> AggregationResult:
    """Accumulate statistics over all reads of all given archive files.

    The paths are sorted lexicographically before processing so the result
    does not depend on the order they were listed in. A file that cannot be
    opened is logged and skipped.

    :param paths: the archive files to read
    :param reference: optional reference FASTA for CRAM decoding
    :param cores: the number of worker processes, 1 reads the files in
                  this process
    :param opener: the function used to open an archive, only honoured
                   when reading in this process
    :returns: an AggregationResult with the merged counters
    """
    ordered = sorted(paths)
    start_time = time.perf_counter()
    counters = SequenceQualityCounters()
    result = AggregationResult(counters=counters, elapsed=0.0)

    if cores > 1 and len(ordered) > 1:
        logger.debug("Reading %d files using %d processes", len(ordered), cores)
        per_file = _count_parallel(ordered, reference, min(cores, len(ordered)))
    else:
        per_file = _count_sequential(ordered, reference, opener)

    for path, file_counters in per_file:
        if file_counters is None:
            result.skipped.append(path)
            continue
        logger.info("Processed %s", path)
        counters += file_counters
        result.processed.append(path)

    result.elapsed = time.perf_counter() - start_time
    logger.debug(
        "Aggregated %d reads from %d files (%d skipped)",
        counters.total_reads,
        len(result.processed),
        len(result.skipped),
    )
    return result


def summarize_sample(
    argument: str,
    paths: Iterable[str],
    output_dir: PathType = ".",
    reference: Optional[PathType] = None,
    cores: int = 1,
    opener: ArchiveOpener = open_archive,
) -> Tuple[SampleQualityReport, AggregationResult]:
    """Aggregate the given archives and write the `<sample>.sqs` report.

    The sample name is taken from the path argument the user gave, not from
    the resolved archive files.

    :param argument: the original path argument
    :param paths: the archive files resolved from `argument`
    :param output_dir: the directory to write the report to
    :param reference: optional reference FASTA for CRAM decoding
    :param cores: the number of worker processes
    :param opener: the function used to open an archive
    :returns: the written report and the aggregation result
    :raises OutputWriteError: if the report cannot be written
    """
    result = aggregate(paths, reference=reference, cores=cores, opener=opener)

    sample_id = sample_name_from_argument(argument)
    report = SampleQualityReport.from_counters(sample_id, result.counters)
    output = Path(output_dir) / report_filename(sample_id)
    logger.debug("Writing report to %s", output)
    report.write_sqs_file(output)

    return report, result
