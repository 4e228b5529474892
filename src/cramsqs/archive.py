"""Read access to sequence alignment archives (CRAM, BAM, SAM).

Decoding is delegated to pysam. This module only exposes the small part
of a record the quality statistics need.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import contextlib
import dataclasses
import logging
from typing import Iterator, Optional, Protocol, Sequence

import pysam

from cramsqs.exception import ArchiveOpenError
from cramsqs.types import PathType

logger = logging.getLogger(__name__)


class ReadRecord(Protocol):
    """The per-read data consumed by the quality statistics."""

    @property
    def length(self) -> int:
        """Number of bases in the read."""
        ...

    @property
    def sequence(self) -> str:
        """The base calls, empty if the record stores no sequence."""
        ...

    @property
    def qualities(self) -> Optional[Sequence[int]]:
        """Phred scores per base, or None if the record stores none."""
        ...


@dataclasses.dataclass(frozen=True)
class AlignedRead:
    """A decoded read detached from the decoder buffers."""

    length: int
    sequence: str
    qualities: Optional[Sequence[int]]

    @classmethod
    def from_segment(cls, segment: pysam.AlignedSegment) -> "AlignedRead":
        """Copy the fields needed for statistics out of a pysam segment.

        :param segment: the record yielded by pysam
        :returns: an AlignedRead
        """
        return cls(
            length=segment.query_length,
            sequence=segment.query_sequence or "",
            qualities=segment.query_qualities,
        )


def _iter_records(
    handle: pysam.AlignmentFile, path: PathType
) -> Iterator[AlignedRead]:
    """Yield the records of an open archive until end of file.

    A decode error ends the stream, records read before it are kept.
    """
    try:
        for segment in handle.fetch(until_eof=True):
            yield AlignedRead.from_segment(segment)
    except (OSError, ValueError) as exc:
        logger.warning("Stopped reading %s after a decode error: %s", path, exc)


@contextlib.contextmanager
def open_archive(
    path: PathType, reference: Optional[PathType] = None
) -> Iterator[Iterator[ReadRecord]]:
    """Open an alignment archive and yield an iterator over its records.

    The format is detected from the file content. A truncated file opens
    normally and yields its records up to the point of truncation. The file
    handle is closed when the context exits, also when reading stops early.

    :param path: the archive to open
    :param reference: optional reference FASTA used to decode CRAM files
    :raises ArchiveOpenError: if the file cannot be opened or its header read
    :yields: an iterator over the records in the file
    """
    try:
        handle = pysam.AlignmentFile(
            str(path),
            "r",
            check_sq=False,
            ignore_truncation=True,
            reference_filename=str(reference) if reference is not None else None,
        )
    except (OSError, ValueError) as exc:
        raise ArchiveOpenError(f"Error opening CRAM file: {path}", fname=path) from exc

    with handle:
        logger.debug(
            "Opened %s (%s, %d references)",
            path,
            handle.format,
            len(handle.header.references),
        )
        yield _iter_records(handle, path)
