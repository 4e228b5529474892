"""Configuration and shared files/objects for the testing framework.

Copyright (c) 2024 Pixelgen Technologies AB.
"""

import contextlib
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pysam
import pytest

from cramsqs.archive import AlignedRead
from cramsqs.exception import ArchiveOpenError

# (sequence, per base quality) pairs, None for a read stored without qualities
ReadSpec = Tuple[str, Optional[Sequence[int]]]


def make_reads(specs: Sequence[ReadSpec]) -> List[AlignedRead]:
    """Create in-memory records from (sequence, qualities) pairs."""
    return [AlignedRead(len(seq), seq, list(quals)) for seq, quals in specs]


@pytest.fixture(name="reads_from")
def reads_from_fixture():
    """Return the helper creating in-memory records."""
    return make_reads


@pytest.fixture(name="example_specs")
def example_specs_fixture() -> List[List[ReadSpec]]:
    """Three single read files with known base composition and quality."""
    return [
        [("AATT", [25] * 4)],
        [("GGCCGG", [35] * 6)],
        [("NNNNAAAAAA", [15] * 10)],
    ]


@pytest.fixture(name="fake_opener")
def fake_opener_fixture():
    """Build an opener serving in-memory records instead of decoding files.

    Paths mapped to an exception instance fail to open. The `closed`
    attribute of the returned opener lists every path whose handle was
    released.
    """

    def factory(files: Dict[str, Union[List[AlignedRead], Exception]]):
        closed: List[str] = []

        @contextlib.contextmanager
        def opener(path, reference=None):
            content = files[path]
            if isinstance(content, Exception):
                raise content
            try:
                yield iter(content)
            finally:
                closed.append(path)

        opener.closed = closed  # type: ignore[attr-defined]
        return opener

    return factory


@pytest.fixture(name="write_archive")
def write_archive_fixture():
    """Return a function writing unaligned reads to a BAM file with pysam.

    The file format is detected from the content when reading, so the file
    may be given a `.cram` name.
    """

    def write(path: Path, specs: Sequence[ReadSpec]) -> Path:
        header = {"HD": {"VN": "1.6"}, "SQ": [{"SN": "chr1", "LN": 1000}]}
        with pysam.AlignmentFile(str(path), "wb", header=header) as out:
            for i, (seq, quals) in enumerate(specs):
                segment = pysam.AlignedSegment()
                segment.query_name = f"read{i}"
                segment.flag = 4
                segment.reference_id = -1
                segment.reference_start = -1
                segment.mapping_quality = 0
                segment.query_sequence = seq
                if quals is not None:
                    segment.query_qualities = pysam.qualitystring_to_array(
                        "".join(chr(q + 33) for q in quals)
                    )
                out.write(segment)
        return path

    return write


@pytest.fixture(name="broken_archive")
def broken_archive_fixture():
    """Return an ArchiveOpenError like the one raised for an unreadable file."""

    def make(path: str) -> ArchiveOpenError:
        return ArchiveOpenError(f"Error opening CRAM file: {path}", fname=path)

    return make


@pytest.fixture()
def run_in_tmpdir(tmp_path, monkeypatch):
    """Run a test with a temporary directory as working directory."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path
