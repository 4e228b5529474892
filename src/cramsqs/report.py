"""Sequencing quality summary report.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import json
import os
import typing
from pathlib import Path
from typing import Any

import pydantic

from cramsqs.constants import REPORT_SEPARATOR, REPORT_SUFFIX
from cramsqs.exception import OutputWriteError
from cramsqs.statistics import SequenceQualityCounters
from cramsqs.types import PathType

NonNegativeInt = pydantic.NonNegativeInt
NonNegativeFloat = pydantic.NonNegativeFloat


def sample_name_from_argument(argument: str) -> str:
    """Derive the sample name from the path argument given by the user.

    The sample name is the last path segment with everything from its last
    dot removed, e.g. `/data/14-1671.cram` gives `14-1671`.

    :param argument: the path argument as given on the command line
    :returns: the sample name
    """
    name = argument.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot != -1:
        name = name[:dot]
    return name


def report_filename(sample_id: str) -> str:
    """Return the file name of the summary report of a sample."""
    return f"{sample_id}{REPORT_SUFFIX}"


class SampleReport(pydantic.BaseModel):
    """Base class for all cram-sqs reports.

    :ivar sample_id: The sample id for which the report is generated.
    """

    sample_id: str

    def to_json(self, **kwargs: Any) -> str:  # noqa: DOC103
        """Dump the report to a json string.

        :param kwargs: Additional arguments to pass to `json.dumps`.
        :return: The report serialized to JSON as a string.
        """
        return json.dumps(self.model_dump(mode="json"), **kwargs)

    def write_json_file(self, p: str | os.PathLike, **kwargs: Any) -> None:
        """Write a JSON serialized SampleReport to a file.

        Non-existing intermediate directories in the path will be created.

        :param p: The path to the file to write.
        :param kwargs: Additional arguments to pass to pydantics `model_dump_json`.
        :raises OutputWriteError: if the file cannot be written
        """
        try:
            Path(p).resolve().parent.mkdir(parents=True, exist_ok=True)
            with open(p, "w", encoding="utf-8") as fp:
                fp.write(self.model_dump_json(**kwargs))
        except OSError as exc:
            raise OutputWriteError(f"Error opening output file {p}", fname=p) from exc


class SampleQualityReport(SampleReport):
    """Model for the sequencing quality summary of a sample."""

    model_config = pydantic.ConfigDict(frozen=True)

    report_type: typing.Literal["sqs"] = "sqs"

    total_bases: NonNegativeInt = pydantic.Field(
        ..., description="The total number of bases in all reads."
    )
    total_reads: NonNegativeInt = pydantic.Field(
        ..., description="The total number of reads."
    )
    n_percentage: NonNegativeFloat = pydantic.Field(
        ..., description="The percentage of bases called as N."
    )
    gc_content: NonNegativeFloat = pydantic.Field(
        ..., description="The percentage of bases called as G or C."
    )
    q20_percentage: NonNegativeFloat = pydantic.Field(
        ..., description="The percentage of bases with Phred score ≥ 20."
    )
    q30_percentage: NonNegativeFloat = pydantic.Field(
        ..., description="The percentage of bases with Phred score ≥ 30."
    )
    a_bases: NonNegativeInt
    t_bases: NonNegativeInt
    g_bases: NonNegativeInt
    c_bases: NonNegativeInt
    n_bases: NonNegativeInt
    q20_bases: NonNegativeInt = pydantic.Field(
        ..., description="The number of bases with Phred score ≥ 20."
    )
    q30_bases: NonNegativeInt = pydantic.Field(
        ..., description="The number of bases with Phred score ≥ 30."
    )
    average_read_length: NonNegativeFloat = pydantic.Field(
        ..., description="The mean number of bases per read."
    )

    @classmethod
    def from_counters(
        cls, sample_id: str, counters: SequenceQualityCounters
    ) -> "SampleQualityReport":
        """Build a report from accumulated counters.

        :param sample_id: the sample name
        :param counters: the counters of all reads of the sample
        :returns: a SampleQualityReport
        """
        return cls(
            sample_id=sample_id,
            total_bases=counters.total_bases,
            total_reads=counters.total_reads,
            a_bases=counters.a_bases,
            t_bases=counters.t_bases,
            g_bases=counters.g_bases,
            c_bases=counters.c_bases,
            n_bases=counters.n_bases,
            q20_bases=counters.q20_bases,
            q30_bases=counters.q30_bases,
            **counters.stats.asdict(),
        )

    def to_sqs(self) -> str:
        """Render the report in the line oriented `.sqs` text format."""
        lines = [
            f"Sample Name: {self.sample_id}",
            f"Total Bases: {self.total_bases}",
            f"Total Reads: {self.total_reads}",
            f"N Percentage: {self.n_percentage:.2f}%",
            f"GC Content: {self.gc_content:.2f}%",
            f"Q20 Percentage: {self.q20_percentage:.2f}%",
            f"Q30 Percentage: {self.q30_percentage:.2f}%",
            f"A base count: {self.a_bases}",
            f"T base count: {self.t_bases}",
            f"G base count: {self.g_bases}",
            f"C base count: {self.c_bases}",
            f"N base count: {self.n_bases}",
            f"Q20 Bases: {self.q20_bases}",
            f"Q30 Bases: {self.q30_bases}",
            f"Average Read Length: {self.average_read_length:.2f}",
            REPORT_SEPARATOR,
        ]
        return "\n".join(lines) + "\n"

    def write_sqs_file(self, p: PathType) -> None:
        """Write the report to `p`, replacing any existing file.

        :param p: The path to the file to write.
        :raises OutputWriteError: if the file cannot be written
        """
        try:
            with open(p, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(self.to_sqs())
        except OSError as exc:
            raise OutputWriteError(f"Error opening output file {p}", fname=p) from exc
