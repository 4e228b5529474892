"""Base composition and quality statistics accumulated over reads.

Copyright (c) 2024 Pixelgen Technologies AB.
"""
from __future__ import annotations

import collections
import dataclasses
import enum
from typing import Any, Dict, Iterable

import numpy as np

from cramsqs.archive import ReadRecord
from cramsqs.constants import Q20, Q30


class Base(enum.Enum):
    """Base call classes. Any symbol that is not A, T, G or C is an N."""

    A = "A"
    T = "T"
    G = "G"
    C = "C"
    N = "N"

    @classmethod
    def _missing_(cls, value):
        return cls.N


def classify_base(symbol: str) -> Base:
    """Return the base class of a single base call symbol.

    :param symbol: a base call, e.g. `A` or `R`
    :returns: the matching Base, `Base.N` for anything unrecognised
    """
    return Base(symbol)


_BASE_FIELDS = {
    Base.A: "a_bases",
    Base.T: "t_bases",
    Base.G: "g_bases",
    Base.C: "c_bases",
    Base.N: "n_bases",
}


def _percentage(numerator: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return numerator * 100.0 / total


@dataclasses.dataclass(frozen=True)
class SequenceQualityStats:
    n_percentage: float
    gc_content: float
    q20_percentage: float
    q30_percentage: float
    average_read_length: float

    def asdict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass
class SequenceQualityCounters:
    """Accumulate base composition and quality counts over many reads.

    Counters only ever grow. Two collectors can be merged with `+=`, the
    result does not depend on the order of merging.
    """

    total_bases: int = 0
    total_reads: int = 0
    total_length: int = 0
    a_bases: int = 0
    t_bases: int = 0
    g_bases: int = 0
    c_bases: int = 0
    n_bases: int = 0
    q20_bases: int = 0
    q30_bases: int = 0

    def update(self, record: ReadRecord) -> None:
        """Add a single read to the counters.

        Every position of the read is counted as exactly one base class.
        Positions without a base call count as N. A base with quality 30 or
        more counts towards both the Q20 and the Q30 bases. A read stored
        without qualities is decoded as all positions scoring 0xff, so all
        its bases count as Q20 and Q30.

        :param record: the read to add
        """
        length = record.length
        self.total_reads += 1
        self.total_bases += length
        self.total_length += length

        if length <= 0:
            return

        sequence = record.sequence[:length]
        for symbol, count in collections.Counter(sequence).items():
            field = _BASE_FIELDS[classify_base(symbol)]
            setattr(self, field, getattr(self, field) + count)
        self.n_bases += length - len(sequence)

        if record.qualities is None:
            self.q20_bases += length
            self.q30_bases += length
            return

        quali = np.asarray(record.qualities)[:length]
        self.q20_bases += int(np.count_nonzero(quali >= Q20))
        self.q30_bases += int(np.count_nonzero(quali >= Q30))

    def consume(self, records: Iterable[ReadRecord]) -> "SequenceQualityCounters":
        """Add all reads from an iterable and return self."""
        for record in records:
            self.update(record)
        return self

    @property
    def base_counts(self) -> Dict[Base, int]:
        """Return the number of bases per base class."""
        return {
            Base.A: self.a_bases,
            Base.T: self.t_bases,
            Base.G: self.g_bases,
            Base.C: self.c_bases,
            Base.N: self.n_bases,
        }

    @property
    def stats(self) -> SequenceQualityStats:
        """
        Return the derived percentages and the average read length.

        Each value is 0.0 when its denominator is zero.
        """
        if self.total_reads > 0:
            average_read_length = self.total_length / self.total_reads
        else:
            average_read_length = 0.0

        return SequenceQualityStats(
            n_percentage=_percentage(self.n_bases, self.total_bases),
            gc_content=_percentage(self.g_bases + self.c_bases, self.total_bases),
            q20_percentage=_percentage(self.q20_bases, self.total_bases),
            q30_percentage=_percentage(self.q30_bases, self.total_bases),
            average_read_length=average_read_length,
        )

    def __iadd__(self, other: "SequenceQualityCounters") -> "SequenceQualityCounters":
        """Merge the counts of another collector into this one."""
        for field in dataclasses.fields(self):
            setattr(
                self, field.name, getattr(self, field.name) + getattr(other, field.name)
            )
        return self
