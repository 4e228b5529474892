"""Tests for the quality statistics module.

Copyright (c) 2024 Pixelgen Technologies AB.
"""

import pytest

from cramsqs import statistics
from cramsqs.archive import AlignedRead
from cramsqs.statistics import (
    Base,
    SequenceQualityCounters,
    SequenceQualityStats,
    classify_base,
)


@pytest.mark.parametrize(
    "symbol,expected",
    [
        ("A", Base.A),
        ("T", Base.T),
        ("G", Base.G),
        ("C", Base.C),
        ("N", Base.N),
        ("R", Base.N),
        ("=", Base.N),
        ("a", Base.N),
    ],
)
def test_classify_base(symbol, expected):
    assert classify_base(symbol) is expected


def test_counters_example(example_specs, reads_from):
    counters = SequenceQualityCounters()
    for specs in example_specs:
        counters.consume(reads_from(specs))

    assert counters.total_reads == 3
    assert counters.total_bases == 20
    assert counters.total_length == 20
    assert counters.base_counts == {
        Base.A: 8,
        Base.T: 2,
        Base.G: 4,
        Base.C: 2,
        Base.N: 4,
    }
    assert counters.q20_bases == 10
    assert counters.q30_bases == 6


def test_counters_match_direct_summation(reads_from):
    specs = [
        ("ACGTRYNN", [2, 19, 20, 21, 29, 30, 31, 40]),
        ("GGGCCA", [30, 30, 10, 20, 35, 0]),
        ("TTTTTTTTTTTT", [41] * 12),
    ]
    counters = SequenceQualityCounters().consume(reads_from(specs))

    sequences = "".join(seq for seq, _ in specs)
    qualities = [q for _, quals in specs for q in quals]
    assert counters.total_bases == len(sequences)
    assert counters.a_bases == sequences.count("A")
    assert counters.t_bases == sequences.count("T")
    assert counters.g_bases == sequences.count("G")
    assert counters.c_bases == sequences.count("C")
    assert counters.n_bases == len(sequences) - sum(
        sequences.count(b) for b in "ATGC"
    )
    assert counters.q20_bases == sum(q >= 20 for q in qualities)
    assert counters.q30_bases == sum(q >= 30 for q in qualities)
    assert sum(counters.base_counts.values()) == counters.total_bases


def test_q30_bases_are_also_q20_bases(reads_from):
    counters = SequenceQualityCounters().consume(reads_from([("AAA", [35, 35, 35])]))

    assert counters.q20_bases == 3
    assert counters.q30_bases == 3


def test_record_without_qualities_counts_as_high_quality():
    counters = SequenceQualityCounters()
    counters.update(AlignedRead(length=4, sequence="ACGT", qualities=None))
    counters.update(AlignedRead(length=2, sequence="AA", qualities=[10, 25]))

    assert counters.total_bases == 6
    assert counters.q20_bases == 5
    assert counters.q30_bases == 4
    assert counters.stats.q30_percentage == pytest.approx(400 / 6)


def test_base_classes_come_from_classify_base(mocker):
    spy = mocker.spy(statistics, "classify_base")
    counters = SequenceQualityCounters()
    counters.update(AlignedRead(length=6, sequence="aCGTRC", qualities=[30] * 6))

    assert sorted(call.args[0] for call in spy.call_args_list) == [
        "C",
        "G",
        "R",
        "T",
        "a",
    ]
    assert counters.base_counts == {
        Base.A: 0,
        Base.T: 1,
        Base.G: 1,
        Base.C: 2,
        Base.N: 2,
    }


def test_record_without_sequence_counts_as_n():
    counters = SequenceQualityCounters()
    counters.update(AlignedRead(length=3, sequence="", qualities=[30, 30, 30]))

    assert counters.n_bases == 3
    assert counters.q30_bases == 3


def test_empty_record():
    counters = SequenceQualityCounters()
    counters.update(AlignedRead(length=0, sequence="", qualities=None))

    assert counters.total_reads == 1
    assert counters.total_bases == 0
    assert counters.stats.average_read_length == 0.0


def test_stats(example_specs, reads_from):
    counters = SequenceQualityCounters()
    for specs in example_specs:
        counters.consume(reads_from(specs))

    assert counters.stats == SequenceQualityStats(
        n_percentage=20.0,
        gc_content=30.0,
        q20_percentage=50.0,
        q30_percentage=30.0,
        average_read_length=20 / 3,
    )


def test_stats_without_reads():
    stats = SequenceQualityCounters().stats

    assert stats.asdict() == {
        "n_percentage": 0.0,
        "gc_content": 0.0,
        "q20_percentage": 0.0,
        "q30_percentage": 0.0,
        "average_read_length": 0.0,
    }


def test_counters_merge(example_specs, reads_from):
    combined = SequenceQualityCounters()
    for specs in example_specs:
        combined.consume(reads_from(specs))

    merged = SequenceQualityCounters()
    for specs in reversed(example_specs):
        merged += SequenceQualityCounters().consume(reads_from(specs))

    assert merged == combined


def test_counters_do_not_wrap_at_32_bits():
    counters = SequenceQualityCounters(total_bases=2**31 - 1, total_reads=2**32)
    counters += SequenceQualityCounters(total_bases=10, total_reads=1)

    assert counters.total_bases == 2**31 + 9
    assert counters.total_reads == 2**32 + 1
