"""Tests for the /proc/diskstats row parser."""

import pytest

from diskstats_exporter.collector.disk.parser import METRIC_NAMES, StatRecord, parse_row
from diskstats_exporter.core.errors import MalformedRecord


def test_parse_row_reads_all_fields():
    line = " 253       0 vda 5432 12 61206 3020 8843 4417 226448 25064 0 9124 28068"
    record = parse_row(line, captured_at_millis=1234)

    assert record.device_name == "vda"
    assert record.captured_at_millis == 1234
    assert record.counters == (
        5432, 12, 61206 * 512, 3020,
        8843, 4417, 226448 * 512, 25064,
        0, 9124, 28068,
    )


def test_parse_row_converts_sectors_to_bytes():
    record = parse_row("253 0 vda 0 0 61206 0 0 0 10 0 0 0 0")
    assert record.value("bytesRead") == 31337472
    assert record.value("bytesWritten") == 5120


def test_parse_row_ignores_extra_kernel_columns():
    # Linux 4.18+ appends discard and flush columns
    line = "   8       0 sda 100 1 200 3 4 5 6 7 0 8 9 11 0 22 33 44 55"
    record = parse_row(line)
    assert len(record.counters) == len(METRIC_NAMES)
    assert record.value("weightedIOMillis") == 9


def test_parse_row_accepts_tabs_and_repeated_spaces():
    record = parse_row("\t8\t1  \t sda1   1 2 3 4 5 6 7 8 9 10 11  ")
    assert record.device_name == "sda1"
    assert record.value("successfulReads") == 1
    assert record.value("weightedIOMillis") == 11


def test_parse_row_default_timestamp():
    assert parse_row("8 0 sda 1 2 3 4 5 6 7 8 9 10 11").captured_at_millis == 0


def test_record_is_immutable():
    record = StatRecord("sda", tuple(range(11)))
    with pytest.raises(AttributeError):
        record.counters = ()


@pytest.mark.parametrize("line", [
    "",
    "8 0",
    "8 0 sda",
    "8 0 sda 1 2 3 4 5 6 7 8 9 10",
])
def test_parse_row_rejects_short_lines(line):
    with pytest.raises(MalformedRecord):
        parse_row(line)


@pytest.mark.parametrize("token", ["-1", "+1", "1.5", "abc", "1_000", "0x10", "١"])
def test_parse_row_rejects_non_decimal_counters(token):
    line = f"8 0 sda 1 2 {token} 4 5 6 7 8 9 10 11"
    with pytest.raises(MalformedRecord) as exc_info:
        parse_row(line)
    assert exc_info.value.line == line
    assert "bytesRead" in exc_info.value.reason


def test_parse_row_reports_device_in_reason():
    with pytest.raises(MalformedRecord) as exc_info:
        parse_row("8 0 sdb 1 2 3")
    assert "sdb" in exc_info.value.reason
