"""Shared fixtures for the diskstats tests."""

from pathlib import Path

import pytest

from diskstats_exporter.collector.disk.engine import IngestionEngine
from diskstats_exporter.core.registry import MetricRegistry

RESOURCES = Path(__file__).parent / "resources"

PREFIX = "linuxstats.diskstats"


@pytest.fixture
def diskstats_path() -> Path:
    return RESOURCES / "diskstats"


@pytest.fixture
def diskstats_lines(diskstats_path):
    return diskstats_path.read_text().splitlines()


@pytest.fixture
def registry():
    return MetricRegistry()


@pytest.fixture
def engine(registry):
    return IngestionEngine(registry, prefix=PREFIX)


@pytest.fixture
def make_line():
    """Build a diskstats line; sectors are given as sectors, not bytes."""

    def _make(device, reads=0, merged_reads=0, sectors_read=0, read_ms=0,
              writes=0, merged_writes=0, sectors_written=0, write_ms=0,
              in_progress=0, io_ms=0, weighted_io_ms=0):
        fields = [
            reads, merged_reads, sectors_read, read_ms,
            writes, merged_writes, sectors_written, write_ms,
            in_progress, io_ms, weighted_io_ms,
        ]
        return f" 8       0 {device} " + " ".join(str(f) for f in fields)

    return _make
