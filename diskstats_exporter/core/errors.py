"""
Errors raised while collecting disk statistics.
"""


class DiskStatsError(Exception):
    """Base class for every error raised by the exporter."""


class MalformedRecord(DiskStatsError):
    """A single diskstats line could not be parsed."""

    def __init__(self, line, reason):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


class AggregatedIngestionError(DiskStatsError):
    """
    One ingestion cycle finished but skipped some lines.

    failures holds (line_number, line, MalformedRecord) tuples, line numbers
    starting at 1.
    """

    def __init__(self, failures):
        self.failures = list(failures)
        super().__init__(
            f"{len(self.failures)} diskstats line(s) skipped: "
            + "; ".join(f"line {n}: {err.reason}" for n, _, err in self.failures)
        )


class SourceUnavailable(DiskStatsError):
    """The statistics source could not be read at all."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"cannot read disk statistics from {path}")


class RegistryConflict(DiskStatsError):
    """A metric key was registered twice."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"metric already registered: {key}")
