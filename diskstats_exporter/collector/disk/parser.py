from dataclasses import dataclass
from typing import Tuple

from diskstats_exporter.core.errors import MalformedRecord

# Order of the counters following the device name, see
# https://www.kernel.org/doc/Documentation/ABI/testing/procfs-diskstats
METRIC_NAMES = (
    "successfulReads",
    "mergedReads",
    "bytesRead",        # sectors in the source, stored as bytes
    "readTimeMillis",
    "successfulWrites",
    "mergedWrites",
    "bytesWritten",     # sectors in the source, stored as bytes
    "writeTimeMillis",
    "inProgressIOPS",
    "totalIOMillis",
    "weightedIOMillis",
)

METRIC_INDEX = {name: i for i, name in enumerate(METRIC_NAMES)}

SECTOR_SIZE = 512
SECTOR_FIELDS = (METRIC_INDEX["bytesRead"], METRIC_INDEX["bytesWritten"])


@dataclass(frozen=True)
class StatRecord:
    device_name: str
    counters: Tuple[int, ...]
    captured_at_millis: int = 0

    def value(self, metric_name):
        return self.counters[METRIC_INDEX[metric_name]]


def parse_counter(token):
    # int() alone would also accept signs, underscores and non-ASCII digits
    if not (token.isascii() and token.isdigit()):
        raise ValueError(token)
    return int(token)


def parse_row(line, captured_at_millis=0):
    parts = line.split()
    if len(parts) < 3:
        raise MalformedRecord(line, "missing major, minor or device name")

    device = parts[2]
    fields = parts[3:3 + len(METRIC_NAMES)]
    if len(fields) < len(METRIC_NAMES):
        raise MalformedRecord(
            line,
            f"expected {len(METRIC_NAMES)} counters for {device}, got {len(fields)}",
        )

    counters = []
    for i, token in enumerate(fields):
        try:
            value = parse_counter(token)
        except ValueError:
            raise MalformedRecord(
                line, f"{METRIC_NAMES[i]} is not a non-negative integer: {token!r}"
            ) from None

        if i in SECTOR_FIELDS:
            value *= SECTOR_SIZE
        counters.append(value)

    return StatRecord(device, tuple(counters), captured_at_millis)
