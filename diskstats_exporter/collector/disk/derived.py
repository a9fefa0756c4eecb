# Rates and ratios between the last two snapshots of a device. A zero
# elapsed time gives inf or nan rather than raising.

import math


def _divide(numerator, denominator):
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def new_reads(t):
    return t.delta("successfulReads")


def new_writes(t):
    return t.delta("successfulWrites")


def new_read_bytes(t):
    return t.delta("bytesRead")


def new_write_bytes(t):
    return t.delta("bytesWritten")


def iops(t):
    return _divide(new_reads(t) + new_writes(t), t.elapsed_seconds)


def read_throughput(t):
    """Bytes read per second."""
    return _divide(new_read_bytes(t), t.elapsed_seconds)


def write_throughput(t):
    """Bytes written per second."""
    return _divide(new_write_bytes(t), t.elapsed_seconds)


def merged_read_fraction(t):
    reads = new_reads(t)
    if reads == 0:
        return 0.0
    return t.delta("mergedReads") / reads


def merged_write_fraction(t):
    writes = new_writes(t)
    if writes == 0:
        return 0.0
    return t.delta("mergedWrites") / writes


def io_read_time_fraction(t):
    return _divide(t.delta("readTimeMillis"), t.elapsed_millis)


def io_write_time_fraction(t):
    return _divide(t.delta("writeTimeMillis"), t.elapsed_millis)


# Published name -> function, in registration order
DERIVED_METRICS = {
    "iops": iops,
    "readThroughput": read_throughput,
    "writeThroughput": write_throughput,
    "mergedReadFraction": merged_read_fraction,
    "mergedWriteFraction": merged_write_fraction,
    "ioReadTimeFraction": io_read_time_fraction,
    "ioWriteTimeFraction": io_write_time_fraction,
}
