import re

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily

METRIC_HELP = {
    "successfulReads": "The total number of reads completed successfully.",
    "mergedReads": "The total number of reads merged.",
    "bytesRead": "The total number of bytes read successfully.",
    "readTimeMillis": "The total number of milliseconds spent by all reads.",
    "successfulWrites": "The total number of writes completed successfully.",
    "mergedWrites": "The number of writes merged.",
    "bytesWritten": "The total number of bytes written successfully.",
    "writeTimeMillis": "The total number of milliseconds spent by all writes.",
    "inProgressIOPS": "The number of I/Os currently in progress.",
    "totalIOMillis": "Total milliseconds spent doing I/Os.",
    "weightedIOMillis": "The weighted number of milliseconds spent doing I/Os.",
    "iops": "I/Os completed per second over the last refresh window.",
    "readThroughput": "Bytes read per second over the last refresh window.",
    "writeThroughput": "Bytes written per second over the last refresh window.",
    "mergedReadFraction": "Merged reads per completed read over the last refresh window.",
    "mergedWriteFraction": "Merged writes per completed write over the last refresh window.",
    "ioReadTimeFraction": "Read time per elapsed time over the last refresh window.",
    "ioWriteTimeFraction": "Write time per elapsed time over the last refresh window.",
}

_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


def snake_case(name):
    name = _ACRONYM_RE.sub(r"\1_\2", name)
    return _CAMEL_RE.sub(r"\1_\2", name).lower()


class DiskIOCollector:
    """
    Exposes the dotted diskstats registry as Prometheus metric families.

    "linuxstats.diskstats.sda.bytesRead" becomes
    linuxstats_diskstats_bytes_read_total{device="sda"}.
    """

    def __init__(self, provider, registry, prefix):
        self.provider = provider
        self.registry = registry
        self.prefix = prefix
        self.namespace = prefix.replace(".", "_")

    def describe(self):
        # no read of the source when registering with prometheus_client
        return []

    def collect(self):
        self.provider.refresh()

        families = {}
        start = self.prefix + "."

        for key, gauge in sorted(self.registry.get_metrics().items()):
            if not key.startswith(start):
                continue

            dev, metric = key[len(start):].rsplit(".", 1)

            family = families.get(metric)
            if family is None:
                family = self._family(metric, gauge.metric_type)
                families[metric] = family

            family.add_metric([dev], float(gauge.read()))

        yield from families.values()

    def _family(self, metric, metric_type):
        name = f"{self.namespace}_{snake_case(metric)}"
        documentation = METRIC_HELP.get(metric, f"Disk statistic {metric}.")

        if metric_type == "counter":
            return CounterMetricFamily(name, documentation, labels=["device"])
        return GaugeMetricFamily(name, documentation, labels=["device"])
