import threading

from diskstats_exporter.core.errors import RegistryConflict


class MetricRegistry:
    """
    Dotted-name registry of pull-based gauges.

    Keys look like "linuxstats.diskstats.sda.iops". Values are gauge objects
    exposing read() and metric_type; the registry never holds computed values.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._metrics = {}  # { key: gauge }

    @staticmethod
    def name(*parts):
        return ".".join(p for p in parts if p)

    def register(self, key, gauge):
        with self._lock:
            if key in self._metrics:
                raise RegistryConflict(key)
            self._metrics[key] = gauge
        return gauge

    def get_metrics(self):
        with self._lock:
            return dict(self._metrics)

    def __contains__(self, key):
        with self._lock:
            return key in self._metrics

    def __len__(self):
        with self._lock:
            return len(self._metrics)
