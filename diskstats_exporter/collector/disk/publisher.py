import logging

from diskstats_exporter.collector.disk.derived import DERIVED_METRICS
from diskstats_exporter.collector.disk.parser import METRIC_INDEX, METRIC_NAMES
from diskstats_exporter.core.registry import MetricRegistry

logger = logging.getLogger(__name__)

# Raw fields that are not cumulative
GAUGE_FIELDS = {"inProgressIOPS"}


class DiskStatGauge:
    """Reads one raw counter of a device."""

    def __init__(self, state, index):
        self.state = state
        self.index = index
        self.metric_type = "gauge" if METRIC_NAMES[index] in GAUGE_FIELDS else "counter"

    def read(self):
        return self.state.current.counters[self.index]


class DerivedGauge:
    """Applies a derived function to the live transition of a device."""

    metric_type = "gauge"

    def __init__(self, state, function):
        self.state = state
        self.function = function

    def read(self):
        return self.function(self.state.transition())


class MetricPublisher:
    def __init__(self, prefix):
        self.prefix = prefix

    def key(self, device_name, metric_name):
        return MetricRegistry.name(self.prefix, device_name, metric_name)

    def ensure_registered(self, state, registry):
        """
        Register the gauges of a device that are not registered yet.

        Raw counters are registered the first time the device is seen, derived
        values once a previous snapshot exists. Keys already present in the
        registry are left alone. Safe to call on every cycle.
        """
        if not state.metrics_registered:
            self._register_absent(
                registry,
                state.device_name,
                ((name, DiskStatGauge(state, METRIC_INDEX[name])) for name in METRIC_NAMES),
            )
            state.metrics_registered = True

        if not state.derived_registered and state.previous is not None:
            self._register_absent(
                registry,
                state.device_name,
                ((name, DerivedGauge(state, fn)) for name, fn in DERIVED_METRICS.items()),
            )
            state.derived_registered = True

    def _register_absent(self, registry, device_name, gauges):
        existing = registry.get_metrics()
        for metric_name, gauge in gauges:
            key = self.key(device_name, metric_name)
            if key in existing:
                continue
            registry.register(key, gauge)
            logger.debug("registered %s", key)
