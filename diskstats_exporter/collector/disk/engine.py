import logging
import threading

from diskstats_exporter.collector.disk.parser import METRIC_NAMES, StatRecord, parse_row
from diskstats_exporter.collector.disk.publisher import MetricPublisher
from diskstats_exporter.collector.disk.state import DeviceState
from diskstats_exporter.core.errors import AggregatedIngestionError, MalformedRecord

logger = logging.getLogger(__name__)

TOTAL_DEVICE = "total"
DEFAULT_PREFIX = "linuxstats.diskstats"


class IngestionEngine:
    """
    Folds diskstats snapshots into per-device state and keeps the registry
    populated with gauges reading that state.

    A synthetic "total" device holds the field-wise sum over every device
    parsed in a cycle.
    """

    def __init__(self, registry, prefix=DEFAULT_PREFIX):
        self.registry = registry
        self.prefix = prefix
        self.publisher = MetricPublisher(prefix)
        self._lock = threading.Lock()
        self._states = {}  # { device_name: DeviceState }

    def ingest_snapshot(self, lines, now_millis):
        """
        Process one refresh cycle.

        Lines that fail to parse are skipped; the rest of the cycle, including
        the total, is still applied. AggregatedIngestionError is raised at the
        end if anything was skipped.
        """
        failures = []

        with self._lock:
            totals = [0] * len(METRIC_NAMES)
            parsed = 0

            for lineno, line in enumerate(lines, start=1):
                if not line.strip():
                    continue

                try:
                    record = parse_row(line, now_millis)
                except MalformedRecord as e:
                    logger.warning("skipping diskstats line %d: %s", lineno, e.reason)
                    failures.append((lineno, line, e))
                    continue

                for i, value in enumerate(record.counters):
                    totals[i] += value
                self._observe(record)
                parsed += 1

            self._observe(StatRecord(TOTAL_DEVICE, tuple(totals), now_millis))
            logger.debug("ingested %d devices at %d", parsed, now_millis)

        if failures:
            raise AggregatedIngestionError(failures)

    def _observe(self, record):
        state = self._states.get(record.device_name)
        if state is None:
            state = DeviceState(record)
            self._states[record.device_name] = state
        else:
            state.apply_snapshot(record)

        self.publisher.ensure_registered(state, self.registry)

    def devices(self):
        with self._lock:
            return sorted(self._states)

    def state(self, device_name):
        with self._lock:
            return self._states.get(device_name)
