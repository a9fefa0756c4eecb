import threading
from typing import NamedTuple, Optional

from diskstats_exporter.collector.disk.parser import StatRecord


class Transition(NamedTuple):
    """The two most recent snapshots of one device, read together."""

    current: StatRecord
    previous: Optional[StatRecord]

    @property
    def elapsed_millis(self):
        return self.current.captured_at_millis - self.previous.captured_at_millis

    @property
    def elapsed_seconds(self):
        return self.elapsed_millis / 1000.0

    def delta(self, metric_name):
        return self.current.value(metric_name) - self.previous.value(metric_name)


class DeviceState:
    # The (current, previous) pair is swapped and read under one lock.

    def __init__(self, record):
        self.device_name = record.device_name
        self._lock = threading.Lock()
        self._current = record
        self._previous = None

        self.metrics_registered = False
        self.derived_registered = False

    def apply_snapshot(self, record):
        with self._lock:
            self._previous = self._current
            self._current = record

    def transition(self):
        with self._lock:
            return Transition(self._current, self._previous)

    @property
    def current(self):
        with self._lock:
            return self._current

    @property
    def previous(self):
        with self._lock:
            return self._previous

    def __repr__(self):
        t = self.transition()
        return f"DeviceState({self.device_name!r}, current={t.current}, previous={t.previous})"
