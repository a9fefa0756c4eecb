import logging
import os
import sys
import threading
import time

from diskstats_exporter.core.errors import AggregatedIngestionError, SourceUnavailable

logger = logging.getLogger(__name__)


def current_millis():
    return int(time.time() * 1000)


class DiskStatsProvider:
    """
    Reads the diskstats source and feeds it to an IngestionEngine.

    update() always reads and propagates errors. refresh() is what the
    exporter calls on scrape: it skips unsupported platforms, reads at most
    once per refresh interval and logs source and parse problems.
    """

    def __init__(self, engine, path="/proc/diskstats", refresh_interval=5.0,
                 clock=current_millis, monotonic=time.monotonic):
        self.engine = engine
        self.path = path
        self.refresh_interval = refresh_interval
        self._clock = clock
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._next_refresh = None

    def is_supported(self):
        return sys.platform.startswith("linux") and os.path.exists(self.path)

    def read_lines(self):
        try:
            # undecodable bytes become U+FFFD instead of failing the whole read
            with open(self.path, "r", encoding="ascii", errors="replace") as f:
                return f.read().splitlines()
        except OSError as e:
            raise SourceUnavailable(self.path) from e

    def update(self, now_millis=None):
        lines = self.read_lines()
        if now_millis is None:
            now_millis = self._clock()
        self.engine.ingest_snapshot(lines, now_millis)

    def refresh(self):
        if not self.is_supported():
            return False

        with self._lock:
            now = self._monotonic()
            if self._next_refresh is not None and now < self._next_refresh:
                return False
            self._next_refresh = now + self.refresh_interval

            try:
                self.update()
            except SourceUnavailable as e:
                logger.warning("Error gathering linux disk metrics: %s (%s)", e, e.__cause__)
            except AggregatedIngestionError as e:
                logger.warning("Error gathering linux disk metrics: %s", e)

        return True
