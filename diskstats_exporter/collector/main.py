from prometheus_client import REGISTRY
from diskstats_exporter.collector.disk.diskio_collector_linux import DiskIOCollector
from diskstats_exporter.collector.disk.engine import IngestionEngine
from diskstats_exporter.collector.disk.provider import DiskStatsProvider
from diskstats_exporter.core.config import settings
from diskstats_exporter.core.registry import MetricRegistry

metric_registry = MetricRegistry()
engine = IngestionEngine(metric_registry, prefix=settings.METRIC_PREFIX)
provider = DiskStatsProvider(
    engine,
    path=settings.DISKSTATS_PATH,
    refresh_interval=settings.REFRESH_INTERVAL_SECONDS,
)

register = REGISTRY
register.register(DiskIOCollector(provider, metric_registry, settings.METRIC_PREFIX))
