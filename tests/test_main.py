"""Tests for the HTTP endpoints, pointed at the sample diskstats file."""

import sys

import pytest
from fastapi.testclient import TestClient
from prometheus_client import CONTENT_TYPE_LATEST

from diskstats_exporter.collector.main import provider
from diskstats_exporter import main
from diskstats_exporter.core.registry import MetricRegistry
from diskstats_exporter.main import app


@pytest.fixture
def client(monkeypatch, diskstats_path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(provider, "path", str(diskstats_path))
    monkeypatch.setattr(provider, "_next_refresh", None)
    return TestClient(app)


def test_metrics_endpoint(client):
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
    assert 'linuxstats_diskstats_successful_reads_total{device="vda1"} 4930.0' in response.text


def test_metrics_html_lists_registry(client):
    response = client.get("/metrics_html")

    assert response.status_code == 200
    assert "<td>linuxstats.diskstats.vda1.successfulReads</td>" in response.text
    assert "<td>linuxstats.diskstats.total.bytesRead</td>" in response.text


def test_metrics_html_escapes_keys(client, monkeypatch):
    class Constant:
        metric_type = "gauge"

        def read(self):
            return 1

    registry = MetricRegistry()
    registry.register("linuxstats.diskstats.<b>sda</b>.iops", Constant())
    monkeypatch.setattr(main, "metric_registry", registry)

    response = client.get("/metrics_html")

    assert "<td>linuxstats.diskstats.&lt;b&gt;sda&lt;/b&gt;.iops</td>" in response.text
    assert "<b>sda</b>" not in response.text
