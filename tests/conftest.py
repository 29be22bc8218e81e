import json

import pytest
from fastapi.testclient import TestClient

from alertmanager2es.app import create_app
from alertmanager2es.metrics import NotificationMetrics
from alertmanager2es.models import ServiceConfig

ES_URL = "http://elasticsearch.test:9200"

AM_NOTIFICATION = {
    "alerts": [
        {
            "annotations": {
                "link": "https://example.com/Foo+Bar",
                "summary": "Alert summary",
            },
            "endsAt": "0001-01-01T00:00:00Z",
            "generatorURL": "https://example.com",
            "labels": {
                "alertname": "Foo_Bar",
                "instance": "foo",
            },
            "startsAt": "2017-02-02T16:51:13.507955756Z",
            "status": "firing",
        }
    ],
    "commonAnnotations": {
        "link": "https://example.com/Foo+Bar",
        "summary": "Alert summary",
    },
    "commonLabels": {
        "alertname": "Foo_Bar",
        "instance": "foo",
    },
    "externalURL": "https://alertmanager.example.com",
    "groupLabels": {
        "alertname": "Foo_Bar",
    },
    "receiver": "alertmanager2es",
    "status": "firing",
    "version": "4",
    "groupKey": '{}/{}/{notify="default":{alertname="Foo_Bar", instance="foo"}',
}


@pytest.fixture
def notification():
    return json.loads(json.dumps(AM_NOTIFICATION))


@pytest.fixture
def config() -> ServiceConfig:
    return ServiceConfig(es_url=ES_URL, timeout=2)


@pytest.fixture
def metrics() -> NotificationMetrics:
    return NotificationMetrics()


@pytest.fixture(autouse=True)
def no_es_credentials(monkeypatch):
    monkeypatch.delenv("ES_USER", raising=False)
    monkeypatch.delenv("ES_PASS", raising=False)


@pytest.fixture
def client(config, metrics):
    with TestClient(create_app(config, metrics=metrics)) as test_client:
        yield test_client


def counter(metrics: NotificationMetrics, name: str) -> float:
    return metrics.registry.get_sample_value(f"alertmanager2es_notifications_{name}_total")
