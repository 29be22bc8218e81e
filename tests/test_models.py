"""Tests for payload and configuration models."""

import json

import pytest
from pydantic import ValidationError

from alertmanager2es.models import Notification, ServiceConfig


def test_notification_round_trips_wire_names(notification):
    parsed = Notification.model_validate(notification)

    assert parsed.group_key == notification["groupKey"]
    assert parsed.external_url == "https://alertmanager.example.com"
    assert parsed.alerts[0].generator_url == "https://example.com"
    assert parsed.alerts[0].starts_at == "2017-02-02T16:51:13.507955756Z"
    assert json.loads(parsed.to_document()) == notification


def test_alert_timestamps_are_not_reinterpreted():
    parsed = Notification.model_validate_json(
        '{"version": "4", "alerts": [{"startsAt": "2017-02-02T16:51:13.507955756Z", "endsAt": "0001-01-01T00:00:00Z"}]}'
    )

    document = json.loads(parsed.to_document())

    assert document["alerts"][0] == {
        "startsAt": "2017-02-02T16:51:13.507955756Z",
        "endsAt": "0001-01-01T00:00:00Z",
    }


def test_timestamp_serialized_with_at_sign():
    parsed = Notification.model_validate({"version": "4"})
    parsed.timestamp = "2017-02-02T19:37:22+01:00"

    assert json.loads(parsed.to_document()) == {
        "version": "4",
        "@timestamp": "2017-02-02T19:37:22+01:00",
    }


def test_missing_version_is_empty():
    assert Notification.model_validate({}).version == ""


def test_config_defaults():
    config = ServiceConfig(es_url="http://localhost:9200/")

    assert config.es_url == "http://localhost:9200"
    assert config.addr == "localhost:9097"
    assert config.es_index_name == "alertmanager"
    assert config.es_index_date_format == "%Y.%m"
    assert config.es_type == "alert_group"
    assert config.host_port == ("localhost", 9097)


def test_config_requires_http_url():
    with pytest.raises(ValidationError):
        ServiceConfig(es_url="localhost:9200")


@pytest.mark.parametrize("addr", ["localhost", "localhost:http", ""])
def test_config_rejects_bad_addr(addr):
    with pytest.raises(ValidationError):
        ServiceConfig(es_url="http://localhost:9200", addr=addr)


def test_config_listen_on_all_interfaces():
    config = ServiceConfig(es_url="http://localhost:9200", addr=":9097")

    assert config.host_port == ("0.0.0.0", 9097)


@pytest.mark.parametrize("level", ["debug", "WARNING", "success"])
def test_config_accepts_loguru_levels(level):
    config = ServiceConfig(es_url="http://localhost:9200", log_level=level)

    assert config.log_level == level.upper()


def test_config_rejects_unknown_log_level():
    with pytest.raises(ValidationError):
        ServiceConfig(es_url="http://localhost:9200", log_level="verbose")
