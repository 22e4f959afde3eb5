from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest

from rfping_model import Ping
from rfping_settings import Settings
from rfping_store import PingStore


def test_put_writes_full_record():
    table = Mock()
    ping = Ping(uuid="u1", path="/a1", ip="10.0.0.1", time="t")

    PingStore(table).put(ping)

    table.put_item.assert_called_once_with(Item={"Uuid": "u1", "Path": "/a1", "IP": "10.0.0.1", "Time": "t"})


def test_scan_all_follows_pages():
    table = Mock()
    table.scan.side_effect = [
        {"Items": [{"Uuid": "u1"}], "LastEvaluatedKey": {"Uuid": "u1"}},
        {"Items": [{"Uuid": "u2"}]},
    ]

    items = PingStore(table).scan_all()

    assert items == [{"Uuid": "u1"}, {"Uuid": "u2"}]
    assert table.scan.call_args_list[0].kwargs == {}
    assert table.scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"Uuid": "u1"}}


def test_from_settings_uses_region_and_table():
    resource = Mock()
    settings = Settings(region="ap-southeast-2", table_name="Clients", endpoint_url="http://localhost:4566")

    with patch("boto3.resource", return_value=resource) as mock_resource:
        store = PingStore.from_settings(settings)

    mock_resource.assert_called_once_with(
        "dynamodb", region_name="ap-southeast-2", endpoint_url="http://localhost:4566"
    )
    assert store.table is resource.Table.return_value


def test_settings_from_env_prefers_region_variable():
    settings = Settings.from_env({"region": "eu-central-1", "AWS_REGION": "us-west-2", "LOG_LEVEL": "debug"})

    assert settings.region == "eu-central-1"
    assert settings.table_name == "Clients"
    assert settings.endpoint_url is None
    assert settings.log_level == "DEBUG"


def test_settings_from_env_defaults():
    assert Settings.from_env({}) == Settings(region="us-east-1", table_name="Clients")
    assert Settings.from_env({"AWS_REGION": "us-west-2"}).region == "us-west-2"


def test_ping_new_stamps_uuid_and_time():
    now = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)

    ping = Ping.new(path="/a1", ip="10.0.0.1", now=now)

    assert len(ping.uuid) == 36
    assert ping.time == "2026-10-19 08:30:00+00:00"
    assert datetime.fromisoformat(ping.time) == now


def test_ping_from_item_fills_missing_attributes():
    assert Ping.from_item({"Path": "/a1"}) == Ping(path="/a1")


def test_ping_from_item_rejects_non_string():
    with pytest.raises(ValueError):
        Ping.from_item({"Uuid": "u1", "Time": 12})


@pytest.mark.parametrize("value, expected", [("verbose", "INFO"), ("", "INFO"), (" warning ", "WARNING")])
def test_settings_from_env_log_level(value, expected):
    assert Settings.from_env({"LOG_LEVEL": value}).log_level == expected
