"""Shared fixtures for the ping recorder tests."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from rfping_handler import ServiceContext
from rfping_settings import Settings
from rfping_store import PingStore


@pytest.fixture
def table():
    table = Mock()
    table.scan.return_value = {"Items": []}
    return table


@pytest.fixture
def service(table):
    return ServiceContext(settings=Settings(), store=PingStore(table))


@pytest.fixture
def lambda_context():
    return SimpleNamespace(aws_request_id="req-123")


@pytest.fixture
def make_event():
    return _make_event


def _make_event(method="GET", path="/a1", query=None, source_ip="203.0.113.7"):
    return {
        "httpMethod": method,
        "path": path,
        "queryStringParameters": query,
        "requestContext": {"identity": {"sourceIp": source_ip}},
        "body": None,
    }
