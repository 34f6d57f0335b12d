"""
Pytest configuration and shared fixtures for concerts API tests
"""
import json
import os
import sys
from typing import Any, Dict, List, Optional
from unittest.mock import Mock, MagicMock

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from concerts.dynamo import ConcertGateway

NOW = 1767286800  # Thu 1 Jan 2026 17:00 UTC
ONE_DAY = 24 * 60 * 60
TOMORROW = NOW + ONE_DAY
YESTERDAY = NOW - ONE_DAY


def _start(record: Dict[str, Any]):
    return record.get("DateTime", record.get("dateTime"))


class FakeConcertGateway(ConcertGateway):
    """In-memory gateway holding already-parsed records in insertion order"""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.records = list(records or [])
        self.error = error
        self.get_calls = []
        self.scan_calls = []

    def get_by_id(self, concert_id: str) -> Optional[Dict[str, Any]]:
        self.get_calls.append(concert_id)
        if self.error:
            raise self.error
        for record in self.records:
            if record.get('ID', record.get('id')) == concert_id:
                return dict(record)
        return None

    def scan_future_from(self, now_epoch: int) -> List[Dict[str, Any]]:
        self.scan_calls.append(now_epoch)
        if self.error:
            raise self.error
        return [
            dict(record) for record in self.records
            if isinstance(_start(record), (int, float)) and _start(record) > now_epoch
        ]


def make_record(**overrides) -> Dict[str, Any]:
    """A complete upcoming concert record in table attribute naming"""
    record = {
        "ID": "ABC",
        "Description": "Summer Concert",
        "ImageURL": "https://example.com/image1",
        "DateTime": TOMORROW,
        "TotalTickets": 300,
        "TicketsSold": 100,
        "FullPrice": 11.00,
        "ConcessionPrice": 9.00,
    }
    record.update(overrides)
    return {key: value for key, value in record.items() if value is not ...}


def make_dynamodb_item(**overrides) -> Dict[str, Any]:
    """The same record in DynamoDB attribute-value format"""
    item = {
        "ID": {"S": "ABC"},
        "Description": {"S": "Summer Concert"},
        "ImageURL": {"S": "https://example.com/image1"},
        "DateTime": {"N": str(TOMORROW)},
        "TotalTickets": {"N": "300"},
        "TicketsSold": {"N": "100"},
        "FullPrice": {"N": "11.00"},
        "ConcessionPrice": {"N": "9.00"},
    }
    item.update(overrides)
    return {key: value for key, value in item.items() if value is not ...}


@pytest.fixture
def fixed_clock():
    return lambda: float(NOW)


@pytest.fixture
def lambda_context():
    """Mock Lambda context object"""
    context = Mock()
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/get-concerts"
    context.log_stream_name = "test-stream"
    context.function_name = "get-concerts"
    context.function_version = "$LATEST"
    context.invoked_function_arn = "arn:aws:lambda:eu-west-2:123456789012:function:get-concerts"
    context.memory_limit_in_mb = "128"
    context.get_remaining_time_in_millis = lambda: 5000
    return context


def make_api_gateway_event(
    method: str = "GET",
    path: str = "/concerts",
    headers: Dict[str, str] = None,
    query_params: Dict[str, str] = None,
    body: Any = None,
) -> Dict[str, Any]:
    """Helper function to create API Gateway events"""
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": headers or {},
        "multiValueHeaders": {},
        "queryStringParameters": query_params,
        "multiValueQueryStringParameters": None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "resourcePath": path,
            "httpMethod": method,
            "path": f"/v1{path}",
            "accountId": "123456789012",
            "apiId": "test-api",
            "stage": "v1",
            "requestId": "test-request-id",
            "requestTimeEpoch": NOW,
        },
        "body": json.dumps(body) if body else None,
        "isBase64Encoded": False
    }


@pytest.fixture
def mock_dynamodb():
    """Mock DynamoDB client"""
    return MagicMock()


@pytest.fixture(autouse=True)
def set_env_vars(monkeypatch):
    """Set common environment variables for tests"""
    monkeypatch.setenv("CONCERTS_TABLE", "test-concerts-table")
    monkeypatch.setenv("DISPLAY_TIMEZONE", "UTC")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield
