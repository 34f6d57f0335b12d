"""
DynamoDB utilities for the concerts API
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import DecodeError, StorageUnavailableError

logger = logging.getLogger(__name__)

KEY_ATTRIBUTE = 'ID'
DATE_TIME_ATTRIBUTE = 'DateTime'


class ConcertGateway(ABC):
    """Read interface onto wherever concert records are stored.

    Implementations return plain attribute dicts; turning them into concert
    records is left to the caller.
    """

    @abstractmethod
    def get_by_id(self, concert_id: str) -> Optional[Dict[str, Any]]:
        """Return the record for concert_id, or None if there is none."""
        ...

    @abstractmethod
    def scan_future_from(self, now_epoch: int) -> List[Dict[str, Any]]:
        """Return every record whose DateTime is strictly after now_epoch."""
        ...


class DynamoConcertGateway(ConcertGateway):
    """ConcertGateway backed by a DynamoDB table keyed on ID."""

    def __init__(self, table_name: str, client=None):
        self.table_name = table_name
        self._client = client or boto3.client('dynamodb')

    def get_by_id(self, concert_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single concert from DynamoDB.
        Returns None if item not found.
        """
        try:
            response = self._client.get_item(
                TableName=self.table_name,
                Key={
                    KEY_ATTRIBUTE: {'S': concert_id}
                }
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Issue getting concert %s from %s: %s", concert_id, self.table_name, e)
            raise StorageUnavailableError(f"Failed to get item: {str(e)}") from e

        item = response.get('Item')
        if not item:
            return None
        return parse_dynamodb_item(item)

    def scan_future_from(self, now_epoch: int) -> List[Dict[str, Any]]:
        """
        Scan the table for concerts starting after now_epoch.
        Follows LastEvaluatedKey until the whole table has been read.
        """
        items = []
        try:
            paginator = self._client.get_paginator('scan')
            pages = paginator.paginate(
                TableName=self.table_name,
                FilterExpression='#dt > :now',
                ExpressionAttributeNames={'#dt': DATE_TIME_ATTRIBUTE},
                ExpressionAttributeValues={':now': {'N': str(now_epoch)}}
            )
            for page in pages:
                items.extend(page.get('Items', []))
        except (ClientError, BotoCoreError) as e:
            logger.error("Issue scanning %s: %s", self.table_name, e)
            raise StorageUnavailableError(f"Failed to scan items: {str(e)}") from e

        logger.debug("Scan of %s returned %d items", self.table_name, len(items))
        return [parse_dynamodb_item(item) for item in items]


def _parse_number(raw: str):
    return float(raw) if any(c in raw for c in '.eE') else int(raw)


def parse_attribute_value(value: Dict[str, Any]) -> Any:
    """Parse a single DynamoDB attribute value."""
    try:
        if 'S' in value:
            return value['S']
        if 'N' in value:
            return _parse_number(value['N'])
        if 'BOOL' in value:
            return value['BOOL']
        if 'NULL' in value:
            return None
        if 'L' in value:
            return [parse_attribute_value(v) for v in value['L']]
        if 'M' in value:
            return parse_dynamodb_item(value['M'])
        if 'SS' in value:
            return set(value['SS'])
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Malformed attribute value {value!r}: {e}") from e
    raise DecodeError(f"Unsupported attribute value {value!r}")


def parse_dynamodb_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse DynamoDB item format to regular Python dict.
    """
    if not item:
        return {}
    if not isinstance(item, dict):
        raise DecodeError(f"Expected an attribute map, got {type(item).__name__}")

    parsed = {}
    for key, value in item.items():
        if not isinstance(value, dict):
            raise DecodeError(f"Attribute {key} is not a typed attribute value")
        parsed[key] = parse_attribute_value(value)
    return parsed
