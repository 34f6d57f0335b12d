"""
GET /concerts - Fetch one upcoming concert by ?id=, or all upcoming concerts
"""
import logging
import os
import sys
from typing import Dict, Any

import boto3

# Add shared modules to path
sys.path.append('/opt/python')
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from concerts.config import get_log_level, load_settings
from concerts.dynamo import DynamoConcertGateway
from concerts.errors import handle_exceptions, create_success_response, create_error_response, NotFoundError
from concerts.log import setup_logging
from concerts.transformer import ConcertTransformer
from concerts.utils import get_query_param

setup_logging(get_log_level())
logger = logging.getLogger(__name__)

_dynamodb_client = None


def get_dynamodb_client():
    """DynamoDB client shared by warm invocations"""
    global _dynamodb_client
    if _dynamodb_client is None:
        _dynamodb_client = boto3.client('dynamodb')
    return _dynamodb_client


def build_transformer() -> ConcertTransformer:
    settings = load_settings()
    gateway = DynamoConcertGateway(settings.concerts_table, client=get_dynamodb_client())
    return ConcertTransformer(gateway, tz=settings.display_timezone)


@handle_exceptions
def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Fetch concerts.

    Query parameter: id (optional)
    With an id, returns that concert as an object; without one, returns an
    array of every upcoming concert. An empty listing is reported as 404.
    """
    transformer = build_transformer()

    concert_id = get_query_param(event, 'id')
    if concert_id:
        concert = transformer.fetch_one(concert_id)
        return create_success_response(concert.to_response())

    concerts = transformer.fetch_all()
    if not concerts:
        logger.info("No upcoming concerts to list")
        return create_error_response(NotFoundError("*"))

    return create_success_response([concert.to_response() for concert in concerts])
