"""
Error handling utilities for the concerts API
"""
import json
import logging
from enum import Enum
from functools import wraps
from typing import Dict, Any

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Unable to retrieve concerts"
INTERNAL_MESSAGE = "Unable to retrieve concerts - Internal Server Error"


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_DATA = "INVALID_DATA"
    IN_PAST = "IN_PAST"
    DECODE_ERROR = "DECODE_ERROR"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL = "INTERNAL"


class APIError(Exception):
    """Base exception for API errors"""
    def __init__(self, kind: ErrorKind, message: str, status_code: int = 400):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.kind.value


class ConcertError(APIError):
    """Base class for failures raised while reading concerts"""


class NotFoundError(ConcertError):
    """Raised when no concert exists for the requested id"""
    def __init__(self, concert_id: str):
        super().__init__(ErrorKind.NOT_FOUND, f"Concert {concert_id} does not exist", 404)
        self.concert_id = concert_id


class InvalidDataError(ConcertError):
    """Raised when a stored concert record is incomplete or inconsistent"""
    def __init__(self, concert_id: str, reason: str = "incomplete concert data"):
        super().__init__(ErrorKind.INVALID_DATA, f"Invalid concert data for concert {concert_id}: {reason}", 404)
        self.concert_id = concert_id


class InPastError(ConcertError):
    """Raised when a directly requested concert has already happened"""
    def __init__(self, concert_id: str):
        super().__init__(
            ErrorKind.IN_PAST,
            f"Concert {concert_id} is in the past, tickets are no longer available",
            404,
        )
        self.concert_id = concert_id


class DecodeError(ConcertError):
    """Raised when a stored item cannot be mapped onto a concert record"""
    def __init__(self, message: str):
        super().__init__(ErrorKind.DECODE_ERROR, message, 500)


class StorageUnavailableError(ConcertError):
    """Raised when the underlying table read or scan fails"""
    def __init__(self, message: str):
        super().__init__(ErrorKind.STORAGE_UNAVAILABLE, message, 500)


class InternalError(APIError):
    """Raised for configuration and other internal server errors"""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(ErrorKind.INTERNAL, message, 500)


def _public_message(status_code: int) -> str:
    return NO_DATA_MESSAGE if status_code < 500 else INTERNAL_MESSAGE


def create_error_response(error: APIError) -> Dict[str, Any]:
    """
    Create a standardized error response.
    The body carries the error kind and a fixed generic message; the
    internal message is never sent to the client.
    """
    return {
        'statusCode': error.status_code,
        'headers': {
            'Content-Type': 'application/json',
            'Access-Control-Allow-Origin': '*'
        },
        'body': json.dumps({
            'error': {
                'code': error.code,
                'message': _public_message(error.status_code)
            }
        })
    }


def create_success_response(data: Any, status_code: int = 200) -> Dict[str, Any]:
    """Create a standardized success response"""
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json',
            'Access-Control-Allow-Origin': '*'
        },
        'body': json.dumps(data)
    }


def handle_exceptions(func):
    """Decorator to handle exceptions in Lambda handlers"""
    @wraps(func)
    def wrapper(event, context):
        try:
            return func(event, context)
        except APIError as e:
            if e.status_code >= 500:
                logger.error("%s: %s", e.code, e.message)
            else:
                logger.info("%s: %s", e.code, e.message)
            return create_error_response(e)
        except Exception:
            # Convert unexpected exceptions to InternalError
            logger.exception("Unexpected error handling request")
            return create_error_response(InternalError())
    return wrapper
