"""
Environment configuration for the concerts API
"""
import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InternalError


@dataclass(frozen=True)
class Settings:
    concerts_table: str
    display_timezone: Optional[tzinfo] = None


def get_table_name(variable: str = 'CONCERTS_TABLE') -> str:
    """Get a DynamoDB table name from environment"""
    table_name = os.environ.get(variable)
    if not table_name:
        raise InternalError(f"{variable} environment variable not set")
    return table_name


def get_display_timezone() -> Optional[tzinfo]:
    """Zone used for date/time strings; None means the process local zone"""
    name = os.environ.get('DISPLAY_TIMEZONE')
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InternalError(f"Unknown DISPLAY_TIMEZONE {name!r}") from e


def get_log_level() -> str:
    return os.environ.get('LOG_LEVEL', 'INFO').upper()


def load_settings() -> Settings:
    return Settings(
        concerts_table=get_table_name('CONCERTS_TABLE'),
        display_timezone=get_display_timezone(),
    )
