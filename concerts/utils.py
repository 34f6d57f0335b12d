"""
General utilities for the concerts API
"""
from typing import Any, Dict, Optional


def extract_query_params(event: Dict[str, Any]) -> Dict[str, str]:
    """Extract query parameters from Lambda event, dropping empty values"""
    query_params = event.get('queryStringParameters') or {}
    return {key: value for key, value in query_params.items() if value}


def get_query_param(event: Dict[str, Any], name: str) -> Optional[str]:
    """Return a single stripped query parameter, or None if absent or blank"""
    value = extract_query_params(event).get(name)
    if value is None:
        return None
    return value.strip() or None
