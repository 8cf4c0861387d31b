"""
Utility functions
"""

from request_client.utils.uri import compose_url, parse_absolute_uri

__all__ = [
    "compose_url",
    "parse_absolute_uri",
]
