"""
Serialization module
"""

from request_client.serialization.codec import deserialize, serialize, to_plain

__all__ = [
    "serialize",
    "deserialize",
    "to_plain",
]
