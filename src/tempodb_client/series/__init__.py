"""Series endpoint package."""

from .endpoints import Timestamp, format_timestamp
from .splitter_shared import MAX_BATCH_KEY_LENGTH, partition_keys

__all__ = [
    "Timestamp",
    "format_timestamp",
    "MAX_BATCH_KEY_LENGTH",
    "partition_keys",
]
