"""Public package exports for TempoDB API client."""

from .async_client import AsyncTempoDBClient
from .client import TempoDBClient
from .config import TempoDBClientConfig
from .core.errors import (
    TempoDBClientClosedError,
    TempoDBError,
    TempoDBTransportError,
    TempoDBValidationError,
)
from .core.models import QueryResult, SplitAggregate

__all__ = [
    "TempoDBClient",
    "AsyncTempoDBClient",
    "TempoDBClientConfig",
    "TempoDBError",
    "TempoDBValidationError",
    "TempoDBTransportError",
    "TempoDBClientClosedError",
    "QueryResult",
    "SplitAggregate",
]
