"""Core request/response models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

HTTP_METHODS = frozenset({"GET", "PUT", "POST", "DELETE"})


@dataclass(slots=True, frozen=True)
class RequestDescriptor:
    """One logical request: verb, path, query parameters and JSON body.

    ``max_retries`` overrides the client-wide retry ceiling when set. Only
    ``splittable`` requests may be fanned out over key batches.
    """

    method: str
    path: str
    query_params: Mapping[str, Any] | None = None
    body: Any = None
    max_retries: int | None = None
    splittable: bool = False


@dataclass(slots=True, frozen=True)
class QueryResult:
    response: int
    body: Any


@dataclass(slots=True, frozen=True)
class KeyBatch:
    keys: tuple[str, ...] | list[str]
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.keys, tuple):
            return
        object.__setattr__(self, "keys", tuple(self.keys))


@dataclass(slots=True, frozen=True)
class SplitAggregate:
    """Merged result of a fan-out.

    ``failures`` lists every failing batch result in completion order; ``response``
    and ``body`` only reflect the last of them.
    """

    response: int
    body: Any
    failures: tuple[QueryResult, ...] | list[QueryResult] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.failures, tuple):
            return
        object.__setattr__(self, "failures", tuple(self.failures))

    @property
    def ok(self) -> bool:
        return not self.failures


def is_key_list(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


__all__ = [
    "HTTP_METHODS",
    "RequestDescriptor",
    "QueryResult",
    "KeyBatch",
    "SplitAggregate",
    "is_key_list",
]
