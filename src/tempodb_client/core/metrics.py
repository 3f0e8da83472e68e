"""Per-client request timing totals."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ProcessTimeSnapshot:
    total: float = 0.0
    get: float = 0.0
    put: float = 0.0
    post: float = 0.0
    delete: float = 0.0


class ProcessTimeMetrics:
    """Running totals of elapsed seconds per HTTP verb and overall.

    Every terminal attempt is recorded, including attempts that are later retried.
    Totals are never reset.
    """

    _VERBS = ("get", "put", "post", "delete")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._totals = dict.fromkeys(("total", *self._VERBS), 0.0)

    def record(self, method: str, elapsed_seconds: float) -> None:
        verb = method.lower()
        with self._lock:
            self._totals["total"] += elapsed_seconds
            if verb in self._VERBS:
                self._totals[verb] += elapsed_seconds

    def snapshot(self) -> ProcessTimeSnapshot:
        with self._lock:
            return ProcessTimeSnapshot(**self._totals)


__all__ = [
    "ProcessTimeSnapshot",
    "ProcessTimeMetrics",
]
