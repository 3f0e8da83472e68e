"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from typing import Any

from .config import TempoDBClientConfig
from .core.errors import TempoDBValidationError
from .core.models import RequestDescriptor, is_key_list
from .series.splitter_shared import KEY_PARAM


def validate_client_config(config: TempoDBClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise TempoDBValidationError(str(exc)) from exc


def resolve_config(
    *,
    key: Any,
    secret: Any,
    config: TempoDBClientConfig | None,
    options: dict[str, Any],
) -> TempoDBClientConfig:
    if config is not None:
        if key is not None or secret is not None or options:
            raise TempoDBValidationError("pass either config or key/secret/options, not both")
        resolved = config
    else:
        resolved = TempoDBClientConfig.from_options(key, secret, **options)
    validate_client_config(resolved)
    return resolved


def needs_split(descriptor: RequestDescriptor) -> bool:
    """Splittable multi-key queries go through the splitter; everything else is a direct call."""

    if not descriptor.splittable:
        return False
    keys = (descriptor.query_params or {}).get(KEY_PARAM)
    return is_key_list(keys) and len(keys) > 1


__all__ = [
    "validate_client_config",
    "resolve_config",
    "needs_split",
]
