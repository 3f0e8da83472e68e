"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .core.errors import TempoDBValidationError

DEFAULT_HOST = "api.tempo-db.com"
DEFAULT_PORT = 443
DEFAULT_VERSION = "v1"
DEFAULT_TIMEOUT_MS = 150_000
DEFAULT_MAX_SOCKETS = 500
SECURE_PORTS = frozenset({443, 8443})

_OPTION_NAMES = frozenset(
    {
        "host",
        "hostname",
        "port",
        "secure",
        "version",
        "timeout",
        "max_sockets",
        "max_retries",
        "user_agent",
    }
)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_text(value: object) -> bool:
    return isinstance(value, str) and value != ""


@dataclass(slots=True, frozen=True)
class TempoDBClientConfig:
    """Runtime configuration for a TempoDB client.

    ``timeout`` is expressed in milliseconds. ``secure`` is derived unless it is
    explicitly ``False`` on a port other than 443/8443.
    """

    key: str
    secret: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    secure: bool | None = None
    version: str = DEFAULT_VERSION
    timeout: float = DEFAULT_TIMEOUT_MS
    max_sockets: int = DEFAULT_MAX_SOCKETS
    max_retries: int = 0
    user_agent: str = "tempodb-python"

    @classmethod
    def from_options(cls, key: Any, secret: Any, **options: Any) -> "TempoDBClientConfig":
        """Build a config, falling back to defaults for missing or invalid options."""

        unknown = sorted(set(options) - _OPTION_NAMES)
        if unknown:
            raise TempoDBValidationError(f"unknown client options: {', '.join(unknown)}")
        if not _is_text(key):
            raise TempoDBValidationError("key must be a non-empty string")
        if not _is_text(secret):
            raise TempoDBValidationError("secret must be a non-empty string")

        hostname = options.get("hostname")
        host = options.get("host")
        if _is_text(hostname):
            host = hostname
        elif not _is_text(host):
            host = DEFAULT_HOST

        port = options.get("port")
        if not _is_number(port) or port <= 0:
            port = DEFAULT_PORT

        version = options.get("version")
        if not _is_text(version):
            version = DEFAULT_VERSION

        timeout = options.get("timeout")
        if not _is_number(timeout) or timeout <= 0:
            timeout = DEFAULT_TIMEOUT_MS

        max_sockets = options.get("max_sockets")
        if not _is_number(max_sockets) or max_sockets <= 0:
            max_sockets = DEFAULT_MAX_SOCKETS

        max_retries = options.get("max_retries")
        if not _is_number(max_retries) or max_retries <= 0:
            max_retries = 0

        secure = options.get("secure")
        kwargs: dict[str, Any] = {}
        if _is_text(options.get("user_agent")):
            kwargs["user_agent"] = options["user_agent"]
        return cls(
            key=key,
            secret=secret,
            host=host,
            port=int(port),
            secure=secure if isinstance(secure, bool) else None,
            version=version,
            timeout=timeout,
            max_sockets=int(max_sockets),
            max_retries=int(max_retries),
            **kwargs,
        )

    @property
    def is_secure(self) -> bool:
        return self.port in SECURE_PORTS or self.secure is not False

    @property
    def scheme(self) -> str:
        return "https" if self.is_secure else "http"

    @property
    def base_url(self) -> str:
        default_port = 443 if self.is_secure else 80
        if self.port == default_port:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0

    def validate(self) -> None:
        if not _is_text(self.key):
            raise ValueError("key must be a non-empty string")
        if not _is_text(self.secret):
            raise ValueError("secret must be a non-empty string")
        if not _is_text(self.host):
            raise ValueError("host must not be empty")
        if not _is_text(self.version):
            raise ValueError("version must not be empty")
        if not isinstance(self.port, int) or isinstance(self.port, bool) or self.port <= 0:
            raise ValueError("port must be > 0")
        if self.secure is not None and not isinstance(self.secure, bool):
            raise ValueError("secure must be bool or None")
        if not _is_number(self.timeout) or self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if not isinstance(self.max_sockets, int) or self.max_sockets <= 0:
            raise ValueError("max_sockets must be > 0")
        if not isinstance(self.max_retries, int) or self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_VERSION",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_MAX_SOCKETS",
    "TempoDBClientConfig",
]
