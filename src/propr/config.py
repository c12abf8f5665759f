"""Configuration objects for the Prepr client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://cdn.prepr.io"
DEFAULT_TIMEOUT = 4.0


@dataclass(frozen=True)
class ClientOptions:
    token: str
    base_url: Union[str, httpx.URL] = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ClientOptions":
        token = os.environ.get("PREPR_TOKEN")
        if not token:
            raise ConfigurationError("PREPR_TOKEN environment variable not set")

        base_url = os.environ.get("PREPR_BASE_URL") or DEFAULT_BASE_URL
        raw_timeout = os.environ.get("PREPR_TIMEOUT") or str(DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                "PREPR_TIMEOUT must be a number", details={"PREPR_TIMEOUT": raw_timeout}
            ) from exc
        user_id = os.environ.get("PREPR_USER_ID") or None

        return cls(token=token, base_url=base_url, timeout=timeout, user_id=user_id)


__all__ = ["ClientOptions", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT"]
