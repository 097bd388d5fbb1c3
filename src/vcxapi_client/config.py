# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Client configuration, optionally read from environment variables.

Recognised variables:

``VCXAPI_BASE_URL``
    Root URL of the VCX API server. Required.
``VCXAPI_USERNAME`` / ``VCXAPI_PASSWORD``
    Basic auth pair. Either both or neither.
``VCXAPI_TIMEOUT``
    Per-request transport timeout in seconds. Defaults to 10.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings for a :class:`~client.VcxApiClient`."""

    base_url: str
    username: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("ClientConfig: base_url must not be empty")
        if (self.username is None) != (self.password is None):
            raise ValueError("ClientConfig: username and password must be set together")
        if self.timeout <= 0:
            raise ValueError(f"ClientConfig: timeout must be positive, got {self.timeout!r}")

    @property
    def auth(self) -> tuple[str, str] | None:
        if self.username is None or self.password is None:
            return None
        return (self.username, self.password)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build a config from *environ* (``os.environ`` by default).

        Raises
        ------
        ValueError
            If ``VCXAPI_BASE_URL`` is missing, the auth pair is incomplete,
            or ``VCXAPI_TIMEOUT`` is not a positive number.
        """
        env = os.environ if environ is None else environ
        raw_timeout = env.get("VCXAPI_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ValueError(f"VCXAPI_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        return cls(
            base_url=env.get("VCXAPI_BASE_URL", ""),
            username=env.get("VCXAPI_USERNAME") or None,
            password=env.get("VCXAPI_PASSWORD") or None,
            timeout=timeout,
        )
