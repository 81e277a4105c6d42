"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import MISSING_API_KEY, VeriaError

DEFAULT_BASE_URL = "https://api.veria.cc"
DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class VeriaConfig:
    """Immutable settings for a :class:`~veria.client.VeriaClient`.

    ``timeout`` is in milliseconds.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.api_key:
            raise VeriaError("API key is required", MISSING_API_KEY)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def screen_url(self) -> str:
        return f"{self.base_url}/v1/screen"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    @classmethod
    def from_env(cls) -> "VeriaConfig":
        """Build a config from ``VERIA_API_KEY``, ``VERIA_BASE_URL`` and ``VERIA_TIMEOUT_MS``."""

        return cls(
            api_key=os.getenv("VERIA_API_KEY", ""),
            base_url=os.getenv("VERIA_BASE_URL", DEFAULT_BASE_URL),
            timeout=int(os.getenv("VERIA_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)),
        )
