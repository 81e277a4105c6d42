"""Shapes of the screening payload returned by ``POST /v1/screen``."""

from __future__ import annotations

from enum import Enum
from typing import List, TypedDict


class RiskLevel(str, Enum):
    """Risk bands reported by the service."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Return the band a 0-100 ``score`` falls in."""

        if score >= 80:
            return cls.CRITICAL
        if score >= 60:
            return cls.HIGH
        if score >= 30:
            return cls.MEDIUM
        return cls.LOW


class ScreenDetails(TypedDict):
    sanctions_hit: bool
    pep_hit: bool
    watchlist_hit: bool
    checked_lists: List[str]
    # wallet, contract, exchange, mixer, ens, iban
    address_type: str


class ScreenResult(TypedDict):
    """Screening result exactly as the service sent it."""

    score: int
    risk: str
    chain: str
    resolved: str
    latency_ms: float
    details: ScreenDetails
