"""Block decision over a screening result."""

from __future__ import annotations

from .models import RiskLevel, ScreenResult

BLOCKING_RISK_LEVELS = frozenset({RiskLevel.HIGH.value, RiskLevel.CRITICAL.value})


def should_block(result: ScreenResult) -> bool:
    """Return True if the screened address should be refused.

    Sanctions hits and high or critical risk block. PEP and watchlist hits on
    their own are advisory and do not.
    """

    return bool(result["details"]["sanctions_hit"]) or result["risk"] in BLOCKING_RISK_LEVELS
