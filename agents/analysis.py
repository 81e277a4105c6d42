"""Turn a screening result into a compliance recommendation."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

import yaml

from veria import RiskLevel, ScreenResult, should_block

logger = logging.getLogger(__name__)

# Default location of policy YAML relative to this file
_POLICY_PATH = Path(__file__).with_name("policy.yaml")

_DEFAULT_REVIEW_FLAGS = ["pep_hit", "watchlist_hit"]


class Recommendation(str, Enum):
    """Possible recommendations from sanction screening analysis."""

    POSITIVE = "positive"
    NEEDS_REVIEW = "needs_review"
    NEGATIVE = "negative"


def _load_review_flags(path: Path | None = None) -> List[str]:
    """Load the advisory flags that send a result to manual review."""

    cfg_path = Path(os.getenv("ANALYSIS_POLICY_PATH", path or _POLICY_PATH))
    with cfg_path.open("r", encoding="utf-8") as handle:
        data: Dict[str, Any] = yaml.safe_load(handle) or {}
    return list(data.get("review_flags", _DEFAULT_REVIEW_FLAGS))


def _log(recommendation: Recommendation, rationale: str) -> Recommendation:
    logger.info(
        "Screening analysis recommendation=%s rationale=%s",
        recommendation.value,
        rationale,
    )
    return recommendation


def analyze_screening(result: ScreenResult) -> Recommendation:
    """Return a recommendation enum based on a screening ``result``.

    Results that :func:`veria.should_block` refuses are negative. Otherwise any
    advisory flag listed under ``review_flags`` in the YAML policy sends the
    result to review. A rationale explaining the decision is logged for audit
    purposes.
    """

    details = result["details"]
    if should_block(result):
        return _log(
            Recommendation.NEGATIVE,
            f"blocked: sanctions_hit={details['sanctions_hit']} risk={result['risk']}",
        )

    raised = [flag for flag in _load_review_flags() if details.get(flag)]
    if raised:
        return _log(Recommendation.NEEDS_REVIEW, f"advisory flags set: {', '.join(raised)}")

    band = RiskLevel.from_score(result["score"]).value
    return _log(Recommendation.POSITIVE, f"risk={result['risk']} score={result['score']} band={band} with no flags")
