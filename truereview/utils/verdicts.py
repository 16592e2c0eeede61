"""
Verdict utilities.
Maps a 0-100 fakeness score onto a verdict label with configurable thresholds.
"""

import math
from typing import Optional

from truereview.config import settings

LIKELY_REAL = "Likely Real"
SUSPICIOUS = "Suspicious"
LIKELY_FAKE = "Likely Fake"

VERDICTS = (LIKELY_REAL, SUSPICIOUS, LIKELY_FAKE)


def round_half_up(value: float) -> int:
    """Round .5 upwards (2.5 -> 3, -2.5 -> -2) instead of to the nearest even."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def verdict_for_score(
    score: float,
    fake_threshold: Optional[float] = None,
    suspicious_threshold: Optional[float] = None,
) -> str:
    """
    Derive the verdict from a score (0-100 scale).

    Args:
        score: The fakeness score (0-100)
        fake_threshold: Score >= this = Likely Fake (default from config)
        suspicious_threshold: Score >= this = Suspicious (default from config)

    Returns:
        "Likely Real", "Suspicious", or "Likely Fake"
    """
    fake = fake_threshold if fake_threshold is not None else settings.fake_threshold
    suspicious = (
        suspicious_threshold if suspicious_threshold is not None else settings.suspicious_threshold
    )

    if score >= fake:
        return LIKELY_FAKE
    elif score >= suspicious:
        return SUSPICIOUS
    else:
        return LIKELY_REAL
