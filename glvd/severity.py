"""
severity.py -- Qualitative CVSS tiers used to pick display emphasis.
"""

import math
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    absent = "absent"
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


def classify(score: Optional[float]) -> Severity:
    """Map a CVSS base score to its tier. Boundary values take the higher tier.

    Unset, NaN, zero and negative scores are all "absent" (not yet scored).
    """
    if score is None or math.isnan(score) or score <= 0:
        return Severity.absent
    if score >= 9.0:
        return Severity.critical
    if score >= 7.0:
        return Severity.high
    if score >= 4.0:
        return Severity.medium
    return Severity.low
