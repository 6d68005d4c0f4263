"""Unit tests for glvd/severity.py -- pure logic, no I/O."""

import pytest

from glvd.severity import Severity, classify


class TestClassify:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (None, Severity.absent),
            (0, Severity.absent),
            (0.0, Severity.absent),
            (-1, Severity.absent),
            (float("nan"), Severity.absent),
            (0.1, Severity.low),
            (3.999, Severity.low),
            (4.0, Severity.medium),
            (6.9, Severity.medium),
            (7.0, Severity.high),
            (8.99, Severity.high),
            (9.0, Severity.critical),
            (9.8, Severity.critical),
            (10.0, Severity.critical),
        ],
    )
    def test_tier_boundaries(self, score, expected):
        assert classify(score) is expected

    def test_scores_above_range_are_still_critical(self):
        # no error path: anything classifiable
        assert classify(42.0) is Severity.critical
