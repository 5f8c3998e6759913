"""Tests for the assessment data model"""

import copy

import pytest
from pydantic import ValidationError

from protocol_risk.core.analysis_client import SAMPLE_ASSESSMENT
from protocol_risk.utils.schema import RiskAssessment, RiskLevel, Severity


@pytest.fixture
def payload():
    return copy.deepcopy(SAMPLE_ASSESSMENT)


def test_sample_assessment_parses(payload):
    assessment = RiskAssessment.model_validate(payload)

    assert assessment.score == 85
    assert assessment.level is RiskLevel.MEDIUM
    assert [f.severity for f in assessment.findings] == [
        Severity.CRITICAL,
        Severity.WARNING,
        Severity.INFO,
    ]
    assert len(assessment.recommendations) == 3
    assert assessment.metrics.tvl == "$5.2M"
    assert assessment.metrics.holders == 12500
    assert assessment.metrics.transactions == 45000
    assert assessment.metrics.age == "6 months"


def test_order_is_preserved(payload):
    """Findings are kept in service order, not sorted by severity or id."""
    payload["findings"].reverse()
    payload["recommendations"].reverse()

    assessment = RiskAssessment.model_validate(payload)

    assert [f.id for f in assessment.findings] == ["3", "2", "1"]
    assert [r.id for r in assessment.recommendations] == ["3", "2", "1"]


def test_duplicate_finding_ids_rejected(payload):
    payload["findings"][1]["id"] = "1"
    with pytest.raises(ValidationError, match="Duplicate id"):
        RiskAssessment.model_validate(payload)


def test_duplicate_recommendation_ids_rejected(payload):
    payload["recommendations"][2]["id"] = "2"
    with pytest.raises(ValidationError, match="Duplicate id"):
        RiskAssessment.model_validate(payload)


def test_ids_may_repeat_across_sequences(payload):
    """Finding '1' and recommendation '1' live in separate id spaces."""
    assessment = RiskAssessment.model_validate(payload)
    assert assessment.findings[0].id == assessment.recommendations[0].id == "1"


@pytest.mark.parametrize("score", [-1, 101, 85.5])
def test_invalid_score_rejected(payload, score):
    payload["score"] = score
    with pytest.raises(ValidationError):
        RiskAssessment.model_validate(payload)


def test_unknown_severity_rejected(payload):
    payload["findings"][0]["severity"] = "catastrophic"
    with pytest.raises(ValidationError):
        RiskAssessment.model_validate(payload)


def test_level_not_recomputed_from_score(payload):
    payload["score"] = 5
    payload["level"] = "high"

    assessment = RiskAssessment.model_validate(payload)

    assert assessment.level is RiskLevel.HIGH

