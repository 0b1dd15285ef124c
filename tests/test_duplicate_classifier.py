import pytest

from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.fusion.classifier import (
    NO_RULE_BASED_RISKS_REASON,
    classify_duplicate,
    weighted_similarity,
)
from riskfusion.models.duplication_decision import DecisionState
from riskfusion.models.risk import Risk, RiskSeverity, RiskSource
from riskfusion.models.similarity_result import SimilarityResult
from riskfusion.samples import SAMPLE_MODEL_RISKS, SAMPLE_RULE_BASED_RISKS


def _risk(risk_id, title, description, category, source):
    return Risk(
        id=risk_id,
        title=title,
        description=description,
        severity=RiskSeverity.MEDIUM,
        category=category,
        recommendation="Review.",
        source=source,
    )


@pytest.fixture
def liability_model_risk():
    return SAMPLE_MODEL_RISKS[0]


@pytest.fixture
def privacy_model_risk():
    return SAMPLE_MODEL_RISKS[1]


# ============================================================
# NO RULE-BASED RISKS
# ============================================================

def test_empty_rule_based_set_keeps_risk(liability_model_risk):
    decision = classify_duplicate(liability_model_risk, [], DuplicationConfig())

    assert decision.matched_risk is None
    assert decision.matched_fusion_id is None
    assert decision.is_duplicate is False
    assert decision.state is DecisionState.KEPT
    assert decision.reason == NO_RULE_BASED_RISKS_REASON


# ============================================================
# SAMPLE SCENARIOS
# ============================================================

def test_overlapping_liability_risk_scores_below_default_threshold(liability_model_risk):
    """
    Title and description overlap is 1/3 each and the category matches:
    0.4/3 + 0.3/3 + 0.3 = 0.533..., not above the default 0.6.
    """
    decision = classify_duplicate(liability_model_risk, SAMPLE_RULE_BASED_RISKS, DuplicationConfig())

    assert decision.matched_risk == SAMPLE_RULE_BASED_RISKS[0]
    assert decision.matched_fusion_id == "rule-based:1"
    assert decision.similarity.category_similarity == 1.0
    assert decision.similarity.overall_similarity == pytest.approx(0.7 / 3 + 0.3)
    assert decision.is_duplicate is False
    assert decision.reason == "Low similarity (53.3% <= 60.0%) - keeping as unique risk"


def test_overlapping_liability_risk_is_duplicate_under_lenient_preset(liability_model_risk):
    config = DuplicationConfig.from_preset("lenient")

    decision = classify_duplicate(liability_model_risk, SAMPLE_RULE_BASED_RISKS, config)

    assert decision.is_duplicate is True
    assert decision.state is DecisionState.DROPPED
    assert decision.similarity.overall_similarity == pytest.approx(0.6)
    assert decision.reason == (
        'High similarity (60.0% > 40.0%) with rule-based risk "Unlimited Liability Exposure"'
    )


def test_privacy_risk_is_unique(privacy_model_risk):
    decision = classify_duplicate(privacy_model_risk, SAMPLE_RULE_BASED_RISKS, DuplicationConfig())

    assert decision.is_duplicate is False
    assert decision.similarity.category_similarity == 0.0
    assert decision.similarity.title_similarity == 0.0
    # "contract" is the only shared token: 1 of 8 against "Weak Termination Rights"
    assert decision.matched_risk == SAMPLE_RULE_BASED_RISKS[1]
    assert decision.similarity.overall_similarity == pytest.approx(0.3 / 8)


def test_near_identical_risk_is_duplicate_under_default_config():
    rule = _risk(1, "Unlimited Liability Exposure",
                 "Broad indemnification clauses expose the company to unlimited liability",
                 "Liability", RiskSource.RULE_BASED)
    model = _risk(7, "Unlimited liability exposure",
                  "Broad indemnification clauses expose the company to unlimited liability",
                  "LIABILITY", RiskSource.MODEL_GENERATED)

    decision = classify_duplicate(model, [rule], DuplicationConfig())

    assert decision.fusion_id == "model-generated:7"
    assert decision.is_duplicate is True
    assert decision.similarity.overall_similarity == pytest.approx(1.0)


# ============================================================
# THRESHOLD & TIE-BREAK
# ============================================================

def test_similarity_equal_to_threshold_is_not_duplicate():
    rule = _risk(1, "Payment", "Late", "Payment Terms", RiskSource.RULE_BASED)
    model = _risk(1, "Invoice", "Overdue", "payment terms", RiskSource.MODEL_GENERATED)
    config = DuplicationConfig(
        similarity_threshold=0.6, title_weight=0.0, description_weight=0.0, category_weight=0.6
    )

    decision = classify_duplicate(model, [rule], config)

    assert decision.similarity.overall_similarity == 0.6
    assert decision.is_duplicate is False
    assert decision.reason == "Low similarity (60.0% <= 60.0%) - keeping as unique risk"


def test_first_rule_based_risk_wins_exact_tie():
    first = _risk(1, "Termination Rights", "Notice period missing", "Termination", RiskSource.RULE_BASED)
    second = _risk(2, "Termination Rights", "Notice period missing", "Termination", RiskSource.RULE_BASED)
    model = _risk(1, "Termination Rights", "Notice period missing", "Termination", RiskSource.MODEL_GENERATED)

    decision = classify_duplicate(model, [first, second], DuplicationConfig())

    assert decision.matched_fusion_id == "rule-based:1"


def test_zero_similarity_still_reports_first_rule_based_risk():
    rule = _risk(5, "Governing Law", "Venue unclear", "Jurisdiction", RiskSource.RULE_BASED)
    model = _risk(1, "Data Retention", "Deletion timeline absent", "Privacy", RiskSource.MODEL_GENERATED)

    decision = classify_duplicate(model, [rule], DuplicationConfig())

    assert decision.matched_fusion_id == "rule-based:5"
    assert decision.similarity.overall_similarity == 0.0
    assert decision.is_duplicate is False


# ============================================================
# PERMISSIVE CONFIG
# ============================================================

def test_overall_similarity_is_not_clamped_when_weights_exceed_one():
    similarity = SimilarityResult(1.0, 1.0, 1.0)
    config = DuplicationConfig(title_weight=1.0, description_weight=1.0, category_weight=1.0)

    assert weighted_similarity(similarity, config) == 3.0


def test_out_of_range_threshold_never_raises():
    rule = _risk(1, "Termination Rights", "Notice period missing", "Termination", RiskSource.RULE_BASED)
    model = _risk(1, "Termination Rights", "Notice period missing", "Termination", RiskSource.MODEL_GENERATED)

    above = classify_duplicate(model, [rule], DuplicationConfig(similarity_threshold=1.5))
    below = classify_duplicate(model, [rule], DuplicationConfig(similarity_threshold=-0.1))

    assert above.is_duplicate is False
    assert below.is_duplicate is True
