import pytest

from riskfusion.analysis.tuning import analyze_duplicate_detection
from riskfusion.audit.override import restore_risk
from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.fusion.fuse_risks import fuse_risks
from riskfusion.models.risk import Risk, RiskSeverity, RiskSource
from riskfusion.samples import SAMPLE_MODEL_RISKS, SAMPLE_RULE_BASED_RISKS


def _model_risk(risk_id, title, category="Liability"):
    return Risk(
        id=risk_id,
        title=title,
        description=title,
        severity=RiskSeverity.LOW,
        category=category,
        recommendation="",
        source=RiskSource.MODEL_GENERATED,
    )


def test_summary_under_lenient_preset():
    result = fuse_risks(
        SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS, DuplicationConfig.from_preset("lenient")
    )

    analysis = analyze_duplicate_detection(result)

    assert analysis.total_model_generated == 2
    assert analysis.filtered_as_duplicates == 1
    assert analysis.kept_as_unique == 1
    assert analysis.duplicate_rate == 0.5
    assert analysis.severity_analysis == {
        "high": {"total": 1, "filtered": 1},
        "medium": {"total": 1, "filtered": 0},
        "low": {"total": 0, "filtered": 0},
    }
    assert analysis.category_analysis[0] == {
        "category": "Liability",
        "ruleBasedCount": 1,
        "modelGeneratedCount": 1,
        "filteredCount": 1,
    }
    assert [c["category"] for c in analysis.category_analysis] == [
        "Liability", "Contract Terms", "Compliance",
    ]


def test_no_duplicates_suggests_raising_threshold():
    result = fuse_risks(SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS, DuplicationConfig())

    recommendations = analyze_duplicate_detection(result).recommendations

    assert recommendations[0].type == "info"
    assert recommendations[0].suggested_threshold == 0.7


def test_high_duplicate_rate_suggests_lowering_threshold():
    model = [
        _model_risk(1, "Unlimited Liability Exposure"),
        _model_risk(2, "Weak Termination Rights", "Contract Terms"),
        _model_risk(3, "Novel Escrow Arrangement", "Escrow"),
    ]
    result = fuse_risks(SAMPLE_RULE_BASED_RISKS, model, DuplicationConfig.from_preset("lenient"))

    analysis = analyze_duplicate_detection(result)
    warning = analysis.recommendations[0]

    assert analysis.duplicate_rate == pytest.approx(2 / 3)
    assert warning.type == "warning"
    assert warning.suggested_threshold == 0.3


def test_restores_do_not_change_classifier_statistics():
    result = fuse_risks(
        SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS, DuplicationConfig.from_preset("lenient")
    )

    before = analyze_duplicate_detection(result)
    after = analyze_duplicate_detection(restore_risk(result, "model-generated:1"))

    assert after == before


def test_empty_model_set_has_no_recommendations():
    analysis = analyze_duplicate_detection(fuse_risks(SAMPLE_RULE_BASED_RISKS, []))

    assert analysis.duplicate_rate == 0.0
    assert analysis.recommendations == []
    assert analysis.to_dict()["summary"]["averageSimilarity"] == 0.0
