import logging
from dataclasses import replace
from typing import List, Optional

from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.models.duplication_decision import DecisionState, DuplicationDecision
from riskfusion.models.risk import Risk, RiskSource, fusion_key
from riskfusion.models.similarity_result import SimilarityResult
from riskfusion.similarity.scorer import score_similarity

logger = logging.getLogger("riskfusion.fusion")

NO_RULE_BASED_RISKS_REASON = (
    "No rule-based risks available for comparison - keeping as unique risk"
)


def weighted_similarity(similarity: SimilarityResult, config: DuplicationConfig) -> float:
    """
    Weighted sum of the component scores.

    Not clamped: weights summing above 1.0 can push the result above 1.0,
    which the config reports through its advisories.
    """
    return (
        similarity.title_similarity * config.title_weight
        + similarity.description_similarity * config.description_weight
        + similarity.category_similarity * config.category_weight
    )


def build_reason(
    best_similarity: float,
    threshold: float,
    is_duplicate: bool,
    matched_risk: Optional[Risk],
) -> str:
    best_pct = f"{best_similarity * 100:.1f}%"
    threshold_pct = f"{threshold * 100:.1f}%"

    if is_duplicate:
        return (
            f"High similarity ({best_pct} > {threshold_pct}) "
            f'with rule-based risk "{matched_risk.title}"'
        )
    return f"Low similarity ({best_pct} <= {threshold_pct}) - keeping as unique risk"


def classify_duplicate(
    model_risk: Risk,
    rule_based_risks: List[Risk],
    config: DuplicationConfig,
) -> DuplicationDecision:
    """
    Compares one model-generated risk against every rule-based risk.

    The best match is the highest weighted similarity; on exact ties the
    earliest rule-based risk wins. Duplicate only when strictly above
    the threshold.
    """
    fusion_id = fusion_key(RiskSource.MODEL_GENERATED, model_risk.id)

    if not rule_based_risks:
        return DuplicationDecision(
            fusion_id=fusion_id,
            risk=model_risk,
            matched_risk=None,
            matched_fusion_id=None,
            similarity=SimilarityResult(0.0, 0.0, 0.0, 0.0),
            is_duplicate=False,
            reason=NO_RULE_BASED_RISKS_REASON,
            state=DecisionState.KEPT,
        )

    best_match: Optional[Risk] = None
    best_similarity: Optional[SimilarityResult] = None

    for rule_risk in rule_based_risks:
        similarity = score_similarity(model_risk, rule_risk)
        similarity = replace(
            similarity, overall_similarity=weighted_similarity(similarity, config)
        )

        if best_similarity is None or similarity.overall_similarity > best_similarity.overall_similarity:
            best_match = rule_risk
            best_similarity = similarity

    is_duplicate = best_similarity.overall_similarity > config.similarity_threshold

    decision = DuplicationDecision(
        fusion_id=fusion_id,
        risk=model_risk,
        matched_risk=best_match,
        matched_fusion_id=fusion_key(RiskSource.RULE_BASED, best_match.id),
        similarity=best_similarity,
        is_duplicate=is_duplicate,
        reason=build_reason(
            best_similarity.overall_similarity,
            config.similarity_threshold,
            is_duplicate,
            best_match,
        ),
        state=DecisionState.DROPPED if is_duplicate else DecisionState.KEPT,
    )

    logger.debug(f"{fusion_id}: {decision.reason}")
    return decision
