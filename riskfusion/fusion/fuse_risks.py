# riskfusion/fusion/fuse_risks.py

import logging
from typing import List, Optional

from riskfusion.audit.hash_utils import fingerprint_inputs
from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.fusion.classifier import classify_duplicate
from riskfusion.fusion.statistics import build_statistics
from riskfusion.models.duplication_decision import DecisionState, DuplicationDecision
from riskfusion.models.fusion_result import FusionResult
from riskfusion.models.risk import Risk, RiskSource, fusion_key

logger = logging.getLogger("riskfusion.fusion")


def assemble_fusion_result(
    rule_based_risks: List[Risk],
    model_risks: List[Risk],
    decisions: List[DuplicationDecision],
    config: DuplicationConfig,
    input_fingerprint: Optional[str] = None,
) -> FusionResult:
    """
    Builds a FusionResult from finished decisions.

    Final order: rule-based risks (input order), then kept model-generated
    risks (input order), then manually restored ones (input order).
    Shared by fusion and override so both produce identical layouts.
    """
    final_risks = list(rule_based_risks)
    final_risk_ids = [
        fusion_key(RiskSource.RULE_BASED, risk.id) for risk in rule_based_risks
    ]

    for state in (DecisionState.KEPT, DecisionState.RESTORED):
        for decision in decisions:
            if decision.state is state:
                final_risks.append(decision.risk)
                final_risk_ids.append(decision.fusion_id)

    removed_risks = [d.risk for d in decisions if d.state is DecisionState.DROPPED]

    if input_fingerprint is None:
        input_fingerprint = fingerprint_inputs(rule_based_risks, model_risks)

    return FusionResult(
        final_risks=tuple(final_risks),
        final_risk_ids=tuple(final_risk_ids),
        removed_risks=tuple(removed_risks),
        decisions=tuple(decisions),
        statistics=build_statistics(
            rule_based_risks, model_risks, final_risks, removed_risks, decisions
        ),
        config=config,
        rule_based_risks=tuple(rule_based_risks),
        model_risks=tuple(model_risks),
        input_fingerprint=input_fingerprint,
    )


def fuse_risks(
    rule_based_risks: List[Risk],
    model_risks: List[Risk],
    config: Optional[DuplicationConfig] = None,
) -> FusionResult:
    """
    Merges rule-based and model-generated risks into one de-duplicated list.

    Rule-based risks are authoritative and always kept. Each model-generated
    risk is classified independently against the rule-based set only, so
    classification order never changes an individual decision.
    """
    config = config or DuplicationConfig()

    decisions = [
        classify_duplicate(model_risk, rule_based_risks, config)
        for model_risk in model_risks
    ]

    result = assemble_fusion_result(rule_based_risks, model_risks, decisions, config)

    logger.info(
        f"Fused {len(rule_based_risks)} rule-based + {len(model_risks)} model-generated risks "
        f"-> {result.statistics.total_after} final, {result.statistics.removed_count} removed "
        f"(threshold={config.similarity_threshold})"
    )
    return result
