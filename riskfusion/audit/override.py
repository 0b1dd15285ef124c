import logging
from typing import Optional

from riskfusion.audit.errors import InvalidOverrideTarget, OverrideDisabled
from riskfusion.fusion.fuse_risks import assemble_fusion_result
from riskfusion.models.duplication_decision import DuplicationDecision
from riskfusion.models.fusion_result import FusionResult

logger = logging.getLogger("riskfusion.audit")


def find_decision(result: FusionResult, risk_id) -> Optional[DuplicationDecision]:
    """
    Looks a decision up by composite id ("model-generated:3") first,
    then by the model-generated risk's original id.
    """
    decision = result.get_decision(str(risk_id))
    if decision is not None:
        return decision

    for candidate in result.decisions:
        if candidate.risk.id == risk_id:
            return candidate
    return None


def restore_risk(result: FusionResult, risk_id) -> FusionResult:
    """
    Manually puts back a model-generated risk the classifier dropped.

    Returns a new FusionResult; the one passed in is never modified.
    Restoring an already restored risk returns the result unchanged.
    No similarity is recomputed.

    Raises:
        OverrideDisabled: the fusion ran with allow_manual_override=False
        InvalidOverrideTarget: unknown id, or the risk was not a duplicate
    """
    if not result.config.allow_manual_override:
        raise OverrideDisabled(risk_id)

    decision = find_decision(result, risk_id)
    if decision is None:
        raise InvalidOverrideTarget(risk_id)
    if not decision.is_duplicate:
        raise InvalidOverrideTarget(risk_id, "risk was kept as unique, nothing to restore")

    if decision.manually_restored:
        return result

    decisions = [
        d.restored() if d.fusion_id == decision.fusion_id else d
        for d in result.decisions
    ]

    restored = assemble_fusion_result(
        result.rule_based_risks,
        result.model_risks,
        decisions,
        result.config,
        input_fingerprint=result.input_fingerprint,
    )

    logger.info(
        f"Manually restored {decision.fusion_id}; "
        f"{restored.statistics.total_after} final, {restored.statistics.removed_count} removed"
    )
    return restored
