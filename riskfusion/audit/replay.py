from typing import List

from riskfusion.audit.errors import ReplayMismatchError
from riskfusion.audit.hash_utils import fingerprint_inputs
from riskfusion.audit.override import restore_risk
from riskfusion.fusion.fuse_risks import fuse_risks
from riskfusion.models.fusion_result import FusionResult
from riskfusion.models.risk import Risk


def replay_fusion(
    result: FusionResult,
    rule_based_risks: List[Risk],
    model_risks: List[Risk],
) -> FusionResult:
    """
    Replays a fusion to verify its audit trail.

    Re-runs fusion with the recorded config, re-applies every recorded
    manual restore in decision order, and checks the audit hash.

    Args:
        result: The FusionResult under audit
        rule_based_risks: The rule-based input originally fused
        model_risks: The model-generated input originally fused

    Returns:
        The replayed FusionResult (equal in content to `result`)

    Raises:
        ReplayMismatchError: If the inputs or the replayed audit hash differ
    """
    provided_fingerprint = fingerprint_inputs(rule_based_risks, model_risks)
    if provided_fingerprint != result.input_fingerprint:
        raise ReplayMismatchError(
            f"Input fingerprint mismatch: "
            f"provided={provided_fingerprint}, "
            f"expected={result.input_fingerprint}"
        )

    replayed = fuse_risks(rule_based_risks, model_risks, result.config)

    for decision in result.decisions:
        if decision.manually_restored:
            replayed = restore_risk(replayed, decision.fusion_id)

    replayed_hash = replayed.audit_hash
    expected_hash = result.audit_hash
    if replayed_hash != expected_hash:
        raise ReplayMismatchError(
            f"Replay hash mismatch: "
            f"replayed={replayed_hash}, "
            f"original={expected_hash}"
        )

    return replayed
