import json
from typing import Any, Dict

from riskfusion.audit.hash_utils import compute_audit_hash
from riskfusion.models.duplication_decision import DuplicationDecision
from riskfusion.models.fusion_result import FusionResult


def decision_to_dict(decision: DuplicationDecision) -> Dict[str, Any]:
    return {
        "fusionId": decision.fusion_id,
        "risk": decision.risk.to_dict(),
        "matchedRisk": decision.matched_risk.to_dict() if decision.matched_risk else None,
        "matchedFusionId": decision.matched_fusion_id,
        "similarityScore": decision.similarity.overall_similarity,
        "comparisonDetails": decision.similarity.to_dict(),
        "isDuplicate": decision.is_duplicate,
        "reason": decision.reason,
        "state": decision.state.value,
        "manuallyRestored": decision.manually_restored,
    }


def build_audit_payload(result: FusionResult) -> Dict[str, Any]:
    """
    JSON-safe view of a FusionResult, without the audit hash.
    """
    config = result.config
    restored_ids = {d.fusion_id for d in result.decisions if d.manually_restored}

    return {
        "configuration": {
            **config.to_dict(),
            "weightsSum": config.weights_sum,
            "thresholdBand": config.threshold_band,
            "advisories": list(config.advisories),
        },
        "beforeMerging": {
            "ruleBasedRisks": [r.to_dict() for r in result.rule_based_risks],
            "modelRisks": [r.to_dict() for r in result.model_risks],
            "totalCount": result.statistics.total_before,
        },
        "afterMerging": {
            "finalRisks": [
                {"fusionId": fusion_id, **risk.to_dict()}
                for fusion_id, risk in zip(result.final_risk_ids, result.final_risks)
            ],
            "removedRisks": [
                {"fusionId": d.fusion_id, **d.risk.to_dict()}
                for d in result.decisions
                if not d.in_final_list
            ],
            "addedRisks": [
                {"fusionId": d.fusion_id, **d.risk.to_dict()}
                for d in result.decisions
                if d.in_final_list
            ],
            "restoredRiskIds": sorted(restored_ids),
            "totalCount": result.statistics.total_after,
        },
        "decisions": [decision_to_dict(d) for d in result.decisions],
        "statistics": result.statistics.to_dict(),
        "inputFingerprint": result.input_fingerprint,
    }


def export_fusion_result(result: FusionResult) -> Dict[str, Any]:
    payload = build_audit_payload(result)
    payload["auditHash"] = compute_audit_hash(payload)
    return payload


def export_fusion_json(result: FusionResult, indent: int = 2) -> str:
    return json.dumps(export_fusion_result(result), indent=indent, ensure_ascii=False)
