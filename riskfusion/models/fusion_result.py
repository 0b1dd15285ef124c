from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.models.duplication_decision import DuplicationDecision
from riskfusion.models.risk import Risk


@dataclass(frozen=True)
class FusionStatistics:
    total_before: int
    total_after: int
    removed_count: int
    restored_count: int
    rule_based_count: int
    model_generated_count: int

    # Read-only views; to_dict returns plain dict copies
    severity_before: Mapping[str, int]
    severity_after: Mapping[str, int]
    category_before: Mapping[str, int]
    category_after: Mapping[str, int]

    def to_dict(self) -> dict:
        return {
            "totalBefore": self.total_before,
            "totalAfter": self.total_after,
            "removedCount": self.removed_count,
            "restoredCount": self.restored_count,
            "ruleBasedCount": self.rule_based_count,
            "modelGeneratedCount": self.model_generated_count,
            "severityBefore": dict(self.severity_before),
            "severityAfter": dict(self.severity_after),
            "categoryBefore": dict(self.category_before),
            "categoryAfter": dict(self.category_after),
        }


@dataclass(frozen=True)
class FusionResult:
    """
    Output of one fusion call.

    Immutable all the way down: sequences are tuples and statistics
    are read-only mappings. The override manager returns a new
    FusionResult, so callers can keep earlier results for comparison
    or undo.
    """
    final_risks: Tuple[Risk, ...]
    final_risk_ids: Tuple[str, ...]   # composite ids, parallel to final_risks
    removed_risks: Tuple[Risk, ...]
    decisions: Tuple[DuplicationDecision, ...]
    statistics: FusionStatistics

    # Replay inputs
    config: DuplicationConfig
    rule_based_risks: Tuple[Risk, ...]
    model_risks: Tuple[Risk, ...]
    input_fingerprint: str

    def get_risk(self, fusion_id: str) -> Optional[Risk]:
        for risk_id, risk in zip(self.final_risk_ids, self.final_risks):
            if risk_id == fusion_id:
                return risk
        return None

    def get_decision(self, fusion_id: str) -> Optional[DuplicationDecision]:
        for decision in self.decisions:
            if decision.fusion_id == fusion_id:
                return decision
        return None

    @property
    def audit_hash(self) -> str:
        # Imported here: the serializer depends on this module
        from riskfusion.audit.hash_utils import compute_audit_hash
        from riskfusion.export.serializer import build_audit_payload

        return compute_audit_hash(build_audit_payload(self))
