from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from riskfusion.models.risk import Risk
from riskfusion.models.similarity_result import SimilarityResult


class DecisionState(str, Enum):
    KEPT = "KEPT"          # unique, in final list
    DROPPED = "DROPPED"    # duplicate, in removed list
    RESTORED = "RESTORED"  # duplicate, manually put back


@dataclass(frozen=True)
class DuplicationDecision:
    """
    Audit record for one model-generated risk.

    The only legal state transition is DROPPED -> RESTORED, performed
    by the override manager on a copy of the decision.
    """
    fusion_id: str
    risk: Risk
    matched_risk: Optional[Risk]
    matched_fusion_id: Optional[str]
    similarity: SimilarityResult
    is_duplicate: bool
    reason: str
    state: DecisionState

    @property
    def manually_restored(self) -> bool:
        return self.state is DecisionState.RESTORED

    @property
    def in_final_list(self) -> bool:
        return self.state is not DecisionState.DROPPED

    def restored(self) -> "DuplicationDecision":
        if self.state is not DecisionState.DROPPED:
            raise ValueError(
                f"Decision {self.fusion_id} cannot move from {self.state.value} to RESTORED"
            )
        return replace(self, state=DecisionState.RESTORED)
