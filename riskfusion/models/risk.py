from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class RiskSeverity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskSource(str, Enum):
    RULE_BASED = "rule-based"
    MODEL_GENERATED = "model-generated"
    FUSED = "fused"  # reserved; never produced by the fusion engine


# Tags emitted by the upstream analyzers before the rename
LEGACY_SOURCE_TAGS = {
    "template": RiskSource.RULE_BASED,
    "ai_insight": RiskSource.MODEL_GENERATED,
    "hybrid": RiskSource.FUSED,
}


RiskId = Union[int, str]


def fusion_key(role: RiskSource, original_id: RiskId) -> str:
    """
    Composite identifier for a risk inside a FusionResult.

    `role` is the input list the risk arrived in, not its own source tag,
    so rule-based #1 and model-generated #1 never collide.
    """
    return f"{RiskSource(role).value}:{original_id}"


@dataclass(frozen=True)
class Risk:
    id: RiskId
    title: str
    description: str
    severity: RiskSeverity
    category: str
    recommendation: str
    source: RiskSource

    # Provenance pointers into the contract, opaque to the engine
    clause_location: Optional[str] = None
    related_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "severity": RiskSeverity(self.severity).value,
            "category": self.category,
            "recommendation": self.recommendation,
            "source": RiskSource(self.source).value,
            "clauseLocation": self.clause_location,
            "relatedText": self.related_text,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        default_source: Optional[RiskSource] = None,
    ) -> "Risk":
        """
        Builds a Risk from an upstream payload (camelCase or snake_case).

        Raises ValueError on a missing id/title or an unknown severity/source.
        """
        for required in ("id", "title"):
            if data.get(required) is None:
                raise ValueError(f"Risk payload is missing required field '{required}'")

        try:
            severity = RiskSeverity(str(data.get("severity", "")).lower())
        except ValueError:
            raise ValueError(
                f"Unknown severity '{data.get('severity')}' for risk {data['id']}"
            ) from None

        raw_source = data.get("source")
        if raw_source is None:
            if default_source is None:
                raise ValueError(f"Risk {data['id']} has no source tag")
            source = RiskSource(default_source)
        elif raw_source in LEGACY_SOURCE_TAGS:
            source = LEGACY_SOURCE_TAGS[raw_source]
        else:
            try:
                source = RiskSource(raw_source)
            except ValueError:
                raise ValueError(
                    f"Unknown source '{raw_source}' for risk {data['id']}"
                ) from None

        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description") or "",
            severity=severity,
            category=data.get("category") or "",
            recommendation=data.get("recommendation") or "",
            source=source,
            clause_location=data.get("clauseLocation", data.get("clause_location")),
            related_text=data.get("relatedText", data.get("related_text")),
        )
