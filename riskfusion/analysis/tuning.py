from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from riskfusion.models.fusion_result import FusionResult
from riskfusion.models.risk import RiskSeverity

# Recommendation triggers
HIGH_DUPLICATE_RATE = 0.5
LOW_AVERAGE_SIMILARITY = 0.3

# Suggested-threshold guard rails
SUGGESTED_THRESHOLD_FLOOR = 0.3
SUGGESTED_THRESHOLD_CEILING = 0.8


@dataclass(frozen=True)
class TuningRecommendation:
    type: str  # "warning" | "info"
    message: str
    suggested_threshold: Optional[float] = None

    def to_dict(self) -> dict:
        payload = {"type": self.type, "message": self.message}
        if self.suggested_threshold is not None:
            payload["suggestedThreshold"] = self.suggested_threshold
        return payload


@dataclass(frozen=True)
class DetectionAnalysis:
    """
    Read-only diagnostics for tuning the duplicate threshold.
    """
    total_model_generated: int
    filtered_as_duplicates: int
    kept_as_unique: int
    duplicate_rate: float
    average_similarity: float

    severity_analysis: Dict[str, Dict[str, int]]
    category_analysis: List[Dict[str, Any]]
    recommendations: List[TuningRecommendation] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "summary": {
                "totalModelGenerated": self.total_model_generated,
                "filteredAsDuplicates": self.filtered_as_duplicates,
                "keptAsUnique": self.kept_as_unique,
                "duplicateRate": round(self.duplicate_rate * 100, 1),
                "averageSimilarity": round(self.average_similarity * 100, 1),
            },
            "severityAnalysis": self.severity_analysis,
            "categoryAnalysis": self.category_analysis,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


def analyze_duplicate_detection(result: FusionResult) -> DetectionAnalysis:
    """
    Classifier-level diagnostics. Counts the classifier's verdicts, so
    manual restores do not lower the duplicate rate.
    """
    decisions = result.decisions
    total = len(decisions)
    filtered = sum(1 for d in decisions if d.is_duplicate)

    duplicate_rate = filtered / total if total else 0.0
    average_similarity = (
        sum(d.similarity.overall_similarity for d in decisions) / total if total else 0.0
    )

    severity_analysis = {
        severity.value: {"total": 0, "filtered": 0} for severity in RiskSeverity
    }
    for d in decisions:
        bucket = severity_analysis[RiskSeverity(d.risk.severity).value]
        bucket["total"] += 1
        if d.is_duplicate:
            bucket["filtered"] += 1

    categories: List[str] = []
    for risk in list(result.rule_based_risks) + list(result.model_risks):
        if risk.category not in categories:
            categories.append(risk.category)

    category_analysis = [
        {
            "category": category,
            "ruleBasedCount": sum(1 for r in result.rule_based_risks if r.category == category),
            "modelGeneratedCount": sum(1 for r in result.model_risks if r.category == category),
            "filteredCount": sum(
                1 for d in decisions if d.is_duplicate and d.risk.category == category
            ),
        }
        for category in categories
    ]

    threshold = result.config.similarity_threshold
    recommendations: List[TuningRecommendation] = []

    if total and duplicate_rate > HIGH_DUPLICATE_RATE:
        recommendations.append(TuningRecommendation(
            type="warning",
            message="High duplicate filter rate detected. Consider lowering the similarity threshold.",
            suggested_threshold=round(max(SUGGESTED_THRESHOLD_FLOOR, threshold - 0.2), 2),
        ))

    if total and filtered == 0:
        recommendations.append(TuningRecommendation(
            type="info",
            message="No duplicates detected. Consider raising the threshold if you expect some overlap.",
            suggested_threshold=round(min(SUGGESTED_THRESHOLD_CEILING, threshold + 0.1), 2),
        ))

    if total and average_similarity < LOW_AVERAGE_SIMILARITY:
        recommendations.append(TuningRecommendation(
            type="info",
            message="Low average similarity suggests risks are quite different. "
                    "Current threshold may be appropriate.",
        ))

    return DetectionAnalysis(
        total_model_generated=total,
        filtered_as_duplicates=filtered,
        kept_as_unique=total - filtered,
        duplicate_rate=duplicate_rate,
        average_similarity=average_similarity,
        severity_analysis=severity_analysis,
        category_analysis=category_analysis,
        recommendations=recommendations,
    )
