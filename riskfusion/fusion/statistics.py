# riskfusion/fusion/statistics.py

from types import MappingProxyType
from typing import Dict, List

from riskfusion.models.duplication_decision import DuplicationDecision
from riskfusion.models.fusion_result import FusionStatistics
from riskfusion.models.risk import Risk, RiskSeverity


def count_by_severity(risks: List[Risk]) -> Dict[str, int]:
    counts = {severity.value: 0 for severity in RiskSeverity}
    for risk in risks:
        counts[RiskSeverity(risk.severity).value] += 1
    return counts


def count_by_category(risks: List[Risk]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for risk in risks:
        counts[risk.category] = counts.get(risk.category, 0) + 1
    return counts


def build_statistics(
    rule_based_risks: List[Risk],
    model_risks: List[Risk],
    final_risks: List[Risk],
    removed_risks: List[Risk],
    decisions: List[DuplicationDecision],
) -> FusionStatistics:
    """
    Before/after counts. Derived from the lists only, no classification.
    """
    before = list(rule_based_risks) + list(model_risks)

    return FusionStatistics(
        total_before=len(before),
        total_after=len(final_risks),
        removed_count=len(removed_risks),
        restored_count=sum(1 for d in decisions if d.manually_restored),
        rule_based_count=len(rule_based_risks),
        model_generated_count=len(model_risks),
        severity_before=MappingProxyType(count_by_severity(before)),
        severity_after=MappingProxyType(count_by_severity(final_risks)),
        category_before=MappingProxyType(count_by_category(before)),
        category_after=MappingProxyType(count_by_category(final_risks)),
    )
