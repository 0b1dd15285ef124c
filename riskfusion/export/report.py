from datetime import datetime
from typing import List, Optional

from riskfusion.models.fusion_result import FusionResult
from riskfusion.models.risk import RiskSeverity


def _pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def duplicate_filter_rate(result: FusionResult) -> float:
    """Removed risks as a share of everything fused (0.0 when empty)."""
    total = result.statistics.total_before
    if total == 0:
        return 0.0
    return result.statistics.removed_count / total


def render_text_report(result: FusionResult, generated_at: Optional[datetime] = None) -> str:
    """
    Plain-text audit report: summary, configuration, one block per
    filtered risk and, when present, the manually restored risks.
    """
    generated_at = generated_at or datetime.utcnow()
    stats = result.statistics
    config = result.config

    lines: List[str] = [
        "# Risk Fusion Audit Report",
        f"Generated: {generated_at.isoformat(timespec='seconds')}",
        "",
        "## Summary",
        f"- Original Risks Found: {stats.total_before} "
        f"({stats.rule_based_count} rule-based + {stats.model_generated_count} model-generated)",
        f"- Final Risks Displayed: {stats.total_after}",
        f"- Risks Filtered as Duplicates: {stats.removed_count}",
        f"- Manually Restored: {stats.restored_count}",
        f"- Duplicate Filter Rate: {_pct(duplicate_filter_rate(result))}",
        "- Severity (before -> after): " + ", ".join(
            f"{severity} {stats.severity_before[severity]} -> {stats.severity_after[severity]}"
            for severity in stats.severity_before
        ),
        "",
        "## Configuration",
        f"- Similarity Threshold: {_pct(config.similarity_threshold)} ({config.threshold_band})",
        f"- Title Weight: {config.title_weight}",
        f"- Description Weight: {config.description_weight}",
        f"- Category Weight: {config.category_weight}",
        f"- Weights Sum: {config.weights_sum:.2f}",
        f"- Manual Override: {'enabled' if config.allow_manual_override else 'disabled'}",
    ]
    for advisory in config.advisories:
        lines.append(f"- Advisory: {advisory}")

    lines += ["", "## Filtered Risks Details"]
    dropped = [d for d in result.decisions if d.is_duplicate and not d.manually_restored]
    if not dropped:
        lines.append("No risks were removed as duplicates.")

    for index, decision in enumerate(dropped, start=1):
        matched_title = decision.matched_risk.title if decision.matched_risk else "n/a"
        lines += [
            f'{index}. "{decision.risk.title}" [{decision.fusion_id}]',
            f"   - Similarity: {_pct(decision.similarity.overall_similarity)}",
            f'   - Matched with: "{matched_title}" [{decision.matched_fusion_id}]',
            f"   - Reason: {decision.reason}",
            f"   - Category: {decision.risk.category}",
            f"   - Severity: {RiskSeverity(decision.risk.severity).value}",
        ]

    restored = [d for d in result.decisions if d.manually_restored]
    if restored:
        lines += ["", "## Manually Restored"]
        for index, decision in enumerate(restored, start=1):
            lines += [
                f'{index}. "{decision.risk.title}" [{decision.fusion_id}]',
                f"   - Original Reason: {decision.reason}",
            ]

    return "\n".join(lines) + "\n"
