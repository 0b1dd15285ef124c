import shutil

from riskfusion.analysis.tuning import analyze_duplicate_detection
from riskfusion.audit.override import restore_risk
from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.fusion.fuse_risks import fuse_risks
from riskfusion.samples import SAMPLE_MODEL_RISKS, SAMPLE_RULE_BASED_RISKS

# --- AUDIT-STYLE UI THEME ---
class Colors:
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'

    HEADER = '\033[1m'
    MUTED = '\033[90m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    BORDER = MUTED
    LABEL = ENDC
    VALUE = BOLD

def print_separator(char="-"):
    width = shutil.get_terminal_size().columns
    print(Colors.BORDER + (char * width) + Colors.ENDC)

def print_section(title):
    print("\n")
    print_separator("=")
    print(f"  {Colors.HEADER}{title.upper()}{Colors.ENDC}")
    print_separator("=")

def print_kv(key, value, color=Colors.VALUE):
    print(f"{Colors.LABEL}{key:<25}{Colors.ENDC} : {color}{value}{Colors.ENDC}")

def print_decisions(result):
    for decision in result.decisions:
        color = Colors.FAIL if decision.is_duplicate else Colors.OKGREEN
        print_kv(decision.fusion_id, decision.state.value, color)
        print(f"  {Colors.MUTED}{decision.reason}{Colors.ENDC}")

# --- MAIN DEMO ---
def run_fusion_demo():
    # 1. SETUP
    print_section("Sample Risk Sets")
    for risk in SAMPLE_RULE_BASED_RISKS + SAMPLE_MODEL_RISKS:
        print_kv(f"{risk.source.value} #{risk.id}", risk.title)

    # 2. FUSION UNDER EACH PRESET
    for preset in ("strict", "balanced", "lenient"):
        config = DuplicationConfig.from_preset(preset)
        result = fuse_risks(SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS, config)

        print_section(f"Preset: {preset} ({config.threshold_band})")
        print_kv("Similarity Threshold", f"{config.similarity_threshold:.0%}")
        print_kv("Final Risks", result.statistics.total_after)
        print_kv("Filtered", result.statistics.removed_count,
                 Colors.WARNING if result.statistics.removed_count else Colors.VALUE)
        print_decisions(result)

    # 3. MANUAL OVERRIDE
    print_section("Reviewer Restore")
    restored = restore_risk(result, "model-generated:1")
    print_kv("Final Risks", " | ".join(restored.final_risk_ids))
    print_kv("Audit Hash", restored.audit_hash[:16] + "...")

    # 4. TUNING HINTS
    print_section("Threshold Tuning")
    for recommendation in analyze_duplicate_detection(result).recommendations:
        print_kv(recommendation.type.upper(), recommendation.message, Colors.WARNING)


if __name__ == "__main__":
    run_fusion_demo()
