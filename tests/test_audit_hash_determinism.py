from riskfusion.audit.hash_utils import compute_audit_hash, fingerprint_inputs
from riskfusion.audit.override import restore_risk
from riskfusion.config.duplication_config import DuplicationConfig
from riskfusion.fusion.fuse_risks import fuse_risks
from riskfusion.samples import SAMPLE_MODEL_RISKS, SAMPLE_RULE_BASED_RISKS


def test_audit_hash_ignores_key_order_and_self_reference():
    a = {"decisions": [], "statistics": {"totalAfter": 2}, "auditHash": "stale"}
    b = {"statistics": {"totalAfter": 2}, "decisions": []}

    assert compute_audit_hash(a) == compute_audit_hash(b)


def test_input_fingerprint_is_order_sensitive():
    forward = fingerprint_inputs(SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS)
    reversed_models = fingerprint_inputs(SAMPLE_RULE_BASED_RISKS, list(reversed(SAMPLE_MODEL_RISKS)))

    assert forward != reversed_models


def test_audit_hash_changes_with_config_and_restores():
    lenient = fuse_risks(SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS, DuplicationConfig.from_preset("lenient"))
    strict = fuse_risks(SAMPLE_RULE_BASED_RISKS, SAMPLE_MODEL_RISKS, DuplicationConfig.from_preset("strict"))
    restored = restore_risk(lenient, "model-generated:1")

    assert lenient.input_fingerprint == strict.input_fingerprint == restored.input_fingerprint
    assert len({lenient.audit_hash, strict.audit_hash, restored.audit_hash}) == 3
