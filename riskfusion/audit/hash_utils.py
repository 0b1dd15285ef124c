import json
import hashlib
from typing import Any, Dict, List

from riskfusion.models.risk import Risk

EXCLUDED_HASH_FIELDS = {
    "auditHash",
}


def compute_audit_hash(audit_payload: Dict[str, Any]) -> str:
    """
    Deterministically compute a SHA-256 hash over an audit payload,
    excluding self-referential hash fields.
    """
    canonical_payload = {
        k: audit_payload[k]
        for k in sorted(audit_payload.keys())
        if k not in EXCLUDED_HASH_FIELDS
    }

    serialized = json.dumps(
        canonical_payload,
        sort_keys=True,
        separators=(",", ":")
    )

    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def fingerprint_inputs(rule_based_risks: List[Risk], model_risks: List[Risk]) -> str:
    """
    Fingerprint of the two input risk sets, order-sensitive.
    """
    return compute_audit_hash({
        "ruleBasedRisks": [r.to_dict() for r in rule_based_risks],
        "modelRisks": [r.to_dict() for r in model_risks],
    })
