from riskfusion.models.risk import Risk, RiskSeverity, RiskSource

# Canonical sample sets for exercising duplicate detection.
# Excessive Liability Provisions overlaps Unlimited Liability Exposure;
# Data Privacy Compliance Gap overlaps nothing.

SAMPLE_RULE_BASED_RISKS = [
    Risk(
        id=1,
        title="Unlimited Liability Exposure",
        description=(
            "The contract contains broad indemnification clauses that could expose "
            "the company to unlimited financial liability."
        ),
        severity=RiskSeverity.HIGH,
        category="Liability",
        recommendation="Add liability caps and carve-outs for certain types of damages.",
        source=RiskSource.RULE_BASED,
    ),
    Risk(
        id=2,
        title="Weak Termination Rights",
        description="Limited ability to terminate the contract for convenience or cause.",
        severity=RiskSeverity.MEDIUM,
        category="Contract Terms",
        recommendation="Negotiate stronger termination clauses with reasonable notice periods.",
        source=RiskSource.RULE_BASED,
    ),
]

SAMPLE_MODEL_RISKS = [
    Risk(
        id=1,
        title="Excessive Liability Provisions",
        description=(
            "The indemnification terms are overly broad and could result in "
            "significant financial exposure."
        ),
        severity=RiskSeverity.HIGH,
        category="Liability",
        recommendation="Negotiate more balanced liability allocation.",
        source=RiskSource.MODEL_GENERATED,
    ),
    Risk(
        id=2,
        title="Data Privacy Compliance Gap",
        description=(
            "The contract lacks adequate provisions for data protection and privacy compliance."
        ),
        severity=RiskSeverity.MEDIUM,
        category="Compliance",
        recommendation="Add comprehensive data protection clauses.",
        source=RiskSource.MODEL_GENERATED,
    ),
]
