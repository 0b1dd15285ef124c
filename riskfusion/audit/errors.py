"""
Override and replay failures.

The engine itself is total; these are the only conditions signalled to
callers. Raising never touches the FusionResult passed in.
"""


class OverrideError(ValueError):
    def __init__(self, risk_id, message: str):
        super().__init__(message)
        self.risk_id = risk_id


class InvalidOverrideTarget(OverrideError):
    """Risk id unknown to the audit trail, or not classified duplicate."""

    def __init__(self, risk_id, detail: str = "no duplicate decision recorded"):
        super().__init__(risk_id, f"Cannot restore risk '{risk_id}': {detail}")


class OverrideDisabled(OverrideError):
    """Manual override was switched off in the config used at fusion time."""

    def __init__(self, risk_id):
        super().__init__(
            risk_id,
            f"Cannot restore risk '{risk_id}': manual override is disabled for this analysis",
        )


class ReplayMismatchError(ValueError):
    pass
