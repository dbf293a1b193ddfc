"""Business services for rubysig."""

from rubysig.services.compatibility_service import (
    CallCheck,
    CheckResult,
    CompatibilityService,
)

__all__ = [
    "CallCheck",
    "CheckResult",
    "CompatibilityService",
]
