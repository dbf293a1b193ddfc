"""rubysig: check Ruby call sites against changed method definitions."""

from rubysig.adapters.ruby import (
    InvalidDefinition,
    build_method_definition,
    build_parameter_model,
    extract_call_sites,
)
from rubysig.core import (
    MatchOutcome,
    MatchReason,
    MethodDefinition,
    ParameterSlotSet,
    match_call,
)

__all__ = [
    "InvalidDefinition",
    "MatchOutcome",
    "MatchReason",
    "MethodDefinition",
    "ParameterSlotSet",
    "build_method_definition",
    "build_parameter_model",
    "extract_call_sites",
    "match_call",
]
