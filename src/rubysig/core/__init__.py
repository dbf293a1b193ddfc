"""Core module containing parameter models, configuration, and the binding matcher."""

from rubysig.core.matcher import (
    MatchOutcome,
    MatchReason,
    decide_rest_args,
    match_call,
    usable_as_keyword_param,
)
from rubysig.core.models import (
    ArgumentDescriptor,
    KeywordParameter,
    MethodDefinition,
    OptionalParameter,
    ParameterSlotSet,
)

__all__ = [
    "ArgumentDescriptor",
    "KeywordParameter",
    "MatchOutcome",
    "MatchReason",
    "MethodDefinition",
    "OptionalParameter",
    "ParameterSlotSet",
    "decide_rest_args",
    "match_call",
    "usable_as_keyword_param",
]
