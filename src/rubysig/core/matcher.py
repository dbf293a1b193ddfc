"""Parameter binding matcher.

Decides whether the arguments of a call site can bind to a method
definition, following the precedence Ruby uses when it assigns arguments
to required, optional, splat, post-splat and keyword parameters.

The matcher never raises for a call that does not bind: every rejection
is returned as a MatchOutcome carrying a MatchReason and its payload.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from rubysig.core.models import ArgumentDescriptor, MethodDefinition, ParameterSlotSet

logger = logging.getLogger(__name__)


class MatchReason(str, Enum):
    """Reasons a call cannot bind to a definition."""

    NAME_MISMATCH = "name_mismatch"
    INSUFFICIENT_POSITIONAL = "insufficient_positional"
    INSUFFICIENT_POST_REST_POSITIONAL = "insufficient_post_rest_positional"
    TOO_MANY_ARGUMENTS = "too_many_arguments"
    KWPARAM_REQUIRED = "kwparam_required"
    KWPARAM_SHOULD_BE_HASH = "kwparam_should_be_hash"
    KWPARAM_NOT_FOUND = "kwparam_not_found"
    UNEXPECTED_KWPARAM = "unexpected_kwparam"


@dataclass(frozen=True)
class MatchOutcome:
    """Result of matching a call against a definition.

    Payload fields are only set for the reasons that carry them:
    ``received``/``expected`` for argument counts, ``argument`` for
    kwparam_should_be_hash and ``keywords`` for kwparam_not_found and
    unexpected_kwparam.
    """

    bindable: bool
    reason: MatchReason | None = None
    received: int | None = None
    expected: int | None = None
    argument: str | None = None
    keywords: tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> MatchOutcome:
        return cls(bindable=True)

    @classmethod
    def fail(
        cls,
        reason: MatchReason,
        received: int | None = None,
        expected: int | None = None,
        argument: str | None = None,
        keywords: Sequence[str] = (),
    ) -> MatchOutcome:
        return cls(
            bindable=False,
            reason=reason,
            received=received,
            expected=expected,
            argument=argument,
            keywords=tuple(keywords),
        )

    def __bool__(self) -> bool:
        return self.bindable

    @property
    def detail(self) -> str | None:
        """Reason-specific payload rendered as text."""
        if self.keywords:
            return ", ".join(self.keywords)
        if self.argument is not None:
            return self.argument
        if self.received is not None:
            return f"{self.received} for {self.expected}"
        return None

    @property
    def message(self) -> str:
        """One-line human readable description of the outcome."""
        if self.bindable:
            return "callable"
        messages = {
            MatchReason.NAME_MISMATCH: "method name does not match",
            MatchReason.INSUFFICIENT_POSITIONAL: (
                f"not enough arguments (given {self.received}, expected {self.expected})"
            ),
            MatchReason.INSUFFICIENT_POST_REST_POSITIONAL: (
                f"not enough trailing arguments (given {self.received}, "
                f"expected {self.expected})"
            ),
            MatchReason.TOO_MANY_ARGUMENTS: (
                f"too many arguments (given {self.received}, expected at most {self.expected})"
            ),
            MatchReason.KWPARAM_REQUIRED: "keyword arguments are required",
            MatchReason.KWPARAM_SHOULD_BE_HASH: (
                f"keyword arguments should be a hash, got {self.argument}"
            ),
            MatchReason.KWPARAM_NOT_FOUND: f"missing keywords: {self.detail}",
            MatchReason.UNEXPECTED_KWPARAM: f"unknown keywords: {self.detail}",
        }
        return messages[self.reason]


def match_call(
    definition: MethodDefinition,
    call_name: str,
    args: Sequence[ArgumentDescriptor],
) -> MatchOutcome:
    """Decide whether ``args`` passed to ``call_name`` bind to ``definition``.

    Args:
        definition: The method definition to bind against.
        call_name: Method name used at the call site.
        args: Arguments supplied at the call site. Never mutated.

    Returns:
        MatchOutcome; truthy when the call binds.
    """
    if call_name != definition.name:
        return MatchOutcome.fail(MatchReason.NAME_MISMATCH)

    params = definition.parameters
    remaining = list(args)

    normal_size = len(params.normal)
    received_normal = len(remaining[:normal_size])
    del remaining[:normal_size]
    if received_normal != normal_size:
        outcome = MatchOutcome.fail(
            MatchReason.INSUFFICIENT_POSITIONAL,
            received=received_normal,
            expected=normal_size,
        )
    elif params.has_required_keyword_params:
        outcome = _decide_with_keyword_hash(params, remaining)
    elif params.has_keyword_params:
        outcome = _decide_with_optional_keywords(params, remaining)
    else:
        outcome = decide_rest_args(params, remaining)

    if not outcome:
        logger.debug(
            f"Call {call_name}/{len(args)} does not bind to {definition.name}: "
            f"{outcome.reason.value}"
        )
    return outcome


def decide_rest_args(
    params: ParameterSlotSet, args: Sequence[ArgumentDescriptor]
) -> MatchOutcome:
    """Bind the remaining arguments to post-rest, rest and optional parameters.

    Args:
        params: Parameter slots of the definition.
        args: Arguments left after normal (and keyword hash) consumption.

    Returns:
        MatchOutcome for the positional tail.
    """
    remaining = list(args)

    post_rest_size = len(params.post_rest)
    if len(remaining) < post_rest_size:
        return MatchOutcome.fail(
            MatchReason.INSUFFICIENT_POST_REST_POSITIONAL,
            received=len(remaining),
            expected=post_rest_size,
        )
    del remaining[len(remaining) - post_rest_size :]

    # a splat swallows whatever is left
    if params.rest is not None:
        return MatchOutcome.ok()

    if params.optional:
        if len(remaining) <= len(params.optional):
            return MatchOutcome.ok()
        return MatchOutcome.fail(
            MatchReason.TOO_MANY_ARGUMENTS,
            received=len(remaining),
            expected=len(params.optional),
        )

    if not remaining:
        return MatchOutcome.ok()
    return MatchOutcome.fail(
        MatchReason.TOO_MANY_ARGUMENTS, received=len(remaining), expected=0
    )


def usable_as_keyword_param(
    params: ParameterSlotSet, arg: ArgumentDescriptor | None
) -> MatchOutcome:
    """Check whether ``arg`` can be the keyword-argument hash of a call.

    Non-literal arguments (variables, method calls, splats) are accepted,
    since their runtime value cannot be known statically.

    Args:
        params: Parameter slots of the definition.
        arg: Trailing argument of the call, or None when there is none.

    Returns:
        MatchOutcome for the keyword hash alone.
    """
    if arg is None:
        return MatchOutcome.fail(MatchReason.KWPARAM_REQUIRED)
    if not arg.is_hash_literal() and arg.is_literal():
        return MatchOutcome.fail(MatchReason.KWPARAM_SHOULD_BE_HASH, argument=arg.source)
    if not arg.is_hash_literal():
        return MatchOutcome.ok()

    received_names = [label.removesuffix(":") for label in arg.keyword_labels()]

    # Looser than a strict required-keyword check: a hash that also
    # double-splats another value is open, so missing required keywords
    # are not reported for it.
    if not arg.has_keyword_splat():
        missing = [
            name for name in params.required_keyword_names if name not in received_names
        ]
        if missing:
            return MatchOutcome.fail(MatchReason.KWPARAM_NOT_FOUND, keywords=missing)

    if params.keyword_rest is not None:
        return MatchOutcome.ok()

    allowed_names = params.keyword_names
    unexpected = [name for name in received_names if name not in allowed_names]
    if unexpected:
        return MatchOutcome.fail(MatchReason.UNEXPECTED_KWPARAM, keywords=unexpected)
    return MatchOutcome.ok()


def _decide_with_keyword_hash(
    params: ParameterSlotSet, args: list[ArgumentDescriptor]
) -> MatchOutcome:
    remaining = list(args)
    kwarg = remaining.pop() if remaining else None

    outcome = usable_as_keyword_param(params, kwarg)
    if not outcome:
        return outcome
    return decide_rest_args(params, remaining)


def _decide_with_optional_keywords(
    params: ParameterSlotSet, args: list[ArgumentDescriptor]
) -> MatchOutcome:
    # Optional keywords may be omitted entirely, so try the call as
    # purely positional before treating the last argument as the hash.
    if decide_rest_args(params, args):
        return MatchOutcome.ok()
    return _decide_with_keyword_hash(params, args)
