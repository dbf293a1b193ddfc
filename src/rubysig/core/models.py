"""Data models for Ruby method definitions and call-site arguments.

This module defines the normalized parameter list of a Ruby method
definition and the structural interface the matcher expects from a
call-site argument.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from rubysig.core.matcher import MatchOutcome


class OptionalParameter(BaseModel):
    """Positional parameter with a default value (``m = 1``)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Parameter identifier")
    default: str = Field(..., description="Source text of the default expression")


class KeywordParameter(BaseModel):
    """Keyword parameter (``k:`` or ``k: 1``).

    The label keeps the trailing colon, as it appears in the definition.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., pattern=r".+:$", description="Label text ending in a colon")
    has_default: bool = Field(..., description="False marks a required keyword")

    @property
    def name(self) -> str:
        """Label without the trailing colon."""
        return self.label[:-1]

    @property
    def required(self) -> bool:
        return not self.has_default


class ParameterSlotSet(BaseModel):
    """Normalized parameter list of a method definition.

    Slots follow declaration precedence:
    normal -> optional -> rest -> post_rest -> keyword -> keyword_rest.
    Block parameters are not part of the slot set.
    """

    model_config = ConfigDict(frozen=True)

    normal: tuple[str, ...] = Field(default=(), description="Required positionals")
    optional: tuple[OptionalParameter, ...] = Field(
        default=(), description="Positionals with a default value"
    )
    rest: str | None = Field(None, description="Splat parameter name")
    post_rest: tuple[str, ...] = Field(
        default=(), description="Required positionals bound from the tail"
    )
    keyword: tuple[KeywordParameter, ...] = Field(default=(), description="Keyword parameters")
    keyword_rest: str | None = Field(None, description="Keyword splat parameter name")

    @model_validator(mode="after")
    def _check_unique_keywords(self) -> ParameterSlotSet:
        labels = [kw.label for kw in self.keyword]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ValueError(f"duplicated keyword parameters: {', '.join(duplicates)}")
        return self

    @property
    def has_keyword_params(self) -> bool:
        return bool(self.keyword) or self.keyword_rest is not None

    @property
    def has_required_keyword_params(self) -> bool:
        return any(kw.required for kw in self.keyword)

    @property
    def keyword_names(self) -> list[str]:
        return [kw.name for kw in self.keyword]

    @property
    def required_keyword_names(self) -> list[str]:
        return [kw.name for kw in self.keyword if kw.required]


@runtime_checkable
class ArgumentDescriptor(Protocol):
    """One argument supplied at a call site.

    Only the facts needed to decide whether the argument can serve as a
    trailing keyword-argument hash are exposed.
    """

    @property
    def source(self) -> str:
        """Source text of the argument, for diagnostics."""
        ...

    def is_hash_literal(self) -> bool:
        ...

    def is_literal(self) -> bool:
        ...

    def keyword_labels(self) -> list[str]:
        """Symbol keys of a hash literal as labels (``"k:"``)."""
        ...

    def has_keyword_splat(self) -> bool:
        """Whether a hash literal also double-splats another value."""
        ...


class MethodDefinition(BaseModel):
    """A parsed method definition: its name and parameter slots."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Method name")
    parameters: ParameterSlotSet = Field(default_factory=ParameterSlotSet)
    source: str = Field("", description="Definition source text")

    def callable(
        self, call_name: str, args: Sequence[ArgumentDescriptor]
    ) -> MatchOutcome:
        """Decide whether a call named ``call_name`` with ``args`` binds to this method.

        Args:
            call_name: Method name used at the call site.
            args: Arguments supplied at the call site, in order.

        Returns:
            MatchOutcome that is truthy when the call binds.
        """
        from rubysig.core.matcher import match_call

        return match_call(self, call_name, args)
