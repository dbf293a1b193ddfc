"""Compatibility service for checking call sites against changed definitions.

This module is the boundary where definition candidates are built: any
candidate that is not a method definition is logged and skipped, never
raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from rubysig.adapters.ruby import (
    CallSite,
    InvalidDefinition,
    RubyCallExtractor,
    RubyDefinitionParser,
)
from rubysig.core.matcher import MatchOutcome
from rubysig.core.models import MethodDefinition

logger = logging.getLogger(__name__)


@dataclass
class CallCheck:
    """Outcome of matching one call site."""

    call: CallSite
    outcome: MatchOutcome

    @property
    def bindable(self) -> bool:
        return self.outcome.bindable


@dataclass
class CheckResult:
    """Result of checking a source text against one definition."""

    definition: MethodDefinition
    checks: list[CallCheck] = field(default_factory=list)

    @property
    def broken(self) -> list[CallCheck]:
        """Calls that no longer bind to the definition."""
        return [check for check in self.checks if not check.bindable]

    @property
    def success(self) -> bool:
        return len(self.broken) == 0


class CompatibilityService:
    """Service for building definitions and validating calls against them."""

    def __init__(
        self,
        definition_parser: RubyDefinitionParser | None = None,
        call_extractor: RubyCallExtractor | None = None,
    ) -> None:
        """Initialize compatibility service.

        Args:
            definition_parser: Parser for definition lines (created if omitted).
            call_extractor: Extractor for call sites (created if omitted).
        """
        self._definition_parser = definition_parser or RubyDefinitionParser()
        self._call_extractor = call_extractor or RubyCallExtractor()

    def load_definition(self, source: str) -> MethodDefinition | None:
        """Build a definition, returning None if the source is not one."""
        try:
            return self._definition_parser.build_method_definition(source)
        except InvalidDefinition as e:
            logger.warning(f"Skipping definition candidate {source!r}: {e.details}")
            return None

    def load_definitions(self, sources: Iterable[str]) -> list[MethodDefinition]:
        """Build every valid definition among ``sources``, in order."""
        definitions: list[MethodDefinition] = []
        for source in sources:
            definition = self.load_definition(source)
            if definition is not None:
                definitions.append(definition)
        return definitions

    def load_changed_methods(
        self, changes: Iterable[Mapping[str, str]]
    ) -> list[dict[str, MethodDefinition]]:
        """Build definitions for each side of changed methods.

        Args:
            changes: Records such as ``{"added": "def f(a)", "removed": "def f"}``.

        Returns:
            One mapping per record holding only the sides that built.
        """
        changed: list[dict[str, MethodDefinition]] = []
        for change in changes:
            built: dict[str, MethodDefinition] = {}
            for side, source in change.items():
                definition = self.load_definition(source)
                if definition is not None:
                    built[side] = definition
            changed.append(built)
        return changed

    def check_source(self, definition: MethodDefinition, source: str) -> CheckResult:
        """Match every call to ``definition.name`` found in ``source``.

        Args:
            definition: The definition calls should bind to.
            source: Ruby source text containing call sites.

        Returns:
            CheckResult with one CallCheck per call of that name.
        """
        result = CheckResult(definition=definition)
        for call in self._call_extractor.extract(source):
            if call.name != definition.name:
                continue
            outcome = definition.callable(call.name, call.arguments)
            result.checks.append(CallCheck(call=call, outcome=outcome))

        if not result.success:
            logger.debug(
                f"{len(result.broken)} of {len(result.checks)} calls to "
                f"{definition.name} do not bind"
            )
        return result
