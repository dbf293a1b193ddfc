"""Integration tests for the compatibility service."""

from __future__ import annotations

import logging

import pytest

from rubysig.core.matcher import MatchReason
from rubysig.services import CompatibilityService

CALLER_SOURCE = """
class Checkout
  def run(order)
    charge(order)
    charge(order, retries: 3)
    charge(order, 100)
    charge(order, currency: "EUR")
    notify(order)
  end
end
"""


@pytest.fixture
def service(definition_parser, call_extractor) -> CompatibilityService:
    return CompatibilityService(definition_parser, call_extractor)


class TestLoadDefinitions:
    def test_skips_invalid_candidates(
        self, service: CompatibilityService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            definitions = service.load_definitions(["def f(a)", "puts 1", "def g(*args)"])

        assert [d.name for d in definitions] == ["f", "g"]
        assert "puts 1" in caplog.text

    def test_load_definition_returns_none(self, service: CompatibilityService) -> None:
        assert service.load_definition("end") is None

    def test_load_changed_methods(self, service: CompatibilityService) -> None:
        changed = service.load_changed_methods(
            [
                {"added": "def f(a, b)", "removed": "def f(a)"},
                {"added": "  x = 1", "removed": "def g"},
            ]
        )

        assert set(changed[0]) == {"added", "removed"}
        assert changed[0]["added"].parameters.normal == ("a", "b")
        assert set(changed[1]) == {"removed"}


class TestCheckSource:
    def test_reports_broken_calls(self, service: CompatibilityService) -> None:
        definition = service.load_definition("def charge(order, retries: 1)")
        result = service.check_source(definition, CALLER_SOURCE)

        assert len(result.checks) == 4
        assert not result.success

        broken = {check.call.source: check.outcome.reason for check in result.broken}
        assert broken == {
            "charge(order, 100)": MatchReason.KWPARAM_SHOULD_BE_HASH,
            'charge(order, currency: "EUR")': MatchReason.UNEXPECTED_KWPARAM,
        }

    def test_all_calls_bind(self, service: CompatibilityService) -> None:
        definition = service.load_definition("def charge(order, *rest, **opts)")
        result = service.check_source(definition, CALLER_SOURCE)

        assert len(result.checks) == 4
        assert result.success
        assert result.broken == []

    def test_required_keyword_added(self, service: CompatibilityService) -> None:
        definition = service.load_definition("def charge(order, currency:)")
        result = service.check_source(definition, CALLER_SOURCE)

        reasons = [check.outcome.reason for check in result.broken]
        assert reasons == [
            MatchReason.KWPARAM_REQUIRED,
            MatchReason.KWPARAM_NOT_FOUND,
            MatchReason.KWPARAM_SHOULD_BE_HASH,
        ]
        assert result.broken[1].call.source == "charge(order, retries: 3)"
        assert result.broken[1].outcome.detail == "currency"

    def test_bare_call_after_parameter_added(self, service: CompatibilityService) -> None:
        definition = service.load_definition("def f(a)")
        result = service.check_source(definition, "def g\n  f\nend\n")

        assert len(result.checks) == 1
        outcome = result.broken[0].outcome
        assert outcome.reason == MatchReason.INSUFFICIENT_POSITIONAL
        assert (outcome.received, outcome.expected) == (0, 1)

    @pytest.mark.parametrize("call", ['f("k": 1)', 'f(:"k" => 1)', "f(:k => 1)", "f(k: 1)"])
    def test_symbol_key_spellings_bind(self, service: CompatibilityService, call: str) -> None:
        definition = service.load_definition("def f(k:)")
        result = service.check_source(definition, call)

        assert len(result.checks) == 1
        assert result.success
