"""Shared pytest fixtures for rubysig tests."""

import pytest
from dotenv import load_dotenv
from hypothesis import settings

from rubysig.adapters.ruby import RubyCallExtractor, RubyDefinitionParser
from rubysig.core.config import reload_config

# Load environment variables from .env file
load_dotenv()

# Configure hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.load_profile("dev")


@pytest.fixture(scope="session")
def definition_parser() -> RubyDefinitionParser:
    """Provide a shared tree-sitter definition parser."""
    return RubyDefinitionParser()


@pytest.fixture(scope="session")
def call_extractor() -> RubyCallExtractor:
    """Provide a shared tree-sitter call extractor."""
    return RubyCallExtractor()


@pytest.fixture
def fresh_config():
    """Reload configuration before and after a test that changes the environment."""
    reload_config()
    yield
    reload_config()
