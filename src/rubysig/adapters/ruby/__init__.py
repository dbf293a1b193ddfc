"""Ruby language adapter submodule.

This module builds parameter models from Ruby method definitions and
extracts call-site arguments from Ruby source using tree-sitter-ruby.
"""

from rubysig.adapters.ruby.arguments import (
    CallSite,
    RubyArgument,
    RubyCallExtractor,
    extract_call_sites,
)
from rubysig.adapters.ruby.definition import (
    InvalidDefinition,
    RubyDefinitionParser,
    build_method_definition,
    build_parameter_model,
)

__all__ = [
    "CallSite",
    "InvalidDefinition",
    "RubyArgument",
    "RubyCallExtractor",
    "RubyDefinitionParser",
    "build_method_definition",
    "build_parameter_model",
    "extract_call_sites",
]
