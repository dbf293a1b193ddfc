"""Language adapters for parsing method definitions and call sites.

Adapters turn source text into the core models consumed by the matcher.
"""

from rubysig.adapters.ruby import (
    CallSite,
    InvalidDefinition,
    RubyArgument,
    RubyCallExtractor,
    RubyDefinitionParser,
)

__all__ = [
    "CallSite",
    "InvalidDefinition",
    "RubyArgument",
    "RubyCallExtractor",
    "RubyDefinitionParser",
]
