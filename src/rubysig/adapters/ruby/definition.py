"""Parameter list model builder using tree-sitter-ruby.

A definition line such as ``def f(a, m = 1, *rest, z, k: 1, **opts)`` is
closed with the configured terminator, parsed as a standalone program and
normalized into a ParameterSlotSet.
"""

from __future__ import annotations

import logging

import tree_sitter_ruby as tsruby
from tree_sitter import Language, Node, Parser

from rubysig.adapters.ruby.ast_utils import RubyAstUtils
from rubysig.core.config import get_config
from rubysig.core.models import (
    KeywordParameter,
    MethodDefinition,
    OptionalParameter,
    ParameterSlotSet,
)

logger = logging.getLogger(__name__)

FORWARD_PARAMETER = "..."


class InvalidDefinition(ValueError):
    """Source text could not be interpreted as a single method definition."""

    def __init__(self, source: str, details: str | None = None) -> None:
        message = f"Can't parse method definition.\nCode: {source}\nError: {details}"
        super().__init__(message)
        self.message = message
        self.source = source
        self.details = details


class RubyDefinitionParser:
    """Builds parameter models from Ruby method definition lines."""

    def __init__(self) -> None:
        self._language = Language(tsruby.language())
        self._parser = Parser(self._language)

    def build_method_definition(self, definition_source: str) -> MethodDefinition:
        """Parse a definition line into a MethodDefinition.

        Args:
            definition_source: Definition text without its closing ``end``.

        Returns:
            The method name and its normalized parameter slots.

        Raises:
            InvalidDefinition: If the text is not a single method definition.
        """
        config = get_config()
        code = f"{definition_source}{config.definition_terminator}"

        try:
            content = code.encode(config.source_encoding)
            tree = self._parser.parse(content)
            definition = RubyAstUtils.find_definition(tree.root_node)
            name = RubyAstUtils.get_definition_name(
                definition, content, config.source_encoding
            )
            parameters = self._build_slots(
                RubyAstUtils.get_parameter_nodes(definition), content
            )
        except (LookupError, ValueError) as e:
            raise InvalidDefinition(code, str(e)) from e

        logger.debug(f"Parsed definition {name}: {parameters}")
        return MethodDefinition(name=name, parameters=parameters, source=definition_source)

    def build_parameter_model(self, definition_source: str) -> ParameterSlotSet:
        """Parse a definition line and return only its parameter slots."""
        return self.build_method_definition(definition_source).parameters

    def _build_slots(self, nodes: list[Node], content: bytes) -> ParameterSlotSet:
        encoding = get_config().source_encoding
        normal: list[str] = []
        optional: list[OptionalParameter] = []
        rest: str | None = None
        post_rest: list[str] = []
        keyword: list[KeywordParameter] = []
        keyword_rest: str | None = None

        def text(node: Node) -> str:
            return RubyAstUtils.get_node_text(node, content, encoding)

        for node in nodes:
            if node.type in ("identifier", "destructured_parameter"):
                # required positionals after an optional or a splat bind from the tail
                if optional or rest is not None:
                    post_rest.append(text(node))
                else:
                    normal.append(text(node))
            elif node.type == "optional_parameter":
                name_node = node.child_by_field_name("name")
                value_node = node.child_by_field_name("value")
                if name_node is None or value_node is None:
                    raise LookupError("optional parameter without name or default")
                optional.append(OptionalParameter(name=text(name_node), default=text(value_node)))
            elif node.type == "splat_parameter":
                name_node = node.child_by_field_name("name")
                rest = text(name_node) if name_node is not None else "*"
            elif node.type == "keyword_parameter":
                name_node = node.child_by_field_name("name")
                if name_node is None:
                    raise LookupError("keyword parameter without name")
                keyword.append(
                    KeywordParameter(
                        label=f"{text(name_node)}:",
                        has_default=node.child_by_field_name("value") is not None,
                    )
                )
            elif node.type == "hash_splat_parameter":
                name_node = node.child_by_field_name("name")
                keyword_rest = text(name_node) if name_node is not None else "**"
            elif node.type == "forward_parameter":
                rest = FORWARD_PARAMETER
                keyword_rest = FORWARD_PARAMETER
            else:
                # block_parameter, hash_splat_nil
                logger.debug(f"Ignoring parameter node {node.type}")

        return ParameterSlotSet(
            normal=tuple(normal),
            optional=tuple(optional),
            rest=rest,
            post_rest=tuple(post_rest),
            keyword=tuple(keyword),
            keyword_rest=keyword_rest,
        )


_default_parser: RubyDefinitionParser | None = None


def _get_default_parser() -> RubyDefinitionParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = RubyDefinitionParser()
    return _default_parser


def build_method_definition(definition_source: str) -> MethodDefinition:
    """Parse a definition line with the shared default parser."""
    return _get_default_parser().build_method_definition(definition_source)


def build_parameter_model(definition_source: str) -> ParameterSlotSet:
    """Parse a definition line and return its ParameterSlotSet.

    Raises:
        InvalidDefinition: If the text is not a single method definition.
    """
    return _get_default_parser().build_parameter_model(definition_source)
