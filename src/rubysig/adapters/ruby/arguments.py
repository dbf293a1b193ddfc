"""Call-site argument extraction using tree-sitter-ruby.

Bare keyword arguments (``f(a, k: 1, **opts)``) are grouped into a single
trailing hash argument, the way Ruby passes them to the callee.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import tree_sitter_ruby as tsruby
from tree_sitter import Language, Node, Parser

from rubysig.adapters.ruby.ast_utils import RubyAstUtils
from rubysig.core.config import get_config

logger = logging.getLogger(__name__)

KEYWORD_ARGUMENT_TYPES = ("pair", "hash_splat_argument")
SKIPPED_ARGUMENT_TYPES = ("block_argument", "comment")


class RubyArgument:
    """A call-site argument backed by one or more tree-sitter nodes.

    Several nodes only occur for the implicit hash built from bare keyword
    arguments.
    """

    def __init__(self, nodes: list[Node], content: bytes, implicit_hash: bool = False) -> None:
        if not nodes:
            raise ValueError("an argument needs at least one node")
        self._nodes = nodes
        self._content = content
        self._implicit_hash = implicit_hash

    def __repr__(self) -> str:
        return f"RubyArgument({self.source!r})"

    @property
    def source(self) -> str:
        encoding = get_config().source_encoding
        start = self._nodes[0].start_byte
        end = self._nodes[-1].end_byte
        return self._content[start:end].decode(encoding, errors="ignore")

    @property
    def node_type(self) -> str:
        return "hash" if self._implicit_hash else self._nodes[0].type

    def is_hash_literal(self) -> bool:
        return self.node_type == "hash"

    def is_literal(self) -> bool:
        if self._implicit_hash:
            return True
        return RubyAstUtils.is_literal(self._nodes[0])

    def keyword_labels(self) -> list[str]:
        encoding = get_config().source_encoding
        labels: list[str] = []
        for entry in self._hash_entries():
            if entry.type != "pair":
                continue
            label = RubyAstUtils.pair_key_label(entry, self._content, encoding)
            if label is not None:
                labels.append(label)
        return labels

    def has_keyword_splat(self) -> bool:
        return any(entry.type == "hash_splat_argument" for entry in self._hash_entries())

    def _hash_entries(self) -> Iterator[Node]:
        if not self.is_hash_literal():
            return
        if self._implicit_hash:
            yield from self._nodes
        else:
            yield from self._nodes[0].named_children


@dataclass
class CallSite:
    """A method call observed in Ruby source."""

    name: str
    arguments: list[RubyArgument] = field(default_factory=list)
    line: int = 0
    source: str = ""


class RubyCallExtractor:
    """Extracts call sites and their arguments from Ruby source."""

    def __init__(self) -> None:
        self._language = Language(tsruby.language())
        self._parser = Parser(self._language)

    def extract(self, source: str) -> list[CallSite]:
        """Extract every named method call in ``source``.

        Receiverless calls without arguments (``f``) are included unless a
        local variable of that name is in scope.

        Args:
            source: Ruby source text.

        Returns:
            Call sites in source order.
        """
        config = get_config()
        content = source.encode(config.source_encoding)
        tree = self._parser.parse(content)
        if tree.root_node.has_error:
            logger.debug("Ruby source contains syntax errors; extracting best-effort")

        calls: list[CallSite] = []
        encoding = config.source_encoding
        for node in self._walk(tree.root_node):
            if node.type == "identifier" and RubyAstUtils.is_bare_call(node, content, encoding):
                text = RubyAstUtils.get_node_text(node, content, encoding)
                calls.append(CallSite(name=text, line=node.start_point[0] + 1, source=text))
                continue
            if node.type != "call":
                continue
            method_node = node.child_by_field_name("method")
            if method_node is None:
                continue
            calls.append(
                CallSite(
                    name=RubyAstUtils.get_node_text(method_node, content, encoding),
                    arguments=self.extract_arguments(node, content),
                    line=node.start_point[0] + 1,
                    source=RubyAstUtils.get_node_text(node, content, encoding),
                )
            )
        return calls

    def extract_arguments(self, call: Node, content: bytes) -> list[RubyArgument]:
        """Build the argument list of a ``call`` node."""
        arg_list = call.child_by_field_name("arguments")
        if arg_list is None:
            return []

        positional: list[RubyArgument] = []
        keyword_nodes: list[Node] = []
        for child in arg_list.named_children:
            if child.type in SKIPPED_ARGUMENT_TYPES:
                continue
            if child.type in KEYWORD_ARGUMENT_TYPES:
                keyword_nodes.append(child)
            else:
                positional.append(RubyArgument([child], content))

        if keyword_nodes:
            positional.append(RubyArgument(keyword_nodes, content, implicit_hash=True))
        return positional

    def _walk(self, node: Node) -> Iterator[Node]:
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.named_children))


_default_extractor: RubyCallExtractor | None = None


def extract_call_sites(source: str) -> list[CallSite]:
    """Extract call sites with the shared default extractor."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = RubyCallExtractor()
    return _default_extractor.extract(source)
