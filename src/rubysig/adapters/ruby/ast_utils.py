"""Ruby AST utility helpers."""

from __future__ import annotations

from tree_sitter import Node

DEFINITION_NODE_TYPES = ("method", "singleton_method")

# Node types the Ruby parser gem reports as literals.
LITERAL_NODE_TYPES = frozenset(
    {
        "integer",
        "float",
        "rational",
        "complex",
        "string",
        "chained_string",
        "character",
        "heredoc_beginning",
        "subshell",
        "simple_symbol",
        "delimited_symbol",
        "regex",
        "array",
        "string_array",
        "symbol_array",
        "hash",
        "range",
        "true",
        "false",
        "nil",
    }
)

NUMERIC_NODE_TYPES = frozenset({"integer", "float", "rational", "complex"})

# Parents under which a lone identifier stands as a statement or an argument.
BARE_CALL_PARENT_TYPES = frozenset(
    {
        "program",
        "body_statement",
        "block_body",
        "then",
        "else",
        "begin",
        "ensure",
        "parenthesized_statements",
        "argument_list",
        "return",
    }
)

# Local variable scopes end here; blocks see the locals of their enclosing scope.
SCOPE_NODE_TYPES = frozenset(
    {"program", "method", "singleton_method", "class", "singleton_class", "module"}
)
BLOCK_NODE_TYPES = frozenset({"block", "do_block", "lambda"})

ASSIGNMENT_NODE_TYPES = frozenset({"assignment", "operator_assignment"})


class RubyAstUtils:
    """Utility helpers for tree-sitter-ruby nodes."""

    @staticmethod
    def get_node_text(node: Node, content: bytes, encoding: str = "utf-8") -> str:
        return content[node.start_byte : node.end_byte].decode(encoding, errors="ignore")

    @staticmethod
    def find_definition(root: Node) -> Node:
        """Return the method definition at the top of a parsed snippet.

        Raises:
            LookupError: If the snippet does not start with a definition or
                does not parse cleanly.
        """
        if root.has_error:
            raise LookupError("syntax error in definition")
        children = [c for c in root.named_children if c.type != "comment"]
        if not children:
            raise LookupError("empty program")
        node = children[0]
        if node.type not in DEFINITION_NODE_TYPES:
            raise LookupError(f"expected a method definition, found {node.type}")
        return node

    @staticmethod
    def get_definition_name(definition: Node, content: bytes, encoding: str = "utf-8") -> str:
        name_node = definition.child_by_field_name("name")
        if name_node is None:
            raise LookupError("method definition has no name")
        return RubyAstUtils.get_node_text(name_node, content, encoding)

    @staticmethod
    def get_parameter_nodes(definition: Node) -> list[Node]:
        """Return the declared parameter nodes of a definition, in order.

        Parentheses around the list are anonymous tokens, not wrapper nodes.
        """
        params = definition.child_by_field_name("parameters")
        if params is None:
            return []
        return [c for c in params.named_children if c.type != "comment"]

    @staticmethod
    def is_literal(node: Node) -> bool:
        if node.type in LITERAL_NODE_TYPES:
            return True
        # -1, +2.0
        if node.type == "unary":
            operand = node.child_by_field_name("operand")
            return operand is not None and operand.type in NUMERIC_NODE_TYPES
        return False

    @staticmethod
    def pair_key_label(pair: Node, content: bytes, encoding: str = "utf-8") -> str | None:
        """Return ``"k:"`` when a hash pair's key is the symbol ``:k``.

        Symbol keys are written ``k: 1``, ``:k => 1``, ``"k": 1`` or
        ``:"k" => 1``. String keys and interpolated symbols yield None.
        """
        key = pair.child_by_field_name("key")
        if key is None:
            return None
        text = RubyAstUtils.get_node_text(key, content, encoding)
        if key.type == "hash_key_symbol":
            return f"{text.removesuffix(':')}:"
        if key.type == "simple_symbol":
            return f"{text.removeprefix(':')}:"
        # "k": 1 is a symbol key, "k" => 1 a string key
        if key.type == "delimited_symbol" or (
            key.type == "string" and any(c.type == ":" for c in pair.children)
        ):
            name = RubyAstUtils.quoted_text(key, content, encoding)
            return f"{name}:" if name is not None else None
        return None

    @staticmethod
    def quoted_text(node: Node, content: bytes, encoding: str = "utf-8") -> str | None:
        """Text between the quotes of a string or symbol, None if interpolated."""
        parts: list[str] = []
        for child in node.named_children:
            if child.type != "string_content":
                return None
            parts.append(RubyAstUtils.get_node_text(child, content, encoding))
        return "".join(parts)

    @staticmethod
    def is_bare_call(node: Node, content: bytes, encoding: str = "utf-8") -> bool:
        """Whether an ``identifier`` is a receiverless call without arguments.

        tree-sitter-ruby parses both ``f`` the call and ``f`` the local
        variable as an identifier. One in statement or argument position is a
        call unless a parameter or an earlier assignment in scope names it.
        """
        parent = node.parent
        if node.type != "identifier" or parent is None:
            return False
        if parent.type == "assignment":
            right = parent.child_by_field_name("right")
            if right is None or right.start_byte != node.start_byte:
                return False
        elif parent.type not in BARE_CALL_PARENT_TYPES:
            return False

        name = RubyAstUtils.get_node_text(node, content, encoding)
        scope: Node | None = parent
        while scope is not None:
            if scope.type in SCOPE_NODE_TYPES or scope.type in BLOCK_NODE_TYPES:
                if RubyAstUtils._declares_local(scope, name, node.start_byte, content, encoding):
                    return False
            if scope.type in SCOPE_NODE_TYPES:
                break
            scope = scope.parent
        return True

    @staticmethod
    def _declares_local(
        scope: Node, name: str, before: int, content: bytes, encoding: str
    ) -> bool:
        params = scope.child_by_field_name("parameters")
        if params is not None and name in RubyAstUtils._identifier_names(
            params, content, encoding
        ):
            return True

        stack = list(scope.named_children)
        while stack:
            current = stack.pop()
            if current.start_byte >= before or current.type in SCOPE_NODE_TYPES:
                continue
            if current.type in ASSIGNMENT_NODE_TYPES:
                left = current.child_by_field_name("left")
                if left is not None and name in RubyAstUtils._identifier_names(
                    left, content, encoding
                ):
                    return True
            stack.extend(current.named_children)
        return False

    @staticmethod
    def _identifier_names(node: Node, content: bytes, encoding: str) -> set[str]:
        names: set[str] = set()
        stack = [node]
        while stack:
            current = stack.pop()
            if current.type == "identifier":
                names.add(RubyAstUtils.get_node_text(current, content, encoding))
            stack.extend(current.named_children)
        return names
