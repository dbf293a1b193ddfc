"""Property tests for parameter model construction from Ruby source.

Generated definition lines are parsed with tree-sitter-ruby and the
resulting slots are compared with the parameters used to build them.
"""

from __future__ import annotations

from hypothesis import given, strategies as st

from rubysig.adapters.ruby import RubyDefinitionParser

RUBY_KEYWORDS = {
    "alias", "and", "begin", "break", "case", "class", "def", "defined", "do",
    "else", "elsif", "end", "ensure", "false", "for", "if", "in", "module",
    "next", "nil", "not", "or", "redo", "rescue", "retry", "return", "self",
    "super", "then", "true", "undef", "unless", "until", "when", "while", "yield",
}

_parser = RubyDefinitionParser()

ruby_identifiers = st.from_regex(r"[a-z][a-z0-9_]{0,7}", fullmatch=True).filter(
    lambda name: name not in RUBY_KEYWORDS
)


@st.composite
def definition_strategy(draw: st.DrawFn) -> tuple[str, dict]:
    """Generate a definition line and the slots it declares."""
    names = draw(st.lists(ruby_identifiers, min_size=9, max_size=9, unique=True))
    normal = names[: draw(st.integers(0, 2))]
    optional = names[2 : 2 + draw(st.integers(0, 2))]
    rest = names[4] if draw(st.booleans()) else None
    post_rest = names[5 : 5 + draw(st.integers(0, 2))] if (optional or rest) else []
    keyword = [(n, draw(st.booleans())) for n in names[7 : 7 + draw(st.integers(0, 2))]]

    parts = list(normal)
    parts += [f"{n} = 1" for n in optional]
    if rest:
        parts.append(f"*{rest}")
    parts += post_rest
    parts += [f"{n}: 1" if has_default else f"{n}:" for n, has_default in keyword]

    source = f"def method_under_test({', '.join(parts)})"
    expected = {
        "normal": tuple(normal),
        "optional": tuple(optional),
        "rest": rest,
        "post_rest": tuple(post_rest),
        "keyword": tuple(keyword),
    }
    return source, expected


@given(data=definition_strategy())
def test_slots_follow_declaration(data: tuple[str, dict]) -> None:
    """Each declared parameter lands in the slot its syntax implies."""
    source, expected = data

    definition = _parser.build_method_definition(source)
    params = definition.parameters

    assert definition.name == "method_under_test"
    assert params.normal == expected["normal"]
    assert tuple(o.name for o in params.optional) == expected["optional"]
    assert params.rest == expected["rest"]
    assert params.post_rest == expected["post_rest"]
    assert tuple((k.name, k.has_default) for k in params.keyword) == expected["keyword"]
    assert params.keyword_rest is None
