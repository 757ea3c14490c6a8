"""Shared test utility functions for DRL parser tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from drl_parser import parse, parse_with_diagnostics, standard_layers
from drl_parser.ast_nodes import *

HEADER = "version 20200610\n"
LAYERS = standard_layers(4)


def parse_rules(text: str, **kw) -> RuleModel:
    """Parse rule text with the standard header prepended."""
    return parse(HEADER + text, LAYERS, filename="<test>", **kw)


def parse_one_rule(text: str) -> Rule:
    """Parse text, assert exactly 1 rule, return it."""
    model = parse_rules(text)
    assert len(model.rules) == 1, \
        f"Expected 1 rule, got {len(model.rules)}: {[r.name for r in model.rules]}"
    return model.rules[0]


def parse_cond(text: str) -> Expression:
    """Wrap input as 'CONDITION "c" { text }' and return the expression."""
    model = parse_rules(f'CONDITION "c" {{ {text} }}')
    assert len(model.conditions) == 1
    return model.conditions[0].expression


def parse_error(exc_type, text: str, header=True, **kw):
    """Parse text, assert it raises *exc_type*, return the exception."""
    source = HEADER + text if header else text
    with pytest.raises(exc_type) as info:
        parse(source, LAYERS, filename="<test>", **kw)
    return info.value


def assert_node_type(node, expected_type, **field_checks):
    """Assert node type and optionally check field values."""
    assert isinstance(node, expected_type), \
        f"Expected {expected_type.__name__}, got {type(node).__name__}"
    for field, expected in field_checks.items():
        actual = getattr(node, field, None)
        assert actual == expected, \
            f"{field}: expected {expected!r}, got {actual!r}"


def collect_warnings(text: str) -> list:
    """Parse text (header included by caller) and return only the warnings."""
    _, warnings = parse_with_diagnostics(text, LAYERS, filename="<test>")
    return warnings


def ast_equal(a, b) -> bool:
    """Recursively compare two rule model nodes for structural equality.

    Ignores line/col position info.
    """
    if type(a) != type(b):
        return False
    for cls in type(a).__mro__:
        for slot in getattr(cls, '__slots__', ()):
            if slot in ('line', 'col') or slot.startswith('_'):
                continue
            va = getattr(a, slot, None)
            vb = getattr(b, slot, None)
            if isinstance(va, AstNode) and isinstance(vb, AstNode):
                if not ast_equal(va, vb):
                    return False
            elif isinstance(va, list) and isinstance(vb, list):
                if len(va) != len(vb):
                    return False
                for x, y in zip(va, vb):
                    if isinstance(x, AstNode) and isinstance(y, AstNode):
                        if not ast_equal(x, y):
                            return False
                    elif x != y:
                        return False
            elif va != vb:
                return False
    return True
