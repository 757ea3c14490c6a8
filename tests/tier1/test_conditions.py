"""Tier 1 unit tests: CONDITION blocks and boolean expressions."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tests.helpers import parse_cond, parse_rules, parse_error, assert_node_type
from drl_parser.ast_nodes import *
from drl_parser.errors import DuplicateNameError, RuleSyntaxError, UnitError
from drl_parser.keywords import ValueKind


class TestConditionBlock:
    def test_basic_condition(self):
        model = parse_rules('CONDITION "power" { netclass == "Power" }')
        cond = model.conditions[0]
        assert_node_type(cond, Condition, name="power", index=0)
        assert (cond.line, cond.col) == (2, 1)

    def test_conditions_keep_order(self):
        model = parse_rules(
            'CONDITION "b" { net == "GND" }\n'
            'CONDITION "a" { net == "VCC" }\n')
        assert [c.name for c in model.conditions] == ["b", "a"]
        assert [c.index for c in model.conditions] == [0, 1]

    def test_lookup_by_name(self):
        model = parse_rules('CONDITION "c" { true }')
        assert model.condition("c") is model.conditions[0]
        assert model.condition("missing") is None

    def test_duplicate_name(self):
        err = parse_error(
            DuplicateNameError,
            'CONDITION "c1" { true }\nCONDITION "c1" { false }')
        assert (err.line, err.col) == (3, 1)
        assert "'c1'" in err.message

    def test_empty_body(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { }')

    def test_name_must_be_string(self):
        parse_error(RuleSyntaxError, 'CONDITION c { true }')

    def test_missing_close_brace(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { true')

    def test_two_predicates_without_operator(self):
        parse_error(RuleSyntaxError,
                    'CONDITION "c" { net == "A" net == "B" }')


class TestPredicates:
    def test_string_attribute(self):
        node = parse_cond('netclass == "Power"')
        assert_node_type(node, AttributeTest, attribute="netclass", op="==",
                         value="Power", value_kind=ValueKind.STRING, item=None)

    def test_identifier_value(self):
        node = parse_cond('type != via')
        assert_node_type(node, AttributeTest, attribute="type", op="!=", value="via")

    def test_item_selector(self):
        node = parse_cond('A.netclass == "HV"')
        assert_node_type(node, AttributeTest, attribute="netclass", item="A")
        node = parse_cond('b.layer == "F.Cu"')
        assert_node_type(node, AttributeTest, attribute="layer", item="B", value=0)

    def test_attribute_case_insensitive(self):
        node = parse_cond('NetClass == "x"')
        assert node.attribute == "netclass"

    def test_length_attribute(self):
        node = parse_cond('width < 0.15mm')
        assert_node_type(node, AttributeTest, attribute="width", op="<",
                         value=150000, value_kind=ValueKind.LENGTH)

    def test_length_attribute_needs_unit(self):
        parse_error(UnitError, 'CONDITION "c" { drill >= 3 }')

    def test_count_attribute(self):
        node = parse_cond('net_code >= 2')
        assert_node_type(node, AttributeTest, attribute="net_code", op=">=",
                         value=2, value_kind=ValueKind.COUNT)

    def test_unknown_attribute(self):
        err = parse_error(RuleSyntaxError, 'CONDITION "c" { colour == "red" }')
        assert "'colour'" in err.message

    def test_operator_not_allowed(self):
        err = parse_error(RuleSyntaxError, 'CONDITION "c" { netclass < "x" }')
        assert "'<'" in err.message

    def test_missing_operator(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { netclass "x" }')

    def test_keyword_as_value(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { netclass == AND }')


class TestBooleanOperators:
    def test_and(self):
        node = parse_cond('net == "A" AND net == "B"')
        assert_node_type(node, BoolOp, op="AND")
        assert len(node.operands) == 2

    def test_or_chain_is_flattened(self):
        node = parse_cond('net == "A" OR net == "B" OR net == "C"')
        assert_node_type(node, BoolOp, op="OR")
        assert [o.value for o in node.operands] == ["A", "B", "C"]

    def test_and_binds_tighter_than_or(self):
        node = parse_cond('net == "A" OR net == "B" AND net == "C"')
        assert_node_type(node, BoolOp, op="OR")
        assert_node_type(node.operands[0], AttributeTest, value="A")
        assert_node_type(node.operands[1], BoolOp, op="AND")

    def test_not_binds_tighter_than_and(self):
        node = parse_cond('NOT net == "A" AND net == "B"')
        assert_node_type(node, BoolOp, op="AND")
        assert_node_type(node.operands[0], NotOp)

    def test_parentheses(self):
        node = parse_cond('(net == "A" OR net == "B") AND net == "C"')
        assert_node_type(node, BoolOp, op="AND")
        assert_node_type(node.operands[0], BoolOp, op="OR")

    def test_double_not(self):
        node = parse_cond('NOT NOT true')
        assert_node_type(node, NotOp)
        assert_node_type(node.operand, NotOp)
        assert_node_type(node.operand.operand, BoolLiteral, value=True)

    def test_lowercase_operators(self):
        node = parse_cond('net == "A" and not net == "B"')
        assert_node_type(node, BoolOp, op="AND")
        assert_node_type(node.operands[1], NotOp)

    def test_literals(self):
        assert_node_type(parse_cond('true'), BoolLiteral, value=True)
        assert_node_type(parse_cond('FALSE'), BoolLiteral, value=False)

    def test_unbalanced_parenthesis(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { (true }')

    def test_dangling_operator(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { true AND }')

    def test_leading_operator(self):
        parse_error(RuleSyntaxError, 'CONDITION "c" { OR true }')
