"""Tier 1 unit tests: Constraint kinds and parameter arity."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from tests.helpers import parse_one_rule, parse_error, assert_node_type
from drl_parser.ast_nodes import Constraint
from drl_parser.errors import ConstraintArityError, RuleSyntaxError
from drl_parser.keywords import ConstraintKind as CK
from drl_parser.units import Dimension


class TestSingleValue:
    @pytest.mark.parametrize("kind", [
        "clearance", "hole_clearance", "edge_clearance",
        "courtyard_clearance", "annular_width", "thermal_spoke_width",
    ])
    def test_one_length(self, kind):
        rule = parse_one_rule(f'RULE "r" {{ {kind} 0.25mm }}')
        c = rule.constraints[0]
        assert_node_type(c, Constraint, kind=CK(kind), values=(250000,),
                         dimensions=(Dimension.LENGTH,))
        assert c.min == 250000
        assert c.max is None

    def test_second_value_rejected(self):
        err = parse_error(ConstraintArityError,
                          'RULE "r" { clearance 0.2mm, 0.3mm }')
        assert "'clearance'" in err.message
        assert "takes 1" in err.message

    def test_position_of_constraint(self):
        rule = parse_one_rule('RULE "r" {\n    clearance 1mm\n}')
        assert (rule.constraints[0].line, rule.constraints[0].col) == (3, 5)


class TestOptionalMaximum:
    def test_min_only(self):
        c = parse_one_rule('RULE "r" { track_width 0.15mm }').constraints[0]
        assert c.values == (150000,)
        assert c.max is None

    def test_min_and_max(self):
        c = parse_one_rule('RULE "r" { track_width 0.15mm, 1mm }').constraints[0]
        assert (c.min, c.max) == (150000, 1000000)
        assert c.dimensions == (Dimension.LENGTH, Dimension.LENGTH)

    def test_three_values_rejected(self):
        err = parse_error(ConstraintArityError,
                          'RULE "r" { via_diameter 0.4mm, 0.6mm, 0.8mm }')
        assert "1 to 2" in err.message

    def test_length_needs_both(self):
        err = parse_error(ConstraintArityError, 'RULE "r" { length 10mm }')
        assert "got 1" in err.message
        assert (err.line, err.col) == (2, 12)

    def test_missing_value(self):
        parse_error(ConstraintArityError, 'RULE "r" { clearance }')

    def test_comma_without_second_value(self):
        parse_error(RuleSyntaxError, 'RULE "r" { track_width 1mm, }')


class TestSeparators:
    def test_semicolons_optional(self):
        rule = parse_one_rule(
            'RULE "r" { clearance 0.2mm; track_width 0.1mm hole_size 0.3mm; }')
        assert [c.kind for c in rule.constraints] == [
            CK.CLEARANCE, CK.TRACK_WIDTH, CK.HOLE_SIZE]

    def test_repeated_kind_kept(self):
        rule = parse_one_rule('RULE "r" { clearance 1mm clearance 2mm }')
        assert len(rule.constraints) == 2
        assert rule.constraint(CK.CLEARANCE).min == 1000000

    def test_lookup_missing_kind(self):
        rule = parse_one_rule('RULE "r" { clearance 1mm }')
        assert rule.constraint(CK.HOLE_SIZE) is None


class TestUnknownKind:
    def test_unknown_kind(self):
        err = parse_error(RuleSyntaxError, 'RULE "r" { skew 1mm }')
        assert "'skew'" in err.message
        assert (err.line, err.col) == (2, 12)

    def test_non_identifier(self):
        parse_error(RuleSyntaxError, 'RULE "r" { "clearance" 1mm }')

    def test_kind_is_case_insensitive(self):
        rule = parse_one_rule('RULE "r" { HOLE_SIZE 0.3mm }')
        assert rule.constraints[0].kind == CK.HOLE_SIZE
