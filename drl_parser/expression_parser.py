"""Expression parsing mixin: precedence climbing over condition predicates."""

from . import ast_nodes as ast
from .keywords import _BOOL_BP, _RESERVED, ITEM_SELECTORS, ValueKind
from .parser_base import describe
from .tokens import TokenType, COMPARISON_OPS
from .units import Dimension

TT = TokenType


class ExpressionMixin:
    """Mixin providing condition expression parsing for the DRL parser.

    Precedence, loosest first: ``OR``, ``AND``, prefix ``NOT``.  Chains of
    the same operator collapse into one n-ary ``BoolOp``.
    """

    def _parse_condition_expr(self, bp=0):
        left = self._bool_nud()
        while True:
            t = self._cur()
            if t.type != TT.IDENT:
                break
            op = t.value.upper()
            nbp = _BOOL_BP.get(op, 0)
            if nbp <= bp:
                break
            self._advance()
            right = self._parse_condition_expr(nbp)
            if isinstance(left, ast.BoolOp) and left.op == op:
                left.operands.append(right)
            else:
                left = ast.BoolOp(op=op, operands=[left, right],
                                  line=left.line, col=left.col)
        return left

    def _bool_nud(self):
        t = self._cur()
        loc = self._loc()

        if t.type == TT.LPAREN:
            self._advance()
            expr = self._parse_condition_expr(0)
            self._expect(TT.RPAREN, "')'")
            return expr

        if t.type != TT.IDENT:
            raise self._syntax_error(
                f"Expected a condition expression, got {describe(t)}")

        word = t.value.upper()
        if word == 'NOT':
            self._advance()
            return ast.NotOp(operand=self._bool_nud(), **loc)
        if word in ('TRUE', 'FALSE'):
            self._advance()
            return ast.BoolLiteral(value=(word == 'TRUE'), **loc)
        if word in _RESERVED:
            raise self._syntax_error(
                f"Unexpected keyword {t.value!r} in condition expression")
        return self._parse_predicate()

    # ------------------------------------------------------------------
    # Leaf predicate: [A.|B.]attribute op value
    # ------------------------------------------------------------------
    def _parse_predicate(self):
        tok = self._cur()
        loc = self._loc(tok)
        name = tok.value
        item = None
        prefix, dot, rest = name.partition('.')
        if dot and prefix.upper() in ITEM_SELECTORS:
            item = prefix.upper()
            name = rest

        spec = self.grammar.attribute(name)
        if spec is None:
            raise self._syntax_error(f"Unknown attribute {name!r}", tok)
        self._advance()

        op_tok = self._cur()
        op = COMPARISON_OPS.get(op_tok.type)
        if op is None:
            raise self._syntax_error(
                f"Expected a comparison operator after {tok.value!r}, "
                f"got {describe(op_tok)}")
        if op not in spec.operators:
            raise self._syntax_error(
                f"Operator '{op}' is not allowed for attribute {spec.name!r}")
        self._advance()

        value = self._parse_attribute_value(spec)
        return ast.AttributeTest(attribute=spec.name, op=op, value=value,
                                 value_kind=spec.value_kind, item=item, **loc)

    def _parse_attribute_value(self, spec):
        kind = spec.value_kind
        context = f"attribute {spec.name!r}"
        if kind == ValueKind.LAYER:
            return self._parse_layer()
        if kind == ValueKind.LENGTH:
            return self._parse_dimension(Dimension.LENGTH, context)
        if kind == ValueKind.COUNT:
            return self._parse_int(context)

        tok = self._cur()
        if tok.type not in (TT.STRING, TT.IDENT) or (
                tok.type == TT.IDENT and tok.value.upper() in _RESERVED):
            raise self._syntax_error(
                f"Expected a string for {context}, got {describe(tok)}")
        self._advance()
        return tok.value
