"""Statement parsing mixin: version header, CONDITION and RULE blocks."""

import logging

from . import ast_nodes as ast
from .errors import (
    ConstraintArityError, DuplicateNameError, FormatError,
    UnresolvedConditionError,
)
from .keywords import _RULE_CLAUSES, kind_name
from .parser_base import describe
from .tokens import TokenType

TT = TokenType

logger = logging.getLogger(__name__)

_VALUE_STARTS = frozenset({
    TT.INTEGER, TT.FLOAT, TT.DIMENSION, TT.MINUS, TT.PLUS,
})


class StatementMixin:
    """Mixin providing block-level parsing for the DRL parser."""

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------
    def parse(self):
        model = ast.RuleModel(**self._loc())
        self._parse_version(model)
        while not self._at(TT.EOF):
            self._parse_statement(model)
        logger.debug("%s: parsed %d conditions, %d rules",
                     self.filename, len(model.conditions), len(model.rules))
        return model

    # ------------------------------------------------------------------
    # Version gate
    # ------------------------------------------------------------------
    def _parse_version(self, model):
        if not self._at_val('version'):
            raise self._error(
                FormatError,
                f"Missing version header: expected 'version <number>', "
                f"got {describe(self._cur())}")
        self._advance()

        tok = self._cur()
        if tok.type != TT.INTEGER:
            raise self._error(
                FormatError,
                f"Invalid version {describe(tok)}: expected an integer")
        self._advance()

        version = int(tok.value)
        self.file_version = model.file_version = version
        if version > self.required_version:
            self.too_recent = model.too_recent = True
            msg = (f"{self.filename}: rule file version {version} is newer "
                   f"than supported version {self.required_version}")
            self.warnings.append(msg)
            logger.warning(msg)

    # ------------------------------------------------------------------
    # Top-level statement dispatch
    # ------------------------------------------------------------------
    def _parse_statement(self, model):
        if self._at_val('CONDITION'):
            return self._parse_condition(model)
        if self._at_val('RULE'):
            return self._parse_rule(model)
        raise self._syntax_error(
            f"Expected CONDITION or RULE, got {describe(self._cur())}")

    # ------------------------------------------------------------------
    # CONDITION "name" { expr }
    # ------------------------------------------------------------------
    def _parse_condition(self, model):
        kw = self._advance()
        name = self._require(TT.STRING, "condition name string").value

        first = model.condition(name)
        if first is not None:
            raise self._error(
                DuplicateNameError,
                f"Duplicate condition name {name!r} "
                f"(first defined at line {first.line})", kw)
        self._advance()

        self._expect(TT.LBRACE, "'{'")
        expr = self._parse_condition_expr(0)
        self._expect(TT.RBRACE, "'}'")

        return model.add_condition(
            ast.Condition(name=name, expression=expr, **self._loc(kw)))

    # ------------------------------------------------------------------
    # RULE "name" [clauses] { constraints }
    # ------------------------------------------------------------------
    def _parse_rule(self, model):
        kw = self._advance()
        name = self._require(TT.STRING, "rule name string").value

        first = model.rule(name)
        if first is not None:
            raise self._error(
                DuplicateNameError,
                f"Duplicate rule name {name!r} "
                f"(first defined at line {first.line})", kw)
        self._advance()

        rule = ast.Rule(name=name, **self._loc(kw))
        seen = set()
        while not self._at(TT.LBRACE):
            t = self._cur()
            clause = t.value.upper() if t.type == TT.IDENT else None
            if clause not in _RULE_CLAUSES:
                raise self._syntax_error(
                    f"Expected '{{' or a rule clause (CONDITION, LAYER, "
                    f"PRIORITY, DISABLED), got {describe(t)}")
            if clause in seen:
                raise self._syntax_error(
                    f"Duplicate {clause} clause in rule {name!r}")
            seen.add(clause)
            self._advance()

            if clause == 'CONDITION':
                rule.condition_indices = self._parse_condition_refs(model)
            elif clause == 'LAYER':
                rule.layer = self._parse_layer()
            elif clause == 'PRIORITY':
                rule.priority = self._parse_int("PRIORITY")
            else:
                rule.enabled = False

        self._advance()  # {
        if self._at(TT.RBRACE):
            raise self._syntax_error(f"Rule {name!r} has no constraints")
        while not self._at(TT.RBRACE):
            rule.constraints.append(self._parse_constraint())
        self._advance()  # }

        return model.add_rule(rule)

    def _parse_condition_refs(self, model):
        """Comma-separated condition names, resolved to indices now."""
        indices = []
        while True:
            tok = self._require(TT.STRING, "condition name string")
            idx = model.condition_index(tok.value)
            if idx is None:
                raise self._error(
                    UnresolvedConditionError,
                    f"Rule references undefined condition {tok.value!r}", tok)
            self._advance()
            indices.append(idx)
            if not self._match(TT.COMMA):
                return tuple(indices)

    # ------------------------------------------------------------------
    # Constraint: kind value [, value ...] [;]
    # ------------------------------------------------------------------
    def _parse_constraint(self):
        tok = self._cur()
        if tok.type != TT.IDENT:
            raise self._syntax_error(
                f"Expected a constraint kind, got {describe(tok)}")
        spec = self.grammar.constraint(tok.value)
        if spec is None:
            raise self._syntax_error(f"Unknown constraint kind {tok.value!r}")
        self._advance()

        kind = kind_name(spec.kind)
        context = f"constraint {kind!r}"
        values = []
        if self._cur().type in _VALUE_STARTS:
            while True:
                if len(values) == len(spec.params):
                    raise self._error(
                        ConstraintArityError,
                        f"Constraint {kind!r} takes {spec.arity_text()} "
                        f"parameter(s), got more")
                values.append(
                    self._parse_param(spec.params[len(values)], context))
                if not self._match(TT.COMMA):
                    break

        if not spec.accepts(len(values)):
            raise self._error(
                ConstraintArityError,
                f"Constraint {kind!r} takes {spec.arity_text()} "
                f"parameter(s), got {len(values)}", tok)
        self._match(TT.SEMICOLON)

        return ast.Constraint(kind=spec.kind, values=values,
                              dimensions=spec.params[:len(values)],
                              **self._loc(tok))
