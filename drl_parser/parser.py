"""Recursive descent parser for DRL rule files."""

from .expression_parser import ExpressionMixin
from .keywords import Grammar
from .parser_base import ParserBase, DRC_RULE_FILE_VERSION
from .statement_parser import StatementMixin
from .value_parser import ValueMixin


class Parser(StatementMixin, ExpressionMixin, ValueMixin, ParserBase):
    """DRL parser: version gate, then CONDITION / RULE blocks until EOF.

    ``layers`` is the host board's layer resolver, borrowed for the
    duration of the parse.  ``parse()`` returns a ``RuleModel`` or raises
    the first ``DRLError`` it meets.
    """

    def __init__(self, tokens, layers, required_version=DRC_RULE_FILE_VERSION,
                 filename="<input>", grammar=None):
        super().__init__(tokens, layers, required_version=required_version,
                         filename=filename, grammar=grammar or Grammar())
