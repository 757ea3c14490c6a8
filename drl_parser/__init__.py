"""DRLParser - a hand-written recursive descent parser for design rule files."""

import logging
import os

from .errors import (
    DRLError, LexicalError, FormatError, RuleSyntaxError, DuplicateNameError,
    UnresolvedConditionError, UnknownLayerError, UnitError,
    ConstraintArityError,
)
from .keywords import AttributeSpec, ConstraintKind, Grammar, ValueKind
from .layers import LayerTable, standard_layers
from .lexer import Lexer
from .parser import Parser
from .parser_base import DRC_RULE_FILE_VERSION
from .units import Dimension
from . import ast_nodes as ast

logger = logging.getLogger(__name__)


def parse_with_diagnostics(text, layers=None, filename="<input>",
                           required_version=DRC_RULE_FILE_VERSION,
                           grammar=None):
    """Parse DRL source text and return ``(RuleModel, warnings)``."""
    if layers is None:
        layers = standard_layers()
    lexer = Lexer(text, filename=filename)
    parser = Parser(lexer, layers, required_version=required_version,
                    filename=filename, grammar=grammar)
    model = parser.parse()
    return model, parser.warnings


def parse(text, layers=None, filename="<input>",
          required_version=DRC_RULE_FILE_VERSION, grammar=None):
    """Parse DRL source text and return a ``RuleModel``."""
    model, _ = parse_with_diagnostics(
        text, layers, filename=filename,
        required_version=required_version, grammar=grammar)
    return model


def read_rule_text(path):
    """Read a rule file as UTF-8.

    Bytes that do not decode raise ``LexicalError`` at the line and byte
    column of the first bad byte.
    """
    with open(path, 'rb') as f:
        data = f.read()
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as exc:
        prefix = data[:exc.start]
        line = prefix.count(b'\n') + 1
        col = exc.start - (prefix.rfind(b'\n') + 1) + 1
        raise LexicalError(
            f"Invalid UTF-8 byte 0x{data[exc.start]:02x}: {exc.reason}",
            line, col, str(path)) from None


def parse_file(path, layers=None, required_version=DRC_RULE_FILE_VERSION,
               grammar=None):
    """Parse a DRL file and return a ``RuleModel``."""
    text = read_rule_text(path)
    return parse(text, layers, filename=str(path),
                 required_version=required_version, grammar=grammar)


def load_rules(path, layers=None, required_version=DRC_RULE_FILE_VERSION,
               grammar=None):
    """Load the board's rule file.

    A missing file means "no custom rules" and yields an empty model.
    A malformed file raises; nothing partially parsed is returned.
    """
    if not os.path.exists(path):
        logger.debug("No rule file at %s", path)
        return ast.RuleModel(file_version=required_version)
    try:
        return parse_file(path, layers, required_version=required_version,
                          grammar=grammar)
    except DRLError as exc:
        logger.error("Failed to load rules: %s", exc)
        raise


class ValidationResult:
    """Result of rule file validation, containing validity status and diagnostics."""

    __slots__ = ('valid', 'errors', 'warnings', 'model')

    def __init__(self, valid, errors=None, warnings=None, model=None):
        self.valid = valid
        self.errors = errors or []
        self.warnings = warnings or []
        self.model = model

    def __bool__(self):
        return self.valid

    def __repr__(self):
        if self.valid:
            return "ValidationResult(valid=True)"
        return f"ValidationResult(valid=False, errors={self.errors!r})"


def validate_rules(text, layers=None, filename="<input>",
                   required_version=DRC_RULE_FILE_VERSION, grammar=None):
    """Validate DRL source text.

    Returns a ``ValidationResult`` whose boolean value indicates validity.
    ``errors`` holds the structured form of the first error (see
    ``DRLError.to_dict``); ``warnings`` holds parser warnings such as a
    too-recent file version.
    """
    if not text or not text.strip():
        return ValidationResult(False, [{
            'kind': FormatError.kind,
            'message': "File is empty or contains only whitespace",
            'file': filename, 'line': 1, 'column': 1,
        }])
    try:
        model, warnings = parse_with_diagnostics(
            text, layers, filename=filename,
            required_version=required_version, grammar=grammar)
    except DRLError as exc:
        return ValidationResult(False, [exc.to_dict()])
    return ValidationResult(True, warnings=warnings, model=model)
