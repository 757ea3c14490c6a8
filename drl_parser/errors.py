"""Error taxonomy for DRL parsing.

Every error carries the source position of the offending token and is
terminal for the parse: the parser never recovers, and no partial rule
model is handed back to the caller.
"""


class DRLError(Exception):
    """Base class for all rule-file errors, with source location."""

    kind = 'error'

    def __init__(self, msg, line=0, col=0, filename="<input>"):
        self.message = msg
        self.line = line
        self.col = col
        self.filename = filename
        super().__init__(f"{filename}:{line}:{col}: {msg}")

    def to_dict(self):
        """Structured form of the error for callers that display it."""
        return {
            'kind': self.kind,
            'message': self.message,
            'file': self.filename,
            'line': self.line,
            'column': self.col,
        }


class LexicalError(DRLError):
    """Malformed token: unterminated string or comment, stray character."""
    kind = 'lexical'


class FormatError(DRLError):
    """Missing or invalid ``version`` header."""
    kind = 'format'


class RuleSyntaxError(DRLError):
    """Token sequence does not match the grammar."""
    kind = 'syntax'


class DuplicateNameError(DRLError):
    """A condition or rule name is defined twice in one file."""
    kind = 'duplicate_name'


class UnresolvedConditionError(DRLError):
    """A rule references a condition not defined earlier in the file."""
    kind = 'unresolved_condition'


class UnknownLayerError(DRLError):
    """A layer name is not known to the layer resolver."""
    kind = 'unknown_layer'


class UnitError(DRLError):
    """Unknown, missing or mismatched unit suffix on a numeric literal."""
    kind = 'unit'


class ConstraintArityError(DRLError):
    """Wrong number of parameters for a constraint kind."""
    kind = 'constraint_arity'
