"""Base class for the DRL parser: token stream helpers and error builders."""

from .errors import RuleSyntaxError
from .tokens import TokenType, Token

TT = TokenType

DRC_RULE_FILE_VERSION = 20200610


def describe(tok):
    """Human-readable rendering of a token for error messages."""
    if tok.type == TT.EOF:
        return "end of input"
    if tok.type == TT.STRING:
        return f"string {tok.value!r}"
    return f"{tok.type.name}({tok.text!r})"


class ParserBase:
    """Single-pass token stream positioned on the current token.

    ``tokens`` may be any iterable (a ``Lexer`` or a list); it is pulled
    one token at a time and never rewound, so a lexical error further
    down the text is only raised once the parser reaches it.
    """

    def __init__(self, tokens, layers, required_version=DRC_RULE_FILE_VERSION,
                 filename="<input>", grammar=None):
        self.filename = filename
        self.layers = layers
        self.required_version = required_version
        self.grammar = grammar
        self.warnings = []
        self.too_recent = False
        self.file_version = None
        self._stream = iter(tokens)
        self._current = self._pull()

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------
    def _pull(self):
        tok = next(self._stream, None)
        if tok is None:
            return Token(TT.EOF, '', 0, 0)
        return tok

    def _cur(self):
        return self._current

    def _advance(self):
        tok = self._current
        if tok.type != TT.EOF:
            self._current = self._pull()
        return tok

    def _at(self, tt):
        return self._current.type == tt

    def _at_val(self, val):
        t = self._current
        return t.type == TT.IDENT and t.value.upper() == val.upper()

    def _match(self, tt):
        if self._current.type == tt:
            return self._advance()
        return None

    def _require(self, tt, what=None):
        """Current token if it has type *tt*, without consuming it."""
        if self._current.type != tt:
            raise self._syntax_error(
                f"Expected {what or tt.name}, got {describe(self._current)}")
        return self._current

    def _expect(self, tt, what=None):
        self._require(tt, what)
        return self._advance()

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------
    def _error(self, cls, msg, tok=None):
        tok = tok or self._current
        return cls(msg, tok.line, tok.col, self.filename)

    def _syntax_error(self, msg, tok=None):
        if self.too_recent:
            msg += (f" (file version {self.file_version} is newer than "
                    f"supported version {self.required_version})")
        return self._error(RuleSyntaxError, msg, tok)

    def _loc(self, tok=None):
        t = tok or self._current
        return {'line': t.line, 'col': t.col}
