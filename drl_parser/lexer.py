"""Lexer for DRL rule files. Converts raw text into a token stream."""

from .errors import LexicalError
from .tokens import TokenType, Token

TT = TokenType

_SINGLE_CHAR = {
    '(': TT.LPAREN,
    ')': TT.RPAREN,
    '{': TT.LBRACE,
    '}': TT.RBRACE,
    ',': TT.COMMA,
    ';': TT.SEMICOLON,
    '+': TT.PLUS,
    '-': TT.MINUS,
}


def _is_digit(ch):
    # ASCII only; str.isdigit() also accepts superscripts and other scripts
    return '0' <= ch <= '9'


class Lexer:
    """Tokenizer for DRL source text.

    Iterating a ``Lexer`` scans the text lazily, one token at a time.
    Every new iteration starts again from the beginning of the text, so
    a lexer can be re-run but never resumed mid-stream.
    """

    def __init__(self, text: str, filename: str = "<input>"):
        self.text = text
        self.filename = filename
        self.length = len(text)
        self._reset()

    def _reset(self):
        self.pos = 0
        self.line = 1
        self.col = 1
        self._tok_line = 1
        self._tok_col = 1

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------
    def __iter__(self):
        self._reset()
        return self._scan()

    def tokens(self):
        return list(self)

    # ------------------------------------------------------------------
    # Core scanning helpers
    # ------------------------------------------------------------------
    def _ch(self):
        if self.pos < self.length:
            return self.text[self.pos]
        return '\0'

    def _peek(self, offset=1):
        p = self.pos + offset
        if p < self.length:
            return self.text[p]
        return '\0'

    def _advance(self):
        ch = self.text[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _match(self, expected):
        if self.pos < self.length and self.text[self.pos] == expected:
            self._advance()
            return True
        return False

    def _make(self, tt, value, unit=None):
        return Token(tt, value, self._tok_line, self._tok_col, unit)

    def _mark(self):
        self._tok_line = self.line
        self._tok_col = self.col

    def _error(self, msg):
        return LexicalError(msg, self._tok_line, self._tok_col, self.filename)

    # ------------------------------------------------------------------
    # Main scan loop
    # ------------------------------------------------------------------
    def _scan(self):
        while self.pos < self.length:
            self._mark()
            ch = self._ch()

            if ch in (' ', '\t', '\r', '\n', '\f'):
                self._advance()
                continue

            # Line comments: // and #
            if ch == '#' or (ch == '/' and self._peek() == '/'):
                self._skip_line_comment()
                continue

            # Block comment /* */
            if ch == '/' and self._peek() == '*':
                self._skip_block_comment()
                continue

            if ch == '"' or ch == "'":
                yield self._scan_string(ch)
                continue

            if _is_digit(ch) or (ch == '.' and _is_digit(self._peek())):
                yield self._scan_number()
                continue

            if ch.isalpha() or ch == '_':
                yield self._scan_identifier()
                continue

            yield self._scan_operator()

        self._mark()
        yield self._make(TT.EOF, '')

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def _skip_line_comment(self):
        while self.pos < self.length and self._ch() != '\n':
            self._advance()

    def _skip_block_comment(self):
        self._advance()  # /
        self._advance()  # *
        while self.pos < self.length:
            if self._ch() == '*' and self._peek() == '/':
                self._advance()
                self._advance()
                return
            self._advance()
        raise self._error("Unterminated block comment")

    # ------------------------------------------------------------------
    # String literals
    # ------------------------------------------------------------------
    def _scan_string(self, quote):
        self._advance()  # opening quote
        parts = []
        while self.pos < self.length:
            ch = self._ch()
            if ch == quote:
                self._advance()
                return self._make(TT.STRING, ''.join(parts))
            if ch == '\n':
                break
            if ch == '\\':
                self._advance()
                if self.pos >= self.length:
                    break
                parts.append(self._advance())
            else:
                parts.append(self._advance())
        raise self._error(
            f"Unterminated string {quote}{''.join(parts)}")

    # ------------------------------------------------------------------
    # Number literals
    # ------------------------------------------------------------------
    def _scan_number(self):
        start = self.pos
        has_dot = False

        while self.pos < self.length:
            ch = self._ch()
            if _is_digit(ch):
                self._advance()
            elif ch == '.' and not has_dot and _is_digit(self._peek()):
                has_dot = True
                self._advance()
            else:
                break

        text = self.text[start:self.pos]

        # A unit suffix glued to the number: 0.2mm, 45deg, 50%
        ch = self._ch()
        if ch == '%':
            self._advance()
            return self._make(TT.DIMENSION, text, '%')
        if ch.isalpha() or ch == '_':
            ustart = self.pos
            while self.pos < self.length and (self._ch().isalnum() or self._ch() == '_'):
                self._advance()
            return self._make(TT.DIMENSION, text, self.text[ustart:self.pos])

        if has_dot:
            return self._make(TT.FLOAT, text)
        return self._make(TT.INTEGER, text)

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------
    def _scan_identifier(self):
        start = self.pos
        while self.pos < self.length:
            ch = self._ch()
            if ch.isalnum() or ch == '_':
                self._advance()
            elif ch == '.' and self._peek().isalnum():
                # Dotted identifiers: F.Cu, A.netclass
                self._advance()
            else:
                break
        return self._make(TT.IDENT, self.text[start:self.pos])

    # ------------------------------------------------------------------
    # Operators and delimiters
    # ------------------------------------------------------------------
    def _scan_operator(self):
        ch = self._advance()

        tt = _SINGLE_CHAR.get(ch)
        if tt is not None:
            return self._make(tt, ch)

        if ch == '=':
            if self._match('='):
                return self._make(TT.EQEQ, '==')
            raise self._error("Unexpected '=' (did you mean '=='?)")
        if ch == '!':
            if self._match('='):
                return self._make(TT.BANGEQ, '!=')
            raise self._error("Unexpected '!' (did you mean '!=' or NOT?)")
        if ch == '<':
            if self._match('='):
                return self._make(TT.LE, '<=')
            return self._make(TT.LT, '<')
        if ch == '>':
            if self._match('='):
                return self._make(TT.GE, '>=')
            return self._make(TT.GT, '>')

        raise self._error(f"Unrecognized character {ch!r}")
