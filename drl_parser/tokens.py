"""Token types and Token class for the DRL lexer."""

from enum import Enum, auto


class TokenType(Enum):
    # Literals
    IDENT = auto()
    INTEGER = auto()
    FLOAT = auto()
    DIMENSION = auto()     # number with a unit suffix, e.g. 0.2mm
    STRING = auto()

    # Operators
    EQEQ = auto()          # ==
    BANGEQ = auto()        # !=
    LT = auto()            # <
    GT = auto()            # >
    LE = auto()            # <=
    GE = auto()            # >=
    PLUS = auto()          # +
    MINUS = auto()         # -

    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    COMMA = auto()         # ,
    SEMICOLON = auto()     # ;

    # Special
    EOF = auto()


# Comparison token types and their textual operator.
COMPARISON_OPS = {
    TokenType.EQEQ: '==',
    TokenType.BANGEQ: '!=',
    TokenType.LT: '<',
    TokenType.GT: '>',
    TokenType.LE: '<=',
    TokenType.GE: '>=',
}


class Token:
    __slots__ = ('type', 'value', 'line', 'col', 'unit')

    def __init__(self, type: TokenType, value: str, line: int, col: int,
                 unit: str = None):
        self.type = type
        self.value = value
        self.line = line
        self.col = col
        self.unit = unit

    @property
    def text(self):
        """Source text of the token, unit suffix included."""
        if self.unit is not None:
            return f"{self.value}{self.unit}"
        return self.value

    def __repr__(self):
        return f"Token({self.type.name}, {self.text!r}, L{self.line}:{self.col})"
