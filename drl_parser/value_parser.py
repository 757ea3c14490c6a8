"""Value parsing mixin: dimensioned literals, plain integers and layer names."""

from .errors import UnitError, UnknownLayerError
from .parser_base import describe
from .tokens import TokenType
from .units import Dimension, UnknownUnit, to_internal

TT = TokenType


class ValueMixin:
    """Mixin converting literal tokens to internal-unit values."""

    def _parse_sign(self):
        if self._match(TT.MINUS):
            return -1
        self._match(TT.PLUS)
        return 1

    def _parse_param(self, dimension, context):
        """Parse one value of the given dimension."""
        if dimension == Dimension.COUNT:
            return self._parse_int(context)
        return self._parse_dimension(dimension, context)

    def _parse_dimension(self, expected, context):
        start = self._cur()
        sign = self._parse_sign()
        tok = self._cur()

        if tok.type in (TT.INTEGER, TT.FLOAT):
            raise self._error(
                UnitError,
                f"Missing unit on {tok.value!r} in {context} "
                f"(expected a {expected.value} value)", tok)
        if tok.type != TT.DIMENSION:
            raise self._syntax_error(
                f"Expected a {expected.value} value in {context}, "
                f"got {describe(tok)}", tok)

        try:
            value, dimension = to_internal(tok.value, tok.unit)
        except UnknownUnit:
            raise self._error(
                UnitError, f"Unknown unit {tok.unit!r} in {tok.text!r}",
                tok) from None

        if dimension != expected:
            raise self._error(
                UnitError,
                f"Expected a {expected.value} value in {context}, "
                f"got {tok.text!r} ({dimension.value})", start)
        self._advance()
        return sign * value

    def _parse_int(self, context):
        """Signed base-10 integer where no unit is allowed."""
        sign = self._parse_sign()
        tok = self._cur()
        if tok.type == TT.DIMENSION:
            raise self._syntax_error(
                f"Unexpected unit {tok.unit!r} on {tok.text!r}: "
                f"{context} takes a plain integer", tok)
        if tok.type != TT.INTEGER:
            raise self._syntax_error(
                f"Expected an integer for {context}, got {describe(tok)}", tok)
        self._advance()
        return sign * int(tok.value)

    def _parse_layer(self):
        """Layer name (string or identifier) resolved to its layer id."""
        tok = self._cur()
        if tok.type not in (TT.STRING, TT.IDENT):
            raise self._syntax_error(
                f"Expected a layer name, got {describe(tok)}", tok)
        layer_id = self.layers.resolve(tok.value)
        if layer_id is None:
            raise self._error(
                UnknownLayerError, f"Unknown layer {tok.value!r}", tok)
        self._advance()
        return layer_id
