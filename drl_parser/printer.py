"""Rule model printer: converts a RuleModel back to DRL text.

Used for round-trip testing: parse -> print -> re-parse -> compare.
Not intended to reproduce original formatting, only an equal model.
Values are written in canonical units (mm, deg, %).
"""

from . import ast_nodes as ast
from .keywords import ValueKind, kind_name
from .layers import MAX_COPPER_LAYERS, standard_layers
from .parser_base import DRC_RULE_FILE_VERSION
from .units import Dimension, format_value


def _quote(text):
    # the lexer has no escape letters; a newline is kept as backslash-newline
    escaped = (text.replace('\\', '\\\\').replace('"', '\\"')
               .replace('\n', '\\\n'))
    return f'"{escaped}"'


class DrlPrinter:
    """Emit DRL text from rule model nodes.

    ``layers`` must offer ``name_of(layer_id)``; the default is the full
    standard layer table.
    """

    def __init__(self, layers=None, indent='    '):
        self.layers = layers or standard_layers(MAX_COPPER_LAYERS)
        self.indent = indent

    def emit(self, node):
        """Dispatch to the appropriate emit method."""
        method = '_emit_' + type(node).__name__
        fn = getattr(self, method, None)
        if fn is None:
            raise TypeError(f"Cannot print {type(node).__name__}")
        return fn(node)

    # ---- Model ----

    def _emit_RuleModel(self, node):
        version = node.file_version or DRC_RULE_FILE_VERSION
        lines = [f"version {version}", ""]
        for cond in node.conditions:
            lines.append(self.emit(cond))
        if node.conditions:
            lines.append("")
        for rule in node.rules:
            lines.append(self._emit_rule(rule, node))
        return '\n'.join(lines) + '\n'

    def _emit_Condition(self, node):
        return f"CONDITION {_quote(node.name)} {{ {self.emit(node.expression)} }}"

    def _emit_Rule(self, node):
        # Without a model the condition indices cannot be named.
        if node.condition_indices:
            raise ValueError(
                f"Rule {node.name!r} references conditions; print the whole model")
        return self._emit_rule(node, None)

    def _emit_rule(self, node, model):
        head = [f"RULE {_quote(node.name)}"]
        if node.condition_indices:
            names = ', '.join(_quote(model.conditions[i].name)
                              for i in node.condition_indices)
            head.append(f"CONDITION {names}")
        if node.layer is not None:
            head.append(f"LAYER {_quote(self._layer_name(node.layer))}")
        if node.priority is not None:
            head.append(f"PRIORITY {node.priority}")
        if not node.enabled:
            head.append("DISABLED")
        lines = [' '.join(head) + ' {']
        for c in node.constraints:
            lines.append(self.indent + self.emit(c))
        lines.append('}')
        return '\n'.join(lines)

    def _emit_Constraint(self, node):
        values = ', '.join(format_value(v, d)
                           for v, d in zip(node.values, node.dimensions))
        return f"{kind_name(node.kind)} {values}"

    # ---- Expressions ----

    def _emit_BoolOp(self, node):
        parts = [self._operand(o) for o in node.operands]
        return f" {node.op} ".join(parts)

    def _emit_NotOp(self, node):
        return f"NOT {self._operand(node.operand)}"

    def _emit_BoolLiteral(self, node):
        return "true" if node.value else "false"

    def _emit_AttributeTest(self, node):
        attr = node.attribute
        if node.item:
            attr = f"{node.item}.{attr}"
        return f"{attr} {node.op} {self._value(node)}"

    def _operand(self, node):
        text = self.emit(node)
        if isinstance(node, ast.BoolOp):
            return f"({text})"
        return text

    def _value(self, node):
        kind = node.value_kind
        if kind == ValueKind.LAYER:
            return _quote(self._layer_name(node.value))
        if kind == ValueKind.LENGTH:
            return format_value(node.value, Dimension.LENGTH)
        if kind == ValueKind.COUNT:
            return str(node.value)
        return _quote(node.value)

    def _layer_name(self, layer_id):
        name = self.layers.name_of(layer_id)
        if name is None:
            raise ValueError(f"No layer name for layer id {layer_id}")
        return name
