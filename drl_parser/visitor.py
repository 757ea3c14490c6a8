"""Visitor pattern for rule model nodes.

Provides ``AstVisitor`` with a ``visit_<NodeType>`` method for every node
class.  The default implementation of each method calls
``generic_visit``, which recurses into child nodes.
"""

from . import ast_nodes as ast
from .keywords import ValueKind


class AstVisitor:
    """Base visitor with double-dispatch via ``AstNode.accept(visitor)``.

    Subclass and override ``visit_XXX`` methods for the node types you
    care about.  Unhandled nodes fall through to ``generic_visit``.
    """

    def generic_visit(self, node):
        """Default handler: recurse into child nodes."""
        for child in _iter_children(node):
            if isinstance(child, ast.AstNode):
                child.accept(self)
            elif isinstance(child, list):
                for item in child:
                    if isinstance(item, ast.AstNode):
                        item.accept(self)

    def visit_RuleModel(self, node):
        return self.generic_visit(node)

    def visit_Condition(self, node):
        return self.generic_visit(node)

    def visit_Rule(self, node):
        return self.generic_visit(node)

    def visit_Constraint(self, node):
        return self.generic_visit(node)

    # -- Expressions --
    def visit_BoolOp(self, node):
        return self.generic_visit(node)

    def visit_NotOp(self, node):
        return self.generic_visit(node)

    def visit_AttributeTest(self, node):
        return self.generic_visit(node)

    def visit_BoolLiteral(self, node):
        return self.generic_visit(node)


def _iter_children(node):
    """Yield all public attributes of a node that may contain sub-nodes."""
    for cls in type(node).__mro__:
        for slot in getattr(cls, '__slots__', ()):
            if slot.startswith('_') or slot in ('line', 'col'):
                continue
            val = getattr(node, slot, None)
            if val is not None:
                yield val


class WalkVisitor(AstVisitor):
    """Collects all visited nodes into a flat list, depth first."""

    def __init__(self):
        self.nodes = []

    def generic_visit(self, node):
        self.nodes.append(node)
        super().generic_visit(node)


class LayerCollector(AstVisitor):
    """Collects every layer id referenced by rules and conditions."""

    def __init__(self):
        self.layers = set()

    def visit_Rule(self, node):
        if node.layer is not None:
            self.layers.add(node.layer)
        return self.generic_visit(node)

    def visit_AttributeTest(self, node):
        if node.value_kind == ValueKind.LAYER:
            self.layers.add(node.value)


def walk(node):
    """All nodes below and including *node*, depth first."""
    v = WalkVisitor()
    node.accept(v)
    return v.nodes


def referenced_layers(model):
    """Sorted layer ids used anywhere in *model*."""
    v = LayerCollector()
    model.accept(v)
    return sorted(v.layers)
