"""Rule model produced by the DRL parser: conditions, rules and their trees.

All values are already converted to internal units, layer names are
already resolved to layer ids, and rule-to-condition references are
indices into ``RuleModel.conditions``.
"""


class AstNode:
    """Base class for all rule model nodes."""
    __slots__ = ('line', 'col')

    def __init__(self, line=0, col=0):
        self.line = line
        self.col = col

    def accept(self, visitor):
        """Double-dispatch: calls visitor.visit_<NodeType>(self)."""
        method_name = 'visit_' + type(self).__name__
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


# ---- Condition expressions ----

class Expression(AstNode):
    """Base class for condition expression nodes."""
    __slots__ = ()


class AttributeTest(Expression):
    """Leaf predicate ``[A.|B.]attribute op value``.

    ``item`` is ``'A'``, ``'B'`` or ``None`` when either item of a pair
    may match.  ``value`` is a layer id, a string or an internal-unit
    integer depending on ``value_kind``.
    """
    __slots__ = ('attribute', 'op', 'value', 'value_kind', 'item')

    def __init__(self, attribute='', op='==', value=None, value_kind=None,
                 item=None, **kw):
        super().__init__(**kw)
        self.attribute = attribute
        self.op = op
        self.value = value
        self.value_kind = value_kind
        self.item = item


class BoolOp(Expression):
    """n-ary AND / OR."""
    __slots__ = ('op', 'operands')

    def __init__(self, op='AND', operands=None, **kw):
        super().__init__(**kw)
        self.op = op
        self.operands = operands or []


class NotOp(Expression):
    __slots__ = ('operand',)

    def __init__(self, operand=None, **kw):
        super().__init__(**kw)
        self.operand = operand


class BoolLiteral(Expression):
    __slots__ = ('value',)

    def __init__(self, value=True, **kw):
        super().__init__(**kw)
        self.value = value


# ---- Blocks ----

class Condition(AstNode):
    __slots__ = ('name', 'expression', 'index')

    def __init__(self, name='', expression=None, index=0, **kw):
        super().__init__(**kw)
        self.name = name
        self.expression = expression
        self.index = index


class Constraint(AstNode):
    """One constraint of a rule; ``values`` are internal-unit integers."""
    __slots__ = ('kind', 'values', 'dimensions')

    def __init__(self, kind='', values=(), dimensions=(), **kw):
        super().__init__(**kw)
        self.kind = kind
        self.values = tuple(values)
        self.dimensions = tuple(dimensions)

    @property
    def min(self):
        return self.values[0]

    @property
    def max(self):
        if len(self.values) > 1:
            return self.values[1]
        return None


class Rule(AstNode):
    __slots__ = ('name', 'condition_indices', 'constraints', 'layer',
                 'priority', 'enabled', 'index')

    def __init__(self, name='', condition_indices=(), constraints=None,
                 layer=None, priority=None, enabled=True, index=0, **kw):
        super().__init__(**kw)
        self.name = name
        self.condition_indices = tuple(condition_indices)
        self.constraints = constraints or []
        self.layer = layer
        self.priority = priority
        self.enabled = enabled
        self.index = index

    def constraint(self, kind):
        """First constraint of *kind* in this rule, or ``None``."""
        for c in self.constraints:
            if c.kind == kind:
                return c
        return None

    @property
    def is_conditional(self):
        return bool(self.condition_indices) or self.layer is not None


class RuleModel(AstNode):
    """Ordered conditions and rules of one rule file.

    Filled incrementally by the parser; once handed to the caller it is
    only read.
    """
    __slots__ = ('conditions', 'rules', 'too_recent', 'file_version',
                 '_condition_names', '_rule_names')

    def __init__(self, file_version=None, too_recent=False, **kw):
        super().__init__(**kw)
        self.conditions = []
        self.rules = []
        self.file_version = file_version
        self.too_recent = too_recent
        self._condition_names = {}
        self._rule_names = {}

    # ------------------------------------------------------------------
    # Population (parser side)
    # ------------------------------------------------------------------
    def add_condition(self, condition):
        condition.index = len(self.conditions)
        self._condition_names[condition.name] = condition.index
        self.conditions.append(condition)
        return condition

    def add_rule(self, rule):
        rule.index = len(self.rules)
        self._rule_names[rule.name] = rule.index
        self.rules.append(rule)
        return rule

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def condition_index(self, name):
        return self._condition_names.get(name)

    def condition(self, name):
        idx = self._condition_names.get(name)
        return None if idx is None else self.conditions[idx]

    def rule(self, name):
        idx = self._rule_names.get(name)
        return None if idx is None else self.rules[idx]

    def conditions_for(self, rule):
        return [self.conditions[i] for i in rule.condition_indices]

    def rules_for(self, kind):
        """Enabled rules constraining *kind*, highest priority first.

        Rules without an explicit priority count as priority 0; ties keep
        file order.
        """
        matching = [r for r in self.rules
                    if r.enabled and r.constraint(kind) is not None]
        return sorted(matching, key=lambda r: -(r.priority or 0))

    def default_rule(self, kind):
        """Last enabled, unconditional rule for *kind* with priority 0 or none."""
        for rule in reversed(self.rules):
            if (rule.enabled and not rule.is_conditional
                    and not rule.priority
                    and rule.constraint(kind) is not None):
                return rule
        return None

    def __repr__(self):
        flag = ", too_recent=True" if self.too_recent else ""
        return (f"RuleModel(version={self.file_version}, "
                f"conditions={len(self.conditions)}, rules={len(self.rules)}{flag})")
