"""Centralized keyword registry and grammar tables for the DRL parser.

Each keyword is declared once with its roles; the role frozensets used by
the parser are derived from the registry.  Attribute predicates and
constraint kinds live in tables rather than in parser code, so a host
application can add its own through a ``Grammar`` without touching the
recursive-descent core.
"""

from enum import Enum

from .units import Dimension

# Roles:
#   header       – file header keyword
#   block_head   – starts a top-level block
#   rule_clause  – optional clause between a rule's name and its body
#   bool_op      – boolean combinator in condition expressions
#   literal      – boolean literal in condition expressions

_KEYWORD_REGISTRY = {
    'VERSION':   {'header'},
    'CONDITION': {'block_head', 'rule_clause'},
    'RULE':      {'block_head'},
    'LAYER':     {'rule_clause'},
    'PRIORITY':  {'rule_clause'},
    'DISABLED':  {'rule_clause'},
    'AND':       {'bool_op'},
    'OR':        {'bool_op'},
    'NOT':       {'bool_op'},
    'TRUE':      {'literal'},
    'FALSE':     {'literal'},
}

_RULE_CLAUSES = frozenset(
    k for k, roles in _KEYWORD_REGISTRY.items() if 'rule_clause' in roles
)

_RESERVED = frozenset(_KEYWORD_REGISTRY)

# Binding powers for infix boolean operators.  NOT is prefix-only and
# binds tighter than both.
_BOOL_BP = {
    'OR': 10,
    'AND': 20,
}


# ---------------------------------------------------------------------------
# Attribute predicates
# ---------------------------------------------------------------------------

class ValueKind(Enum):
    LAYER = 'layer'      # layer name, resolved to a layer id
    STRING = 'string'
    LENGTH = 'length'    # dimensioned, stored in nanometres
    COUNT = 'count'      # dimensionless integer


EQUALITY_OPS = frozenset({'==', '!='})
ORDERING_OPS = frozenset({'==', '!=', '<', '<=', '>', '>='})

# Item selectors accepted as an attribute prefix: A.netclass, B.layer
ITEM_SELECTORS = frozenset({'A', 'B'})


class AttributeSpec:
    __slots__ = ('name', 'value_kind', 'operators')

    def __init__(self, name, value_kind, operators=EQUALITY_OPS):
        self.name = name
        self.value_kind = value_kind
        self.operators = frozenset(operators)

    def __repr__(self):
        return f"AttributeSpec({self.name!r}, {self.value_kind.name})"


_BUILTIN_ATTRIBUTES = (
    AttributeSpec('layer', ValueKind.LAYER),
    AttributeSpec('netclass', ValueKind.STRING),
    AttributeSpec('net', ValueKind.STRING),
    AttributeSpec('type', ValueKind.STRING),
    AttributeSpec('net_code', ValueKind.COUNT, ORDERING_OPS),
    AttributeSpec('width', ValueKind.LENGTH, ORDERING_OPS),
    AttributeSpec('drill', ValueKind.LENGTH, ORDERING_OPS),
)


# ---------------------------------------------------------------------------
# Constraint kinds
# ---------------------------------------------------------------------------

class ConstraintKind(str, Enum):
    CLEARANCE = 'clearance'
    HOLE_CLEARANCE = 'hole_clearance'
    EDGE_CLEARANCE = 'edge_clearance'
    COURTYARD_CLEARANCE = 'courtyard_clearance'
    ANNULAR_WIDTH = 'annular_width'
    TRACK_WIDTH = 'track_width'
    VIA_DIAMETER = 'via_diameter'
    HOLE_SIZE = 'hole_size'
    DIFF_PAIR_GAP = 'diff_pair_gap'
    LENGTH = 'length'
    THERMAL_SPOKE_WIDTH = 'thermal_spoke_width'
    MAX_VIA_COUNT = 'max_via_count'
    HATCH_ANGLE = 'hatch_angle'
    COPPER_DENSITY = 'copper_density'


def kind_name(kind):
    """Text name of a built-in or host-registered constraint kind."""
    if isinstance(kind, ConstraintKind):
        return kind.value
    return kind


class ConstraintSpec:
    """Parameter list of a constraint kind.

    ``params`` gives the expected dimension of each parameter in order;
    the first ``required`` of them are mandatory.
    """
    __slots__ = ('kind', 'params', 'required')

    def __init__(self, kind, params, required=None):
        self.kind = kind
        self.params = tuple(params)
        self.required = len(self.params) if required is None else required
        if not 0 < self.required <= len(self.params):
            raise ValueError(
                f"{kind_name(kind)}: required must be between 1 and {len(self.params)}")

    def accepts(self, count):
        return self.required <= count <= len(self.params)

    def arity_text(self):
        if self.required == len(self.params):
            return str(self.required)
        return f"{self.required} to {len(self.params)}"

    def __repr__(self):
        dims = ', '.join(d.name for d in self.params)
        return f"ConstraintSpec({kind_name(self.kind)!r}, ({dims}), required={self.required})"


_L = Dimension.LENGTH
CK = ConstraintKind

_BUILTIN_CONSTRAINTS = (
    ConstraintSpec(CK.CLEARANCE, (_L,)),
    ConstraintSpec(CK.HOLE_CLEARANCE, (_L,)),
    ConstraintSpec(CK.EDGE_CLEARANCE, (_L,)),
    ConstraintSpec(CK.COURTYARD_CLEARANCE, (_L,)),
    ConstraintSpec(CK.ANNULAR_WIDTH, (_L,)),
    ConstraintSpec(CK.TRACK_WIDTH, (_L, _L), required=1),
    ConstraintSpec(CK.VIA_DIAMETER, (_L, _L), required=1),
    ConstraintSpec(CK.HOLE_SIZE, (_L, _L), required=1),
    ConstraintSpec(CK.DIFF_PAIR_GAP, (_L, _L), required=1),
    ConstraintSpec(CK.LENGTH, (_L, _L)),
    ConstraintSpec(CK.THERMAL_SPOKE_WIDTH, (_L,)),
    ConstraintSpec(CK.MAX_VIA_COUNT, (Dimension.COUNT,)),
    ConstraintSpec(CK.HATCH_ANGLE, (Dimension.ANGLE,)),
    ConstraintSpec(CK.COPPER_DENSITY, (Dimension.RATIO, Dimension.RATIO), required=1),
)


class Grammar:
    """Attribute and constraint-kind tables used by one parser.

    Starts from the built-in tables; ``register_*`` extends this instance
    only.
    """

    def __init__(self):
        self.attributes = {a.name: a for a in _BUILTIN_ATTRIBUTES}
        self.constraints = {c.kind.value: c for c in _BUILTIN_CONSTRAINTS}

    def register_attribute(self, spec):
        self._check_name(spec.name)
        self.attributes[spec.name.lower()] = spec
        return spec

    def register_constraint(self, name, params, required=None):
        self._check_name(name)
        spec = ConstraintSpec(name.lower(), params, required)
        self.constraints[spec.kind] = spec
        return spec

    def attribute(self, name):
        return self.attributes.get(name.lower())

    def constraint(self, name):
        return self.constraints.get(name.lower())

    @staticmethod
    def _check_name(name):
        if name.upper() in _RESERVED:
            raise ValueError(f"{name!r} is a reserved keyword")
