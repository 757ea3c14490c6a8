"""Layer name lookup tables.

The parser only needs an object with ``resolve(name)`` returning a layer
id or ``None``; the host board normally supplies one.  ``LayerTable`` is a
plain dict-backed resolver and ``standard_layers`` builds the canonical
board stack.
"""

# Non-copper layers in id order, following B.Cu (31).
_TECHNICAL_LAYERS = (
    'B.Adhes', 'F.Adhes',
    'B.Paste', 'F.Paste',
    'B.SilkS', 'F.SilkS',
    'B.Mask', 'F.Mask',
    'Dwgs.User', 'Cmts.User',
    'Eco1.User', 'Eco2.User',
    'Edge.Cuts', 'Margin',
    'B.CrtYd', 'F.CrtYd',
    'B.Fab', 'F.Fab',
)

F_CU = 0
B_CU = 31
MAX_COPPER_LAYERS = 32


class LayerTable:
    """Maps canonical (case-sensitive) layer names to layer ids."""

    __slots__ = ('_by_name', '_by_id')

    def __init__(self, mapping=None):
        self._by_name = dict(mapping or {})
        self._by_id = {lid: name for name, lid in self._by_name.items()}

    def resolve(self, name):
        return self._by_name.get(name)

    def name_of(self, layer_id):
        return self._by_id.get(layer_id)

    def names(self):
        return list(self._by_name)

    def __contains__(self, name):
        return name in self._by_name

    def __len__(self):
        return len(self._by_name)

    def __repr__(self):
        return f"LayerTable({len(self._by_name)} layers)"


def standard_layers(copper_count=2):
    """Return the layer table of a board with *copper_count* copper layers."""
    if copper_count < 2 or copper_count > MAX_COPPER_LAYERS or copper_count % 2:
        raise ValueError(
            f"copper_count must be an even number between 2 and "
            f"{MAX_COPPER_LAYERS}, got {copper_count}")

    mapping = {'F.Cu': F_CU}
    for i in range(1, copper_count - 1):
        mapping[f'In{i}.Cu'] = i
    mapping['B.Cu'] = B_CU
    for offset, name in enumerate(_TECHNICAL_LAYERS, start=B_CU + 1):
        mapping[name] = offset
    return LayerTable(mapping)
