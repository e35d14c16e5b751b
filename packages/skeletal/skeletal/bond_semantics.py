#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Bond symbol semantics and wedge normalization helpers."""

# local repo modules
from .errors import StructuralError


BOND_ORDERS = {
	".": 0,
	"-": 1,
	"/": 1,
	"\\": 1,
	":": 1,
	"=": 2,
	"#": 3,
	"$": 4,
}
DIRECTIONAL_BONDS = ("/", "\\")
WEDGE_TYPES = (
	"",
	"up",
	"down",
)
DEFAULT_BOND = "-"


#============================================
def normalize_bond_symbol(symbol):
	"""Normalize an optional bond symbol.

	Args:
		symbol (str | None): Bond symbol from the parse tree, may be empty.

	Returns:
		str: The symbol, with the default single bond for empty input.
	"""
	if symbol is None or symbol == "":
		return DEFAULT_BOND
	if symbol not in BOND_ORDERS:
		raise StructuralError(f"Unknown bond symbol: {symbol!r}")
	return symbol


#============================================
def bond_order(symbol):
	"""Return the integer bond order for a bond symbol.

	Args:
		symbol (str | None): Bond symbol.

	Returns:
		int: 0 for the dot disconnection, otherwise 1 to 4.
	"""
	return BOND_ORDERS[normalize_bond_symbol(symbol)]


#============================================
def is_directional(symbol):
	return symbol in DIRECTIONAL_BONDS


#============================================
def canonicalize_wedge_edge(edge, graph):
	"""Orient a wedged edge so its source is the stereocenter.

	The narrow end of a wedge sits on the stereocenter, so renderers can
	draw from source to target without looking at atom flags.

	Args:
		edge: Edge with .wedge, .source_id and .target_id.
		graph: Graph owning the edge vertices.

	Returns:
		The edge instance (mutated in place).
	"""
	if edge is None or edge.wedge not in ("up", "down"):
		return edge
	front_id = _resolve_front_vertex(edge, graph)
	if front_id is None:
		return edge
	if edge.source_id != front_id:
		edge.source_id, edge.target_id = edge.target_id, edge.source_id
	return edge


#============================================
def _resolve_front_vertex(edge, graph):
	"""Select the stereocenter end of an edge, or fall back to geometry."""
	source = graph.vertices[edge.source_id]
	target = graph.vertices[edge.target_id]
	source_center = source.value.is_stereo_center
	target_center = target.value.is_stereo_center
	if source_center and not target_center:
		return source.id
	if target_center and not source_center:
		return target.id
	if source.value.chirality and not target.value.chirality:
		return source.id
	if target.value.chirality and not source.value.chirality:
		return target.id
	return None
