#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Stereochemistry: cis/trans repair, wedge assignment and CIP labels.

Coordinates follow the drawing convention with y pointing down, so a 2D
position (x, y) maps to the 3D vector (x, -y, z) where z is +1 for the
wide end of an 'up' wedge (towards the viewer) and -1 for a 'down' one.
"""

# Standard Library
import logging

# local repo modules
from . import bond_semantics
from . import geometry
from . import periodic_table
from .errors import LayoutDegeneracy


logger = logging.getLogger(__name__)

CIP_MAX_DEPTH = 10
VOLUME_EPSILON = 1e-9


#============================================
def adjust(graph):
	"""Run the stereo stage on a placed graph.

	Returns:
		list: Ids of the edges that received a wedge.
	"""
	repair_cis_trans(graph)
	if not graph.isomeric:
		return []
	wedged = assign_wedges(graph)
	assign_cip_labels(graph)
	return wedged


#============================================
def _substituent_sign(graph, edge, double_bond_atom_id):
	"""Return +1 or -1 for the written direction of a marked substituent bond.

	The sign is the side ('/' above, '\\' below) of the substituent as seen
	from the double-bond atom, taking into account whether the substituent
	was written before or after that atom.
	"""
	sign = 1 if edge.bond_type == "/" else -1
	if edge.target_id == double_bond_atom_id:
		sign = -sign
	return sign


#============================================
def marked_substituent(graph, atom_id, other_id):
	"""Return (substituent_id, sign) for the first '/' or '\\' bond on atom_id."""
	for edge in sorted(graph.get_edges(atom_id), key=lambda item: item.id):
		if not bond_semantics.is_directional(edge.bond_type):
			continue
		substituent_id = edge.other(atom_id)
		if substituent_id == other_id:
			continue
		return substituent_id, _substituent_sign(graph, edge, atom_id)
	return None, 0


#============================================
def double_bond_configurations(graph):
	"""Yield (edge, first_substituent, second_substituent, written_cis) tuples.

	Only non-ring double bonds with a marked substituent on both ends are
	reported.
	"""
	for edge in graph.edges:
		if edge.order != 2 or graph.is_ring_edge(edge):
			continue
		first_id, first_sign = marked_substituent(graph, edge.source_id, edge.target_id)
		second_id, second_sign = marked_substituent(graph, edge.target_id, edge.source_id)
		if first_id is None or second_id is None:
			continue
		yield edge, first_id, second_id, first_sign == second_sign


#============================================
def is_drawn_cis(graph, edge, first_id, second_id):
	"""Return True, False, or None when a substituent lies on the bond axis."""
	start = graph.vertices[edge.source_id].position
	end = graph.vertices[edge.target_id].position
	first_side = geometry.side_of_line(graph.vertices[first_id].position, start, end)
	second_side = geometry.side_of_line(graph.vertices[second_id].position, start, end)
	if first_side == 0 or second_side == 0:
		return None
	return first_side == second_side


#============================================
def repair_cis_trans(graph):
	"""Mirror one side of each double bond whose drawing contradicts the notation.

	Returns:
		int: Number of double bonds that were repaired.
	"""
	repaired = 0
	for edge, first_id, second_id, written_cis in double_bond_configurations(graph):
		drawn_cis = is_drawn_cis(graph, edge, first_id, second_id)
		if drawn_cis is None or drawn_cis == written_cis:
			continue
		if graph.side_loops_back(edge.source_id, edge.target_id):
			logger.debug("double bond %d lies in a cycle, leaving it", edge.id)
			continue
		source_side = graph.get_side_vertex_ids(edge.source_id, edge.target_id)
		target_side = graph.get_side_vertex_ids(edge.target_id, edge.source_id)
		side = target_side
		if len(source_side) < len(target_side):
			side = source_side
		start = graph.vertices[edge.source_id].position
		end = graph.vertices[edge.target_id].position
		try:
			for vertex_id in sorted(side):
				vertex = graph.vertices[vertex_id]
				vertex.set_position(geometry.reflect_across_line(vertex.position, start, end))
		except LayoutDegeneracy:
			logger.debug("double bond %d has zero length, leaving it", edge.id)
			continue
		repaired += 1
	return repaired


#============================================
def _neighbour_z(graph, center_id, neighbour_id):
	edge = graph.get_edge(center_id, neighbour_id)
	wedge = edge.wedge
	sign = 1.0 if edge.source_id == center_id else -1.0
	if wedge == "up":
		return sign
	if wedge == "down":
		return -sign
	return 0.0


#============================================
def chirality_neighbours(graph, vertex_id):
	"""Return neighbour ids in written order, None marking an implicit one.

	A stereocenter written with only three neighbours gets an implicit
	fourth (hydrogen or lone pair) right after the preceding atom.
	"""
	vertex = graph.vertices[vertex_id]
	ordered = vertex.ordered_neighbours()
	if len(ordered) == 3:
		index = 1 if vertex.parent_vertex_id is not None else 0
		ordered.insert(index, None)
	return ordered


#============================================
def signed_volume(graph, vertex_id):
	"""Return the signed volume spanned by the neighbours in written order.

	Negative volumes correspond to '@' and positive ones to '@@'.

	Args:
		graph: Placed graph.
		vertex_id: Stereocenter id.

	Returns:
		float: The signed volume, 0.0 when it cannot be derived.
	"""
	center = graph.vertices[vertex_id]
	ordered = chirality_neighbours(graph, vertex_id)
	if len(ordered) != 4:
		return 0.0
	vectors = []
	explicit_z = 0.0
	for neighbour_id in ordered:
		if neighbour_id is None:
			vectors.append(None)
			continue
		offset = geometry.sub(graph.vertices[neighbour_id].position, center.position)
		try:
			unit = geometry.normalize(offset)
		except LayoutDegeneracy:
			unit = (0.0, 0.0)
		z = _neighbour_z(graph, vertex_id, neighbour_id)
		if z:
			explicit_z = z
		vectors.append((unit[0], -unit[1], z))
	vectors = [(0.0, 0.0, -explicit_z) if vector is None else vector for vector in vectors]
	first = vectors[0]
	rows = [tuple(vector[axis] - first[axis] for axis in range(3)) for vector in vectors[1:]]
	return geometry.determinant3(rows)


#============================================
def derive_chirality(graph, vertex_id):
	"""Return '@', '@@' or '' from the drawn positions and wedges."""
	volume = signed_volume(graph, vertex_id)
	if volume < -VOLUME_EPSILON:
		return "@"
	if volume > VOLUME_EPSILON:
		return "@@"
	return ""


#============================================
def _wedge_rank(graph, vertex_id, edge):
	neighbour_id = edge.other(vertex_id)
	neighbour = graph.vertices[neighbour_id]
	atom = neighbour.value
	return (
		1 if graph.are_vertices_in_same_ring(vertex_id, neighbour_id) else 0,
		1 if atom.is_stereo_center else 0,
		0 if atom.is_hydrogen else 1,
		0 if atom.is_heteroatom else 1,
		graph.get_tree_depth(neighbour_id, vertex_id),
		neighbour_id,
	)


#============================================
def assign_wedges(graph):
	"""Give every stereocenter exactly one wedged bond matching its tag.

	Returns:
		list: Ids of the edges that received a wedge.
	"""
	wedged = []
	done_ids = []
	for vertex in graph.vertices:
		atom = vertex.value
		if not atom.is_stereo_center or atom.chirality not in ("@", "@@"):
			continue
		candidates = [
			edge for edge in graph.get_edges(vertex.id)
			if edge.order == 1 and not edge.wedge
		]
		candidates.sort(key=lambda edge: _wedge_rank(graph, vertex.id, edge))
		chosen = None
		for edge in candidates:
			original = (edge.source_id, edge.target_id)
			other_id = edge.other(vertex.id)
			edge.source_id, edge.target_id = vertex.id, other_id
			for direction in ("up", "down"):
				edge.set_wedge(direction)
				if _wedges_consistent(graph, [vertex.id] + done_ids):
					chosen = edge
					break
			if chosen is not None:
				break
			edge.set_wedge("")
			edge.source_id, edge.target_id = original
		if chosen is None:
			logger.debug("no wedge reproduces %s at vertex %d", atom.chirality, vertex.id)
			continue
		bond_semantics.canonicalize_wedge_edge(chosen, graph)
		wedged.append(chosen.id)
		done_ids.append(vertex.id)
	return wedged


#============================================
def _wedges_consistent(graph, vertex_ids):
	"""Return True when every listed stereocenter derives its own tag."""
	for vertex_id in vertex_ids:
		if derive_chirality(graph, vertex_id) != graph.vertices[vertex_id].value.chirality:
			return False
	return True


#============================================
def _visit_priorities(graph, start_id, center_id):
	"""Collect atomic-number spheres of one branch, breadth by depth.

	Each entry is parent_number * 1000 + atomic_number, repeated once per
	bond order; missing valences are filled with implied hydrogens.
	"""
	levels = []
	center_number = graph.vertices[center_id].value.atomic_number
	stack = [(start_id, center_id, 0, center_number, {center_id})]
	while stack:
		vertex_id, previous_id, depth, parent_number, visited = stack.pop()
		visited = visited | {vertex_id}
		vertex = graph.vertices[vertex_id]
		number = vertex.value.atomic_number
		while len(levels) <= depth:
			levels.append([])
		edge = graph.get_edge(vertex_id, previous_id)
		for _ in range(max(edge.order, 1)):
			levels[depth].append(parent_number * 1000 + number)
		if depth >= CIP_MAX_DEPTH - 1:
			continue
		bonds = 0
		for neighbour_id in vertex.neighbours:
			bonds += graph.get_edge(vertex_id, neighbour_id).order
			if neighbour_id not in visited:
				stack.append((neighbour_id, vertex_id, depth + 1, number, visited))
		implied = periodic_table.max_bonds(vertex.value.element) - bonds
		if vertex.value.is_aromatic:
			implied -= 1
		if vertex.value.bracket is not None:
			implied = vertex.value.hydrogen_count - vertex.value.stereo_hydrogens
			implied += vertex.value.folded_hydrogens
		for _ in range(max(implied, 0)):
			while len(levels) <= depth + 1:
				levels.append([])
			levels[depth + 1].append(number * 1000 + 1)
	for level in levels:
		level.sort(reverse=True)
	return levels


#============================================
def neighbour_priority_order(graph, vertex_id):
	"""Return written-order indices of the neighbours, highest priority first.

	Ties are broken by the written order.
	"""
	ordered = chirality_neighbours(graph, vertex_id)
	keys = []
	max_levels = 0
	max_entries = 0
	spheres = []
	for neighbour_id in ordered:
		if neighbour_id is None:
			levels = []
		else:
			levels = _visit_priorities(graph, neighbour_id, vertex_id)
		spheres.append(levels)
		max_levels = max(max_levels, len(levels))
		for level in levels:
			max_entries = max(max_entries, len(level))
	for index, levels in enumerate(spheres):
		padded = [level + [0] * (max_entries - len(level)) for level in levels]
		padded.extend([[0] * max_entries] * (max_levels - len(levels)))
		flat = [value for level in padded for value in level]
		keys.append((tuple(-value for value in flat), index))
	keys.sort()
	return [index for _, index in keys]


#============================================
def assign_cip_labels(graph):
	"""Set an approximate R/S label on every tagged stereocenter."""
	for vertex in graph.vertices:
		atom = vertex.value
		if not atom.is_stereo_center or atom.chirality not in ("@", "@@"):
			continue
		if len(chirality_neighbours(graph, vertex.id)) != 4:
			continue
		order = neighbour_priority_order(graph, vertex.id)
		for rank, index in enumerate(order):
			neighbour_id = chirality_neighbours(graph, vertex.id)[index]
			if neighbour_id is not None:
				graph.vertices[neighbour_id].value.priority = rank
		odd = geometry.parity_of_permutation(order) == -1
		is_clockwise_tag = atom.chirality == "@@"
		atom.cip_label = "R" if is_clockwise_tag != odd else "S"
