#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Stress-majorization relaxation for bridged ring systems."""

# Standard Library
import collections
import logging
import math

# local repo modules
from . import geometry
from .errors import LayoutDegeneracy


logger = logging.getLogger(__name__)

MAX_ITERATIONS = 200
TOLERANCE = 1e-4


#============================================
def graph_distances(graph, member_ids):
	"""Return topological distances inside the subgraph induced by member_ids.

	Args:
		graph: Graph owning the vertices.
		member_ids: Vertex ids of the bridged system.

	Returns:
		dict: (first_id, second_id) -> number of bonds on the shortest path.
	"""
	members = set(member_ids)
	distances = {}
	for source_id in member_ids:
		seen = {source_id: 0}
		queue = collections.deque([source_id])
		while queue:
			current_id = queue.popleft()
			for neighbour_id in graph.vertices[current_id].neighbours:
				if neighbour_id not in members or neighbour_id in seen:
					continue
				seen[neighbour_id] = seen[current_id] + 1
				queue.append(neighbour_id)
		for target_id, hops in seen.items():
			if target_id != source_id:
				distances[(source_id, target_id)] = hops
	return distances


#============================================
def seed_on_circle(graph, member_ids, center, bond_length):
	"""Place unpositioned members on a circle in their literal order.

	The sequence starts at the first already positioned member when there
	is one, so the seed continues from the fixed geometry.
	"""
	count = len(member_ids)
	radius = geometry.poly_circumradius(bond_length, max(count, 3))
	step = geometry.central_angle(max(count, 3))
	start_index = 0
	start_angle = 0.0
	for index, vertex_id in enumerate(member_ids):
		vertex = graph.vertices[vertex_id]
		if vertex.positioned:
			start_index = index
			try:
				start_angle = geometry.angle_of(geometry.sub(vertex.position, center))
			except LayoutDegeneracy:
				logger.debug("bridged seed anchor sits on the center, using angle 0")
			break
	angle = start_angle
	for offset in range(count):
		vertex = graph.vertices[member_ids[(start_index + offset) % count]]
		if not vertex.positioned:
			vertex.set_position(geometry.add(center, geometry.from_angle(angle, radius)))
		angle += step
	return radius


#============================================
def relax(graph, member_ids, fixed_ids, bond_length, iterations=MAX_ITERATIONS):
	"""Move free members so their distances match topological distances.

	Localized stress majorization: every free vertex in turn moves to the
	weighted average of the positions its neighbours would put it at.
	Vertices in fixed_ids never move.

	Args:
		graph: Graph owning the vertices.
		member_ids: Vertex ids of the bridged system in literal order.
		fixed_ids: Ids that keep their current positions.
		bond_length: Target length of one bond.
		iterations: Maximum number of sweeps.

	Returns:
		float: The final stress value.
	"""
	distances = graph_distances(graph, member_ids)
	free_ids = [vertex_id for vertex_id in member_ids if vertex_id not in fixed_ids]
	if not free_ids:
		return _stress(graph, distances, bond_length)
	previous_stress = _stress(graph, distances, bond_length)
	for sweep in range(iterations):
		for vertex_id in free_ids:
			_move_vertex(graph, vertex_id, member_ids, distances, bond_length, sweep)
		stress = _stress(graph, distances, bond_length)
		if previous_stress - stress < TOLERANCE * max(previous_stress, 1.0):
			previous_stress = stress
			break
		previous_stress = stress
	logger.debug("bridged relaxation stress %.4f over %d vertices", previous_stress, len(member_ids))
	return previous_stress


#============================================
def _move_vertex(graph, vertex_id, member_ids, distances, bond_length, sweep):
	point = graph.vertices[vertex_id].position
	sum_x = 0.0
	sum_y = 0.0
	weight_sum = 0.0
	for other_id in member_ids:
		if other_id == vertex_id:
			continue
		hops = distances.get((vertex_id, other_id))
		if hops is None:
			continue
		target = hops * bond_length
		weight = 1.0 / (target * target)
		other = graph.vertices[other_id].position
		offset = geometry.sub(point, other)
		try:
			direction = geometry.normalize(offset)
		except LayoutDegeneracy:
			# coincident points get pushed apart along a fixed, sweep-dependent direction
			direction = geometry.from_angle(0.5 + sweep + vertex_id)
		sum_x += weight * (other[0] + target * direction[0])
		sum_y += weight * (other[1] + target * direction[1])
		weight_sum += weight
	if weight_sum > 0:
		graph.vertices[vertex_id].set_position((sum_x / weight_sum, sum_y / weight_sum))


#============================================
def _stress(graph, distances, bond_length):
	total = 0.0
	for (first_id, second_id), hops in distances.items():
		if first_id > second_id:
			continue
		target = hops * bond_length
		actual = geometry.distance(graph.vertices[first_id].position, graph.vertices[second_id].position)
		if not math.isfinite(actual):
			return math.inf
		total += ((actual - target) / target) ** 2
	return total
