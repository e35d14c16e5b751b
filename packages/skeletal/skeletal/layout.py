#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Staged 2D layout of a molecule graph.

The engine moves through the stages in LAYOUT_STAGES exactly once per
run. Tree placement walks the spanning tree with an explicit worklist
and lays out each ring system the first time the walk enters it; the
ring stage then settles ring geometry before overlap resolution and the
stereo corrections.
"""

# Standard Library
import collections
import logging
import math

# local repo modules
from . import bridged_layout
from . import geometry
from . import ring as ring_module
from . import stereo
from .errors import LayoutDegeneracy
from .options import LayoutOptions
from .overlap import OverlapResolver


logger = logging.getLogger(__name__)

STAGE_UNPLACED = "unplaced"
STAGE_TREE_PLACED = "tree_placed"
STAGE_RING_PLACED = "ring_placed"
STAGE_OVERLAP_RESOLVED = "overlap_resolved"
STAGE_STEREO_ADJUSTED = "stereo_adjusted"
STAGE_DONE = "done"
LAYOUT_STAGES = (
	STAGE_UNPLACED,
	STAGE_TREE_PLACED,
	STAGE_RING_PLACED,
	STAGE_OVERLAP_RESOLVED,
	STAGE_STEREO_ADJUSTED,
	STAGE_DONE,
)

DEFAULT_CHAIN_ANGLE = math.radians(60.0)
ROOT_ANGLE = math.radians(-60.0)


#============================================
class LayoutEngine:
	"""Compute 2D coordinates for every vertex of a graph.

	Args:
		graph: Graph after ring perception.
		options: LayoutOptions, defaults when None.
	"""

	def __init__(self, graph, options=None):
		self.graph = graph
		self.options = options or LayoutOptions()
		self.stage = STAGE_UNPLACED
		self.stage_history = [STAGE_UNPLACED]
		self.resolver = OverlapResolver(graph, self.options)
		self.total_overlap_score = 0.0
		self.wedged_edge_ids = []
		self._pending = []

	#============================================
	def run(self):
		"""Run every stage in order and return the graph."""
		if self.stage != STAGE_UNPLACED:
			raise RuntimeError(f"layout already ran up to stage {self.stage}")
		self._advance(STAGE_TREE_PLACED, self._place_tree)
		self._advance(STAGE_RING_PLACED, self._finalize_rings)
		self._advance(STAGE_OVERLAP_RESOLVED, self._resolve_overlaps)
		self._advance(STAGE_STEREO_ADJUSTED, self._adjust_stereo)
		self._advance(STAGE_DONE, self._finish)
		return self.graph

	#============================================
	def _advance(self, stage, step):
		expected = LAYOUT_STAGES[LAYOUT_STAGES.index(self.stage) + 1]
		if stage != expected:
			raise RuntimeError(f"cannot move from stage {self.stage} to {stage}")
		step()
		self.stage = stage
		self.stage_history.append(stage)
		logger.debug("layout stage %s reached", stage)

	#============================================
	# tree placement
	#============================================
	def _place_tree(self):
		right_edge = None
		for component in self.graph.get_components():
			root_id = component[0]
			if self.graph.vertices[root_id].positioned:
				continue
			self._walk(root_id)
			if right_edge is not None:
				self._shift_component(component, right_edge)
			right_edge = max(self.graph.vertices[vertex_id].x for vertex_id in component)

	#============================================
	def _shift_component(self, component, right_edge):
		left = min(self.graph.vertices[vertex_id].x for vertex_id in component)
		delta_x = right_edge + 2.0 * self.options.bond_length - left
		for vertex_id in component:
			vertex = self.graph.vertices[vertex_id]
			vertex.set_position((vertex.x + delta_x, vertex.y))
			vertex.previous_position = (vertex.previous_position[0] + delta_x, vertex.previous_position[1])

	#============================================
	def _walk(self, root_id):
		"""Depth-first placement from root_id with an explicit worklist."""
		self._pending = [(root_id, None, 0.0, False)]
		while self._pending:
			vertex_id, previous_id, angle, origin_shortest = self._pending.pop()
			frames = self._create_next_bond(vertex_id, previous_id, angle, origin_shortest)
			self._pending.extend(reversed(frames))

	#============================================
	def _create_next_bond(self, vertex_id, previous_id, angle, origin_shortest):
		"""Place one vertex and return the frames of the vertices after it.

		Args:
			vertex_id: Vertex to place.
			previous_id: Already placed neighbour, None for the root.
			angle: Absolute direction of the bond from previous_id.
			origin_shortest: The way back to the root is the shortest subtree.

		Returns:
			list: (vertex_id, previous_id, angle, origin_shortest) frames.
		"""
		vertex = self.graph.vertices[vertex_id]
		if vertex.positioned:
			return []
		if previous_id is None:
			self._place_root(vertex)
		elif self.graph.vertices[previous_id].value.rings:
			self._place_after_ring_atom(vertex, self.graph.vertices[previous_id])
		else:
			previous = self.graph.vertices[previous_id]
			vertex.set_position(geometry.add(previous.position, geometry.from_angle(angle, self.options.bond_length)))
			vertex.previous_position = previous.position
			vertex.positioned = True
		if vertex.value.rings:
			already_placed = all(self.graph.get_ring(ring_id).positioned for ring_id in vertex.value.rings)
			frames = self._place_ring_system(vertex)
			if previous_id is not None and not already_placed:
				self._align_junction_entry(vertex, self.graph.vertices[previous_id])
			return frames
		frames = self._chain_frames(vertex, previous_id, origin_shortest)
		return self._orient_double_bond(vertex, previous_id, frames)

	#============================================
	def _place_root(self, vertex):
		bond_length = self.options.bond_length
		vertex.previous_position = geometry.rotate((bond_length, 0.0), ROOT_ANGLE)
		vertex.set_position((bond_length, 0.0))
		vertex.angle = ROOT_ANGLE
		vertex.positioned = True

	#============================================
	def _place_after_ring_atom(self, vertex, previous):
		"""Place a substituent pointing straight out of its ring atom."""
		graph = self.graph
		joined = self._joined_neighbour(previous)
		if joined is not None:
			position = geometry.rotate_around(joined.position, previous.position, math.pi)
		else:
			total = (0.0, 0.0)
			for neighbour_id in previous.neighbours:
				neighbour = graph.vertices[neighbour_id]
				if neighbour.positioned and graph.are_vertices_in_same_ring(neighbour_id, previous.id):
					total = geometry.add(total, geometry.sub(neighbour.position, previous.position))
			try:
				direction = geometry.normalize(geometry.scale(total, -1.0))
			except LayoutDegeneracy:
				direction = self._away_from_rings(previous)
			position = geometry.add(previous.position, geometry.scale(direction, self.options.bond_length))
		vertex.previous_position = previous.position
		vertex.set_position(position)
		vertex.positioned = True

	#============================================
	def _joined_neighbour(self, vertex):
		"""Return the placed neighbour sharing every ring of a fusion atom, or None."""
		if len(vertex.value.rings) < 2 or vertex.value.bridge_node:
			return None
		rings = set(vertex.value.rings)
		for neighbour_id in vertex.neighbours:
			neighbour = self.graph.vertices[neighbour_id]
			if neighbour.positioned and rings.issubset(neighbour.value.rings):
				return neighbour
		return None

	#============================================
	def _align_junction_entry(self, vertex, previous):
		"""Turn the side already placed before a fusion atom out of its rings.

		The ring system grows along the incoming bond, so a walk entering at
		an atom shared by two rings leaves the incoming side on top of the
		second ring. That side is rotated around the fusion atom until it
		points away from the joined ring neighbour, together with any of its
		vertices still waiting in the worklist.
		"""
		if set(previous.value.rings).intersection(vertex.value.rings):
			return
		joined = self._joined_neighbour(vertex)
		if joined is None:
			return
		target = geometry.rotate_around(joined.position, vertex.position, math.pi)
		try:
			current_angle = geometry.angle_of(geometry.sub(previous.position, vertex.position))
			target_angle = geometry.angle_of(geometry.sub(target, vertex.position))
		except LayoutDegeneracy:
			logger.debug("fusion atom %d has no entry direction, leaving it", vertex.id)
			return
		delta = geometry.normalize_angle(target_angle - current_angle)
		if abs(delta) < 1e-9:
			return
		if not self.resolver.rotate_subtree(previous.id, vertex.id, delta, vertex.position):
			return
		side = self.graph.get_side_vertex_ids(previous.id, vertex.id)
		for side_id in side:
			side_vertex = self.graph.vertices[side_id]
			side_vertex.previous_position = geometry.rotate_around(
				side_vertex.previous_position, vertex.position, delta,
			)
		vertex.previous_position = previous.position
		self._pending = [
			(frame[0], frame[1], frame[2] + delta, frame[3]) if frame[0] in side else frame
			for frame in self._pending
		]
		logger.debug("turned entry side of fusion atom %d by %.3f rad", vertex.id, delta)

	#============================================
	def _orient_double_bond(self, vertex, previous_id, frames):
		"""Mirror the fan of a double-bond atom to match its '/' and '\\' marks.

		The reference is the marked substituent of the already placed end of
		the double bond. When that substituent is still unplaced the frames
		are returned unchanged and the stereo stage repairs the bond.
		"""
		if previous_id is None or not frames:
			return frames
		graph = self.graph
		previous = graph.vertices[previous_id]
		edge = graph.get_edge(vertex.id, previous_id)
		if edge is None or edge.order != 2 or graph.is_ring_edge(edge):
			return frames
		reference_id, reference_sign = stereo.marked_substituent(graph, previous_id, vertex.id)
		own_id, own_sign = stereo.marked_substituent(graph, vertex.id, previous_id)
		if reference_id is None or own_id is None or not graph.vertices[reference_id].positioned:
			return frames
		angles = {frame[0]: frame[2] for frame in frames}
		if own_id not in angles:
			return frames
		candidate = geometry.add(vertex.position, geometry.from_angle(angles[own_id], self.options.bond_length))
		reference_side = geometry.side_of_line(graph.vertices[reference_id].position, previous.position, vertex.position)
		own_side = geometry.side_of_line(candidate, previous.position, vertex.position)
		if reference_side == 0 or own_side == 0:
			return frames
		if (reference_side == own_side) == (reference_sign == own_sign):
			return frames
		axis = self._incoming_angle(vertex)
		mirrored = []
		for neighbour_id, previous_vertex_id, angle, origin_shortest in frames:
			neighbour = graph.vertices[neighbour_id]
			if neighbour.angle:
				neighbour.angle = -neighbour.angle
			mirrored.append((neighbour_id, previous_vertex_id, 2.0 * axis - angle, origin_shortest))
		return mirrored

	#============================================
	def _away_from_rings(self, vertex):
		"""Unit direction from the centroid of a vertex's rings to the vertex."""
		centers = [self.graph.get_ring(ring_id).centroid for ring_id in vertex.value.rings]
		try:
			return geometry.normalize(geometry.sub(vertex.position, geometry.centroid(centers)))
		except LayoutDegeneracy:
			logger.debug("vertex %d sits on its ring center, using default direction", vertex.id)
			return (1.0, 0.0)

	#============================================
	def _incoming_angle(self, vertex):
		try:
			return vertex.get_angle()
		except LayoutDegeneracy:
			logger.debug("vertex %d has no incoming direction, using 0", vertex.id)
			return 0.0

	#============================================
	def _last_angle(self, vertex):
		"""Return the first non-zero turn angle found walking towards the root."""
		current = vertex
		while current is not None:
			if current.angle:
				return current.angle
			if current.parent_vertex_id is None:
				break
			current = self.graph.vertices[current.parent_vertex_id]
		return DEFAULT_CHAIN_ANGLE

	#============================================
	def _center_of_mass(self):
		points = [vertex.position for vertex in self.graph.vertices if vertex.positioned]
		return geometry.centroid(points)

	#============================================
	def _chain_frames(self, vertex, previous_id, origin_shortest=False):
		"""Choose directions for the unplaced chain neighbours of a vertex."""
		graph = self.graph
		neighbours = [
			neighbour_id for neighbour_id in vertex.neighbours
			if neighbour_id != previous_id
			and not graph.vertices[neighbour_id].positioned
			and graph.vertices[neighbour_id].value.is_drawn
		]
		if not neighbours:
			return []
		previous = graph.vertices[previous_id] if previous_id is not None else None
		previous_angle = self._incoming_angle(vertex)
		if previous is None and len(neighbours) > 2:
			return self._spread_frames(vertex, neighbours, previous_angle, full_circle=True)
		if len(neighbours) == 1:
			return self._single_frames(vertex, previous, neighbours[0], previous_angle, origin_shortest)
		if len(neighbours) == 2:
			return self._pair_frames(vertex, previous, neighbours, previous_angle)
		if len(neighbours) == 3:
			return self._triple_frames(vertex, previous, neighbours, previous_angle)
		if len(neighbours) == 4:
			return self._quadruple_frames(vertex, neighbours, previous_angle)
		return self._spread_frames(vertex, neighbours, previous_angle, full_circle=False)

	#============================================
	def _single_frames(self, vertex, previous, next_id, previous_angle, origin_shortest=False):
		graph = self.graph
		next_vertex = graph.vertices[next_id]
		edge_out = graph.get_edge(vertex.id, next_id)
		edge_in = graph.get_edge(vertex.id, previous.id) if previous is not None else None
		is_triple = edge_out.order == 3 or (edge_in is not None and edge_in.order == 3)
		is_cumulated = (
			edge_in is not None
			and edge_in.order == 2
			and edge_out.order == 2
			and not previous.value.rings
		)
		if is_triple or is_cumulated:
			if edge_in is not None:
				edge_in.center = True
			edge_out.center = True
			next_vertex.angle = 0.0
			return [(next_id, vertex.id, previous_angle, False)]
		if previous is not None and previous.value.rings:
			# leaving a ring: bend away from everything placed so far
			center = self._center_of_mass()
			best = None
			for turn in (DEFAULT_CHAIN_ANGLE, -DEFAULT_CHAIN_ANGLE):
				proposal = geometry.add(
					vertex.position,
					geometry.from_angle(previous_angle + turn, self.options.bond_length),
				)
				score = geometry.distance_sq(proposal, center)
				if best is None or score > best[0]:
					best = (score, turn)
			next_vertex.angle = best[1]
			return [(next_id, vertex.id, previous_angle + next_vertex.angle, False)]
		turn = vertex.angle
		if previous is not None and len(previous.neighbours) > 3:
			if turn and turn > 0:
				turn = min(DEFAULT_CHAIN_ANGLE, turn)
			elif turn and turn < 0:
				turn = max(-DEFAULT_CHAIN_ANGLE, turn)
			else:
				turn = DEFAULT_CHAIN_ANGLE
		elif not turn:
			turn = self._last_angle(vertex)
		next_vertex.angle = turn if origin_shortest else -turn
		return [(next_id, vertex.id, previous_angle + next_vertex.angle, False)]

	#============================================
	def _pair_frames(self, vertex, previous, neighbours, previous_angle):
		graph = self.graph
		turn = vertex.angle or DEFAULT_CHAIN_ANGLE
		first = graph.vertices[neighbours[0]]
		second = graph.vertices[neighbours[1]]
		first_depth = graph.get_tree_depth(first.id, vertex.id)
		second_depth = graph.get_tree_depth(second.id, vertex.id)
		first.value.subtree_depth = first_depth
		second.value.subtree_depth = second_depth
		origin_depth = 0
		if previous is not None:
			origin_depth = graph.get_tree_depth(previous.id, vertex.id)
		cis_vertex, trans_vertex = first, second
		if second.value.element == "C" and first.value.element != "C" and second_depth > 1 and first_depth < 5:
			cis_vertex, trans_vertex = second, first
		elif second.value.element != "C" and first.value.element == "C" and first_depth > 1 and second_depth < 5:
			cis_vertex, trans_vertex = first, second
		elif second_depth > first_depth:
			cis_vertex, trans_vertex = second, first
		origin_shortest = (
			previous is not None
			and origin_depth < first_depth
			and origin_depth < second_depth
		)
		trans_vertex.angle = turn
		cis_vertex.angle = -turn
		return [
			(trans_vertex.id, vertex.id, previous_angle + trans_vertex.angle, origin_shortest),
			(cis_vertex.id, vertex.id, previous_angle + cis_vertex.angle, origin_shortest),
		]

	#============================================
	def _triple_frames(self, vertex, previous, neighbours, previous_angle):
		graph = self.graph
		depths = [graph.get_tree_depth(neighbour_id, vertex.id) for neighbour_id in neighbours]
		for neighbour_id, depth in zip(neighbours, depths):
			graph.vertices[neighbour_id].value.subtree_depth = depth
		straight, left, right = neighbours
		if depths[1] > depths[0] and depths[1] > depths[2]:
			straight, left, right = neighbours[1], neighbours[0], neighbours[2]
		elif depths[2] > depths[0] and depths[2] > depths[1]:
			straight, left, right = neighbours[2], neighbours[0], neighbours[1]
		depth_of = dict(zip(neighbours, depths))
		no_rings = all(
			not graph.vertices[vertex_id].value.rings
			for vertex_id in (straight, left, right)
		)
		turn = vertex.angle or 0.0
		if (
			previous is not None
			and not previous.value.rings
			and no_rings
			and depth_of[left] == 1
			and depth_of[right] == 1
			and depth_of[straight] > 1
		):
			# cross layout: long branch continues the zig-zag, two stubs fan out
			angles = {straight: -turn}
			if turn >= 0:
				angles[left] = math.radians(30.0)
				angles[right] = math.radians(90.0)
			else:
				angles[left] = -math.radians(30.0)
				angles[right] = -math.radians(90.0)
		else:
			angles = {straight: 0.0, left: math.radians(90.0), right: -math.radians(90.0)}
		frames = []
		for vertex_id in (straight, left, right):
			graph.vertices[vertex_id].angle = angles[vertex_id]
			frames.append((vertex_id, vertex.id, previous_angle + angles[vertex_id], False))
		return frames

	#============================================
	def _quadruple_frames(self, vertex, neighbours, previous_angle):
		graph = self.graph
		depths = [graph.get_tree_depth(neighbour_id, vertex.id) for neighbour_id in neighbours]
		ordered = list(neighbours)
		for index in (1, 2, 3):
			others = [depths[other] for other in range(4) if other != index]
			if depths[index] > max(others):
				ordered = [neighbours[index]] + [neighbours[other] for other in range(4) if other != index]
				break
		turns = (-math.radians(36.0), math.radians(36.0), -math.radians(108.0), math.radians(108.0))
		frames = []
		for vertex_id, turn in zip(ordered, turns):
			graph.vertices[vertex_id].angle = turn
			frames.append((vertex_id, vertex.id, previous_angle + turn, False))
		return frames

	#============================================
	def _spread_frames(self, vertex, neighbours, previous_angle, full_circle):
		"""Spread neighbours evenly, leaving the incoming direction free."""
		count = len(neighbours)
		frames = []
		for index, neighbour_id in enumerate(neighbours):
			if full_circle:
				turn = index * 2.0 * math.pi / count
			else:
				turn = -math.pi + (index + 1) * 2.0 * math.pi / (count + 1)
			self.graph.vertices[neighbour_id].angle = turn
			frames.append((neighbour_id, vertex.id, previous_angle + turn, False))
		return frames

	#============================================
	# ring systems
	#============================================
	def _bridged_group(self, ring_id):
		"""Return ring ids joined to ring_id through bridged connections."""
		graph = self.graph
		group = {ring_id}
		queue = collections.deque([ring_id])
		while queue:
			current_id = queue.popleft()
			for neighbour_id in graph.get_ring(current_id).neighbours:
				if neighbour_id in group:
					continue
				if self._is_bridged_connection(current_id, neighbour_id):
					group.add(neighbour_id)
					queue.append(neighbour_id)
		return sorted(group)

	#============================================
	def _is_bridged_connection(self, first_id, second_id):
		"""Bridge connections, plus two rings sharing two unbonded vertices."""
		connections = self.graph.ring_connections
		if ring_module.is_bridge(connections, first_id, second_id):
			return True
		shared = sorted(ring_module.get_vertices(connections, first_id, second_id))
		if len(shared) == 2 and not self.graph.has_edge(shared[0], shared[1]):
			return True
		return False

	#============================================
	def _entry_unit(self, vertex):
		"""Pick the rings laid out first when the walk enters a ring system."""
		graph = self.graph
		rings = [graph.get_ring(ring_id) for ring_id in vertex.value.rings]
		for ring in rings:
			group = self._bridged_group(ring.id)
			if len(group) > 1:
				return group
		largest = max(rings, key=lambda ring: (ring.size, -ring.id))
		return [largest.id]

	#============================================
	def _place_ring_system(self, vertex):
		"""Lay out every ring of the system containing vertex.

		Returns:
			list: Frames for the substituents of the system.
		"""
		graph = self.graph
		if all(graph.get_ring(ring_id).positioned for ring_id in vertex.value.rings):
			return []
		bond_length = self.options.bond_length
		try:
			direction = geometry.normalize(geometry.sub(vertex.position, vertex.previous_position))
		except LayoutDegeneracy:
			logger.debug("ring entry %d has no incoming direction, using default", vertex.id)
			direction = (1.0, 0.0)
		entry = self._entry_unit(vertex)
		size = len(self._unit_members(entry))
		center = geometry.add(vertex.position, geometry.scale(direction, geometry.poly_circumradius(bond_length, size)))
		placed = []
		queued = set(entry)
		queue = collections.deque([(entry, center, vertex.id, None)])
		while queue:
			unit, unit_center, start_id, previous_id = queue.popleft()
			if len(unit) > 1 or graph.get_ring(unit[0]).is_bridged:
				self._place_bridged_unit(unit, unit_center)
			else:
				self._place_ring(graph.get_ring(unit[0]), unit_center, start_id, previous_id)
			placed.extend(unit)
			for ring_id in unit:
				current = graph.get_ring(ring_id)
				neighbours = sorted(
					current.neighbours,
					key=lambda neighbour_id: (-graph.get_ring(neighbour_id).size, neighbour_id),
				)
				for neighbour_id in neighbours:
					if neighbour_id in queued or graph.get_ring(neighbour_id).positioned:
						continue
					item = self._neighbour_unit(current, neighbour_id)
					queued.update(item[0])
					queue.append(item)
		return self._substituent_frames(placed)

	#============================================
	def _unit_members(self, unit):
		"""Members of a ring unit in literal order without repeats."""
		members = []
		for ring_id in unit:
			for vertex_id in self.graph.get_ring(ring_id).members:
				if vertex_id not in members:
					members.append(vertex_id)
		return members

	#============================================
	def _neighbour_unit(self, current, neighbour_id):
		"""Return the queue item placing neighbour_id next to a placed ring."""
		graph = self.graph
		bond_length = self.options.bond_length
		group = self._bridged_group(neighbour_id)
		shared = sorted(ring_module.get_vertices(graph.ring_connections, current.id, neighbour_id))
		if len(group) > 1 or self._is_bridged_connection(current.id, neighbour_id):
			anchor = geometry.centroid(graph.vertices[vertex_id].position for vertex_id in shared)
			radius = geometry.poly_circumradius(bond_length, max(len(self._unit_members(group)), 3))
			try:
				direction = geometry.normalize(geometry.sub(anchor, current.centroid))
			except LayoutDegeneracy:
				direction = (1.0, 0.0)
			return (group, geometry.add(anchor, geometry.scale(direction, radius)), None, None)
		neighbour = graph.get_ring(neighbour_id)
		radius = geometry.poly_circumradius(bond_length, neighbour.size)
		if len(shared) == 2:
			first = graph.vertices[shared[0]].position
			second = graph.vertices[shared[1]].position
			midpoint = geometry.midpoint(first, second)
			try:
				normal = geometry.normalize(geometry.rotate(geometry.sub(second, first), math.pi / 2.0))
			except LayoutDegeneracy:
				normal = (0.0, 1.0)
			apothem = geometry.apothem(radius, neighbour.size)
			candidate_a = geometry.add(midpoint, geometry.scale(normal, apothem))
			candidate_b = geometry.sub(midpoint, geometry.scale(normal, apothem))
			next_center = candidate_a
			if geometry.distance_sq(current.centroid, candidate_b) > geometry.distance_sq(current.centroid, candidate_a):
				next_center = candidate_b
			if geometry.cross(geometry.sub(first, next_center), geometry.sub(second, next_center)) < 0:
				return ([neighbour_id], next_center, shared[0], shared[1])
			return ([neighbour_id], next_center, shared[1], shared[0])
		shared_position = graph.vertices[shared[0]].position
		try:
			direction = geometry.normalize(geometry.sub(shared_position, current.centroid))
		except LayoutDegeneracy:
			direction = (1.0, 0.0)
		next_center = geometry.add(shared_position, geometry.scale(direction, radius))
		return ([neighbour_id], next_center, shared[0], None)

	#============================================
	def _place_ring(self, ring, center, start_id, previous_id):
		"""Lay out one ring as a regular polygon around center.

		Walking from start_id away from previous_id, each unplaced member
		goes one central angle further counterclockwise.
		"""
		graph = self.graph
		size = ring.size
		radius = geometry.poly_circumradius(self.options.bond_length, size)
		step = geometry.central_angle(size)
		if start_id not in ring.members:
			start_id = ring.members[0]
			previous_id = None
		start = graph.vertices[start_id]
		angle = 0.0
		if start.positioned:
			try:
				angle = geometry.angle_of(geometry.sub(start.position, center))
			except LayoutDegeneracy:
				logger.debug("ring %d start sits on its center, using angle 0", ring.id)
		index = ring.members.index(start_id)
		direction = 1
		if previous_id is not None and ring.members[(index + 1) % size] == previous_id:
			direction = -1
		for offset in range(size):
			member = graph.vertices[ring.members[(index + direction * offset) % size]]
			if not member.positioned:
				member.set_position(geometry.add(center, geometry.from_angle(angle, radius)))
				member.positioned = True
			angle += step
		ring.positioned = True
		ring.centroid = center
		ring.circumradius = radius

	#============================================
	def _place_bridged_unit(self, unit, center):
		"""Seed a bridged group on a circle and relax it."""
		graph = self.graph
		members = self._unit_members(unit)
		fixed_ids = {vertex_id for vertex_id in members if graph.vertices[vertex_id].positioned}
		bridged_layout.seed_on_circle(graph, members, center, self.options.bond_length)
		bridged_layout.relax(graph, members, fixed_ids, self.options.bond_length)
		for vertex_id in members:
			graph.vertices[vertex_id].positioned = True
			graph.vertices[vertex_id].force_positioned = vertex_id not in fixed_ids
		for ring_id in unit:
			ring = graph.get_ring(ring_id)
			ring.positioned = True
			self._update_ring_geometry(ring)

	#============================================
	def _update_ring_geometry(self, ring):
		points = [self.graph.vertices[vertex_id].position for vertex_id in ring.members]
		ring.centroid = geometry.centroid(points)
		ring.circumradius = sum(geometry.distance(point, ring.centroid) for point in points) / len(points)

	#============================================
	def _substituent_frames(self, ring_ids):
		graph = self.graph
		frames = []
		for ring_id in ring_ids:
			for member_id in graph.get_ring(ring_id).members:
				member = graph.vertices[member_id]
				for neighbour_id in member.neighbours:
					neighbour = graph.vertices[neighbour_id]
					if neighbour.positioned or not neighbour.value.is_drawn:
						continue
					neighbour.value.is_connected_to_ring = True
					frames.append((neighbour_id, member_id, 0.0, False))
		return frames

	#============================================
	# ring stage
	#============================================
	def _finalize_rings(self):
		self._resolve_primary_overlaps()
		self._collapse_hidden_atoms()
		for ring in self.graph.rings:
			if ring.positioned:
				self._update_ring_geometry(ring)

	#============================================
	def _non_ring_neighbours(self, vertex):
		graph = self.graph
		rings = set(vertex.value.rings)
		result = []
		for neighbour_id in vertex.neighbours:
			neighbour = graph.vertices[neighbour_id]
			if rings.intersection(neighbour.value.rings):
				continue
			result.append(neighbour_id)
		return result

	#============================================
	def _resolve_primary_overlaps(self):
		"""Spread two substituents that leave one ring atom in the same direction."""
		graph = self.graph
		resolver = self.resolver
		done = set()
		for ring in graph.rings:
			for member_id in ring.members:
				if member_id in done:
					continue
				done.add(member_id)
				member = graph.vertices[member_id]
				substituents = self._non_ring_neighbours(member)
				if len(substituents) != 2:
					continue
				first_id, second_id = substituents
				if not graph.vertices[first_id].value.is_drawn or not graph.vertices[second_id].value.is_drawn:
					continue
				first_ring = graph.get_ring(member.value.rings[0])
				spread = (2.0 * math.pi - geometry.inner_angle(first_ring.size)) / 6.0
				center = member.position
				resolver.rotate_subtree(first_id, member_id, spread, center)
				resolver.rotate_subtree(second_id, member_id, -spread, center)
				_, scores = resolver.get_overlap_score()
				total = (
					resolver.get_subtree_overlap_score(first_id, member_id, scores)[0]
					+ resolver.get_subtree_overlap_score(second_id, member_id, scores)[0]
				)
				resolver.rotate_subtree(first_id, member_id, -2.0 * spread, center)
				resolver.rotate_subtree(second_id, member_id, 2.0 * spread, center)
				_, scores = resolver.get_overlap_score()
				flipped = (
					resolver.get_subtree_overlap_score(first_id, member_id, scores)[0]
					+ resolver.get_subtree_overlap_score(second_id, member_id, scores)[0]
				)
				if flipped > total:
					resolver.rotate_subtree(first_id, member_id, 2.0 * spread, center)
					resolver.rotate_subtree(second_id, member_id, -2.0 * spread, center)

	#============================================
	def _collapse_hidden_atoms(self):
		"""Put atoms hidden inside pseudo elements on their carrier atom."""
		graph = self.graph
		for vertex in graph.vertices:
			if vertex.value.is_drawn:
				continue
			for neighbour_id in vertex.neighbours:
				carrier = graph.vertices[neighbour_id]
				if carrier.value.is_drawn and carrier.positioned:
					vertex.previous_position = carrier.position
					vertex.set_position(carrier.position)
					vertex.positioned = True
					break

	#============================================
	# overlap, stereo, done
	#============================================
	def _resolve_overlaps(self):
		self.total_overlap_score = self.resolver.resolve(self.options.overlap_resolution_iterations)

	#============================================
	def _adjust_stereo(self):
		self.wedged_edge_ids = stereo.adjust(self.graph)

	#============================================
	def _finish(self):
		"""Guarantee a finite position for every vertex."""
		graph = self.graph
		for vertex in graph.vertices:
			if vertex.positioned and geometry.is_finite(vertex.position):
				continue
			anchor = (0.0, 0.0)
			for neighbour_id in vertex.neighbours:
				neighbour = graph.vertices[neighbour_id]
				if neighbour.positioned and geometry.is_finite(neighbour.position):
					anchor = geometry.add(neighbour.position, (self.options.bond_length, 0.0))
					break
			logger.debug("vertex %d had no position, placing it at %s", vertex.id, anchor)
			vertex.set_position(anchor)
			vertex.positioned = True
		self.total_overlap_score = self.resolver.refresh_total()
		if self.options.debug:
			logger.info(
				"layout done: %d vertices, %d rings, overlap score %.4f",
				len(graph.vertices), len(graph.rings), self.total_overlap_score,
			)
