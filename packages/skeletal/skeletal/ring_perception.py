#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Smallest set of smallest rings and ring-connection perception."""

# Standard Library
import collections
import logging

# local repo modules
from .ring import Ring
from .ring import RingConnection


logger = logging.getLogger(__name__)


#============================================
def _label_key(label):
	"""Sort key for ring-closure labels mixing ints and strings."""
	if label is None:
		return (2, 0, "")
	if isinstance(label, int):
		return (0, label, "")
	text = str(label).lstrip("%")
	if text.isdigit():
		return (0, int(text), "")
	return (1, 0, text)


#============================================
def normalize_cycle(cycle):
	"""Rotate a cycle to start at its lowest id, heading to the lower neighbour.

	Args:
		cycle: Vertex ids in cycle order.

	Returns:
		list: The same cycle in canonical order.
	"""
	start = cycle.index(min(cycle))
	rotated = cycle[start:] + cycle[:start]
	if len(rotated) > 2 and rotated[-1] < rotated[1]:
		rotated = [rotated[0]] + list(reversed(rotated[1:]))
	return rotated


#============================================
class RingPerception:
	"""Single-use ring perception over one graph.

	Candidate cycles are the fundamental cycles of the ring-closure edges
	plus the shortest-path cycles of the cyclic core. Candidates are kept
	smallest first while they stay linearly independent over GF(2).
	"""

	def __init__(self, graph):
		self.graph = graph
		self._closure_label_of_edge = {}
		self._candidates = {}

	#============================================
	def run(self):
		graph = self.graph
		closure_edges = [edge for edge in graph.edges if edge.is_ring_closure]
		graph.rings = []
		graph.ring_connections = []
		if not closure_edges:
			return []
		self._index_closure_labels()
		bridges = set(graph.get_bridges())
		core_edge_ids = [edge.id for edge in graph.edges if edge.id not in bridges]
		for edge in closure_edges:
			self._add_candidate(self._fundamental_cycle(edge))
		self._add_shortest_path_cycles(core_edge_ids)
		for ring_id, (members, label) in enumerate(self._select_independent()):
			graph.rings.append(Ring(id=ring_id, members=members, closure_label=label))
		self._annotate_atoms()
		self._annotate_aromaticity()
		self._build_connections()
		logger.debug(
			"perceived %d ring(s) and %d connection(s)",
			len(graph.rings), len(graph.ring_connections),
		)
		return graph.rings

	#============================================
	def _index_closure_labels(self):
		for vertex in self.graph.vertices:
			for ring_bond in vertex.value.ringbonds:
				if ring_bond.partner_id is None:
					continue
				edge = self.graph.get_edge(vertex.id, ring_bond.partner_id)
				if edge is None or not edge.is_ring_closure:
					continue
				current = self._closure_label_of_edge.get(edge.id)
				if current is None or _label_key(ring_bond.label) < _label_key(current):
					self._closure_label_of_edge[edge.id] = ring_bond.label

	#============================================
	def _fundamental_cycle(self, edge):
		"""Return the spanning-tree path closed by one ring-closure edge."""
		vertices = self.graph.vertices
		source_path = [edge.source_id]
		while vertices[source_path[-1]].parent_vertex_id is not None:
			source_path.append(vertices[source_path[-1]].parent_vertex_id)
		source_depth = {vertex_id: depth for depth, vertex_id in enumerate(source_path)}
		target_path = [edge.target_id]
		while target_path[-1] not in source_depth:
			parent_id = vertices[target_path[-1]].parent_vertex_id
			if parent_id is None:
				return []
			target_path.append(parent_id)
		meeting_id = target_path[-1]
		cycle = source_path[:source_depth[meeting_id] + 1]
		cycle.extend(reversed(target_path[:-1]))
		return cycle

	#============================================
	def _add_shortest_path_cycles(self, core_edge_ids):
		"""Add candidates built from breadth-first shortest paths."""
		graph = self.graph
		adjacency = collections.defaultdict(list)
		for edge_id in core_edge_ids:
			edge = graph.edges[edge_id]
			adjacency[edge.source_id].append(edge.target_id)
			adjacency[edge.target_id].append(edge.source_id)
		for neighbours in adjacency.values():
			neighbours.sort()
		for root_id in sorted(adjacency):
			parents = {root_id: None}
			queue = collections.deque([root_id])
			while queue:
				current_id = queue.popleft()
				for neighbour_id in adjacency[current_id]:
					if neighbour_id not in parents:
						parents[neighbour_id] = current_id
						queue.append(neighbour_id)
			for edge_id in core_edge_ids:
				edge = graph.edges[edge_id]
				if edge.source_id not in parents or edge.target_id not in parents:
					continue
				if parents[edge.source_id] == edge.target_id:
					continue
				if parents[edge.target_id] == edge.source_id:
					continue
				first_path = self._path_to_root(parents, edge.source_id)
				second_path = self._path_to_root(parents, edge.target_id)
				if len(set(first_path) & set(second_path)) != 1:
					continue
				# root .. source, then target .. back towards root
				self._add_candidate(first_path[::-1] + second_path[:-1])

	#============================================
	@staticmethod
	def _path_to_root(parents, vertex_id):
		path = [vertex_id]
		while parents[path[-1]] is not None:
			path.append(parents[path[-1]])
		return path

	#============================================
	def _cycle_edge_ids(self, cycle):
		edge_ids = []
		for index, vertex_id in enumerate(cycle):
			next_id = cycle[(index + 1) % len(cycle)]
			edge = self.graph.get_edge(vertex_id, next_id)
			if edge is None:
				return None
			edge_ids.append(edge.id)
		return edge_ids

	#============================================
	def _add_candidate(self, cycle):
		if len(cycle) < 3 or len(set(cycle)) != len(cycle):
			return
		edge_ids = self._cycle_edge_ids(cycle)
		if edge_ids is None:
			return
		mask = 0
		for edge_id in edge_ids:
			mask |= 1 << edge_id
		if mask in self._candidates:
			return
		labels = [
			self._closure_label_of_edge[edge_id]
			for edge_id in edge_ids
			if edge_id in self._closure_label_of_edge
		]
		label = min(labels, key=_label_key) if labels else None
		self._candidates[mask] = (normalize_cycle(cycle), label)

	#============================================
	def _select_independent(self):
		"""Keep the smallest candidates that are independent over GF(2)."""
		graph = self.graph
		rank = len(graph.edges) - len(graph.vertices) + len(graph.get_components())
		ordered = sorted(
			self._candidates.items(),
			key=lambda item: (len(item[1][0]), _label_key(item[1][1]), item[1][0]),
		)
		basis = {}
		kept = []
		for mask, (members, label) in ordered:
			if len(kept) >= rank:
				break
			reduced = mask
			while reduced:
				pivot = reduced.bit_length() - 1
				if pivot not in basis:
					break
				reduced ^= basis[pivot]
			if not reduced:
				continue
			basis[reduced.bit_length() - 1] = reduced
			kept.append((members, label))
		return kept

	#============================================
	def _annotate_atoms(self):
		vertices = self.graph.vertices
		for ring in self.graph.rings:
			for vertex_id in ring.members:
				vertices[vertex_id].value.rings.append(ring.id)
			vertices[ring.members[0]].value.anchored_rings.append(ring.id)
		for vertex in vertices:
			if vertex.value.rings:
				continue
			for neighbour_id in vertex.neighbours:
				if vertices[neighbour_id].value.rings:
					vertex.value.is_connected_to_ring = True

	#============================================
	def _annotate_aromaticity(self):
		vertices = self.graph.vertices
		for ring in self.graph.rings:
			ring.is_aromatic = all(vertices[vertex_id].value.is_aromatic for vertex_id in ring.members)
			if not ring.is_aromatic:
				continue
			for vertex_id in ring.members:
				vertices[vertex_id].value.is_part_of_aromatic_ring = True
			for first_id, second_id in ring.edge_pairs():
				edge = self.graph.get_edge(first_id, second_id)
				edge.is_aromatic = True
				edge.is_part_of_aromatic_ring = True

	#============================================
	def _build_connections(self):
		graph = self.graph
		rings = graph.rings
		for first_index in range(len(rings)):
			first = rings[first_index]
			first_members = set(first.members)
			for second in rings[first_index + 1:]:
				shared = first_members.intersection(second.members)
				if not shared:
					continue
				connection = RingConnection(
					id=len(graph.ring_connections),
					first_ring_id=first.id,
					second_ring_id=second.id,
					vertices=shared,
				)
				graph.ring_connections.append(connection)
				first.neighbours.append(second.id)
				second.neighbours.append(first.id)
		for connection in graph.ring_connections:
			first = graph.get_ring(connection.first_ring_id)
			second = graph.get_ring(connection.second_ring_id)
			if connection.update_bridge(graph.vertices):
				first.is_bridged = True
				second.is_bridged = True
				for vertex_id in connection.vertices:
					graph.vertices[vertex_id].value.bridge_node = True
			elif len(connection.vertices) == 1:
				first.is_spiro = True
				second.is_spiro = True
			else:
				first.is_fused = True
				second.is_fused = True


#============================================
def perceive_rings(graph):
	"""Find the rings of a built graph and record them on it.

	Args:
		graph: Graph from the graph builder.

	Returns:
		list[Ring]: The smallest set of smallest rings.
	"""
	return RingPerception(graph).run()
