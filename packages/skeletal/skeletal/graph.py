#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Arena of vertices and edges addressed by dense integer ids."""

# Standard Library
import collections

# local repo modules
from .edge import Edge
from .vertex import Vertex


#============================================
class Graph:
	"""Molecule graph.

	Vertices and edges live in lists indexed by their ids. Rings and
	ring connections are filled in by ring perception, positions by the
	layout engine.
	"""

	def __init__(self, isomeric=True):
		self.isomeric = isomeric
		self.vertices = []
		self.edges = []
		self.rings = []
		self.ring_connections = []
		self.atom_idx_to_vertex_id = []
		self.vertex_ids_to_edge_id = {}

	def __repr__(self):
		return f"Graph(vertices={len(self.vertices)}, edges={len(self.edges)}, rings={len(self.rings)})"

	#============================================
	def add_vertex(self, atom):
		vertex = Vertex(len(self.vertices), atom)
		self.vertices.append(vertex)
		return vertex

	#============================================
	def add_edge(self, source_id, target_id, bond_type="-"):
		"""Create an edge and update bond counts of both endpoints.

		Args:
			source_id: Vertex id of the first endpoint.
			target_id: Vertex id of the second endpoint.
			bond_type: Bond symbol.

		Returns:
			Edge: The new edge.
		"""
		if source_id == target_id:
			raise ValueError(f"edge would connect vertex {source_id} to itself")
		edge = Edge(len(self.edges), source_id, target_id, bond_type)
		self.edges.append(edge)
		self.vertex_ids_to_edge_id[(source_id, target_id)] = edge.id
		self.vertex_ids_to_edge_id[(target_id, source_id)] = edge.id
		source = self.vertices[source_id]
		target = self.vertices[target_id]
		source.edges.append(edge.id)
		target.edges.append(edge.id)
		source.value.bond_count += edge.order
		target.value.bond_count += edge.order
		return edge

	#============================================
	def has_edge(self, first_id, second_id):
		return (first_id, second_id) in self.vertex_ids_to_edge_id

	#============================================
	def get_edge(self, first_id, second_id):
		"""Return the edge between two vertices, or None."""
		edge_id = self.vertex_ids_to_edge_id.get((first_id, second_id))
		if edge_id is None:
			return None
		return self.edges[edge_id]

	#============================================
	def get_edges(self, vertex_id):
		return [self.edges[edge_id] for edge_id in self.vertices[vertex_id].edges]

	#============================================
	def get_positions(self):
		return [vertex.position for vertex in self.vertices]

	#============================================
	def set_positions(self, positions):
		for vertex, point in zip(self.vertices, positions):
			vertex.set_position(point)

	#============================================
	def get_ring(self, ring_id):
		for ring in self.rings:
			if ring.id == ring_id:
				return ring
		return None

	#============================================
	def are_vertices_in_same_ring(self, first_id, second_id):
		first_rings = self.vertices[first_id].value.rings
		second_rings = self.vertices[second_id].value.rings
		for ring_id in first_rings:
			if ring_id in second_rings:
				return True
		return False

	#============================================
	def is_ring_edge(self, edge):
		return self.are_vertices_in_same_ring(edge.source_id, edge.target_id)

	#============================================
	def get_tree_depth(self, vertex_id, parent_id):
		"""Return the depth of the spanning subtree hanging off parent_id.

		Args:
			vertex_id: Root of the subtree.
			parent_id: Neighbour that is not part of the subtree.

		Returns:
			int: 1 for a terminal vertex.
		"""
		if vertex_id is None or parent_id is None:
			return 0
		depth = 0
		frontier = [(vertex_id, parent_id)]
		visited = {parent_id}
		while frontier:
			depth += 1
			next_frontier = []
			for current_id, from_id in frontier:
				visited.add(current_id)
				vertex = self.vertices[current_id]
				for neighbour_id in vertex.get_spanning_tree_neighbours(from_id):
					if neighbour_id not in visited:
						next_frontier.append((neighbour_id, current_id))
			frontier = next_frontier
		return depth

	#============================================
	def get_side_vertex_ids(self, start_id, blocked_id):
		"""Return all vertices reachable from start_id without passing blocked_id.

		Args:
			start_id: Vertex to start from, included in the result.
			blocked_id: Vertex that is never entered.

		Returns:
			set: Vertex ids.
		"""
		seen = {start_id}
		queue = collections.deque([start_id])
		while queue:
			current_id = queue.popleft()
			for neighbour_id in self.vertices[current_id].neighbours:
				if neighbour_id == blocked_id or neighbour_id in seen:
					continue
				seen.add(neighbour_id)
				queue.append(neighbour_id)
		return seen

	#============================================
	def side_loops_back(self, start_id, blocked_id):
		"""Return True when start_id reaches blocked_id without their direct bond."""
		seen = {start_id}
		queue = collections.deque([start_id])
		while queue:
			current_id = queue.popleft()
			for neighbour_id in self.vertices[current_id].neighbours:
				if current_id == start_id and neighbour_id == blocked_id:
					continue
				if neighbour_id == blocked_id:
					return True
				if neighbour_id in seen:
					continue
				seen.add(neighbour_id)
				queue.append(neighbour_id)
		return False

	#============================================
	def get_components(self):
		"""Return connected components as sorted vertex id lists."""
		seen = set()
		components = []
		for vertex in self.vertices:
			if vertex.id in seen:
				continue
			component = self.get_side_vertex_ids(vertex.id, None)
			seen.update(component)
			components.append(sorted(component))
		return components

	#============================================
	def get_bridges(self):
		"""Return the ids of edges whose removal disconnects the graph.

		Iterative Tarjan low-link search.
		"""
		count = len(self.vertices)
		discovery = [-1] * count
		low = [0] * count
		bridges = []
		timer = 0
		for root in range(count):
			if discovery[root] != -1:
				continue
			discovery[root] = low[root] = timer
			timer += 1
			stack = [(root, None, iter(self.vertices[root].edges))]
			while stack:
				vertex_id, parent_edge_id, edge_iter = stack[-1]
				advanced = False
				for edge_id in edge_iter:
					if edge_id == parent_edge_id:
						continue
					neighbour_id = self.edges[edge_id].other(vertex_id)
					if discovery[neighbour_id] == -1:
						discovery[neighbour_id] = low[neighbour_id] = timer
						timer += 1
						stack.append((neighbour_id, edge_id, iter(self.vertices[neighbour_id].edges)))
						advanced = True
						break
					low[vertex_id] = min(low[vertex_id], discovery[neighbour_id])
				if advanced:
					continue
				stack.pop()
				if stack:
					parent_id = stack[-1][0]
					low[parent_id] = min(low[parent_id], low[vertex_id])
					if low[vertex_id] > discovery[parent_id]:
						bridges.append(parent_edge_id)
		return sorted(bridges)

	#============================================
	def get_ring_system(self, ring_id):
		"""Return the ids of all rings connected to ring_id through shared vertices."""
		members = {ring_id}
		queue = collections.deque([ring_id])
		while queue:
			current_id = queue.popleft()
			ring = self.get_ring(current_id)
			for neighbour_id in ring.neighbours:
				if neighbour_id not in members:
					members.add(neighbour_id)
					queue.append(neighbour_id)
		return sorted(members)

	#============================================
	def get_ring_system_ids(self):
		"""Return a vertex id to ring-system index map for ring members."""
		mapping = {}
		seen = set()
		system_index = 0
		for ring in self.rings:
			if ring.id in seen:
				continue
			for member_ring_id in self.get_ring_system(ring.id):
				seen.add(member_ring_id)
				for vertex_id in self.get_ring(member_ring_id).members:
					mapping[vertex_id] = system_index
			system_index += 1
		return mapping

	#============================================
	def as_dict(self):
		"""Return a JSON-ready description of the graph."""
		vertices = []
		for vertex in self.vertices:
			atom = vertex.value
			vertices.append({
				"id": vertex.id,
				"element": atom.element,
				"x": vertex.x,
				"y": vertex.y,
				"aromatic": atom.is_aromatic,
				"charge": atom.charge,
				"isotope": atom.isotope,
				"chirality": atom.chirality,
				"cip": atom.cip_label,
				"drawn": atom.is_drawn,
				"hydrogens": atom.hydrogen_count + atom.folded_hydrogens,
				"parent": vertex.parent_vertex_id,
				"rings": list(atom.rings),
			})
		edges = []
		for edge in self.edges:
			edges.append({
				"id": edge.id,
				"source": edge.source_id,
				"target": edge.target_id,
				"order": edge.order,
				"bond_type": edge.bond_type,
				"aromatic": edge.is_aromatic,
				"wedge": edge.wedge,
			})
		rings = []
		for ring in self.rings:
			rings.append({
				"id": ring.id,
				"members": list(ring.members),
				"centroid": list(ring.centroid),
				"circumradius": ring.circumradius,
				"aromatic": ring.is_aromatic,
				"bridged": ring.is_bridged,
			})
		connections = []
		for connection in self.ring_connections:
			connections.append({
				"rings": [connection.first_ring_id, connection.second_ring_id],
				"vertices": sorted(connection.vertices),
				"bridge": connection.is_bridge,
			})
		return {
			"vertices": vertices,
			"edges": edges,
			"rings": rings,
			"ring_connections": connections,
		}
