#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Ring and ring-connection records produced by ring perception."""

# Standard Library
import dataclasses


#============================================
@dataclasses.dataclass
class Ring:
	"""A ring of the smallest set of smallest rings.

	Members are ordered along the cycle, starting at the lowest vertex id
	and continuing towards its lower-id ring neighbour.
	"""
	id: int
	members: list
	closure_label: object = None
	centroid: tuple = (0.0, 0.0)
	circumradius: float = 0.0
	is_aromatic: bool = False
	is_bridged: bool = False
	is_fused: bool = False
	is_spiro: bool = False
	neighbours: list = dataclasses.field(default_factory=list)
	positioned: bool = False

	@property
	def size(self):
		return len(self.members)

	def edge_pairs(self):
		"""Yield consecutive member pairs including the closing pair."""
		count = len(self.members)
		for index in range(count):
			yield self.members[index], self.members[(index + 1) % count]


#============================================
@dataclasses.dataclass
class RingConnection:
	"""Shared vertices between two rings."""
	id: int
	first_ring_id: int
	second_ring_id: int
	vertices: set = dataclasses.field(default_factory=set)
	is_bridge: bool = False

	def contains_ring(self, ring_id):
		return ring_id in (self.first_ring_id, self.second_ring_id)

	def other_ring(self, ring_id):
		if ring_id == self.first_ring_id:
			return self.second_ring_id
		return self.first_ring_id

	def update_bridge(self, vertices):
		"""Classify this connection as a bridge.

		A connection is a bridge when more than two vertices are shared or
		any shared vertex belongs to more than two rings.

		Args:
			vertices: Vertex list of the graph, indexed by id.

		Returns:
			bool: The new is_bridge value.
		"""
		self.is_bridge = len(self.vertices) > 2
		for vertex_id in self.vertices:
			if len(vertices[vertex_id].value.rings) > 2:
				self.is_bridge = True
		return self.is_bridge


#============================================
def get_connection(connections, first_ring_id, second_ring_id):
	for connection in connections:
		if connection.contains_ring(first_ring_id) and connection.contains_ring(second_ring_id):
			if first_ring_id != second_ring_id:
				return connection
	return None


#============================================
def get_neighbours(connections, ring_id):
	"""Return the ids of rings sharing at least one vertex with ring_id."""
	result = []
	for connection in connections:
		if connection.contains_ring(ring_id):
			result.append(connection.other_ring(ring_id))
	return result


#============================================
def get_vertices(connections, first_ring_id, second_ring_id):
	"""Return the shared vertex ids of two rings, empty when not connected."""
	connection = get_connection(connections, first_ring_id, second_ring_id)
	if connection is None:
		return set()
	return set(connection.vertices)


#============================================
def is_bridge(connections, first_ring_id, second_ring_id):
	connection = get_connection(connections, first_ring_id, second_ring_id)
	if connection is None:
		return False
	return connection.is_bridge
