#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Graph vertex holding an atom and its 2D position."""

# Standard Library
import math

# local repo modules
from . import geometry


#============================================
class Vertex:
	"""A graph vertex.

	Neighbour ids are kept in insertion order: the spanning-tree parent,
	then children in notation order, then ring-closure partners.
	"""

	def __init__(self, vertex_id, value):
		self.id = vertex_id
		self.value = value
		self.x = 0.0
		self.y = 0.0
		self.previous_position = (0.0, 0.0)
		self.parent_vertex_id = None
		self.spanning_tree_children = []
		self.neighbours = []
		self.edges = []
		# ordering key of each neighbour as written, used for chirality
		self.neighbour_order = {}
		self.angle = None
		self.positioned = False
		self.force_positioned = False

	def __repr__(self):
		return f"Vertex({self.id}, {self.value.element!r}, ({self.x:.3f}, {self.y:.3f}))"

	@property
	def position(self):
		return (self.x, self.y)

	def set_position(self, point):
		self.x = float(point[0])
		self.y = float(point[1])

	def add_neighbour(self, vertex_id, order_key):
		if vertex_id in self.neighbours:
			return
		self.neighbours.append(vertex_id)
		self.neighbour_order[vertex_id] = order_key

	def add_child(self, vertex_id, order_key):
		self.add_neighbour(vertex_id, order_key)
		self.spanning_tree_children.append(vertex_id)

	def is_terminal(self):
		"""Return True when the vertex has at most one neighbour."""
		return len(self.neighbours) <= 1

	def get_neighbours(self, exclude=None):
		if exclude is None:
			return list(self.neighbours)
		return [vertex_id for vertex_id in self.neighbours if vertex_id != exclude]

	def get_spanning_tree_neighbours(self, exclude=None):
		result = []
		for vertex_id in self.spanning_tree_children:
			if vertex_id != exclude:
				result.append(vertex_id)
		if self.parent_vertex_id is not None and self.parent_vertex_id != exclude:
			result.append(self.parent_vertex_id)
		return result

	def get_angle(self, reference=None, degrees=False):
		"""Return the angle of the vector from reference to this vertex.

		Args:
			reference: (x, y) origin, defaults to the previous position.
			degrees: Return degrees instead of radians.

		Raises:
			LayoutDegeneracy: When both points coincide.
		"""
		if reference is None:
			reference = self.previous_position
		angle = geometry.angle_of(geometry.sub(self.position, reference))
		if degrees:
			return math.degrees(angle)
		return angle

	def ordered_neighbours(self):
		"""Return neighbour ids sorted by their written order."""
		return sorted(self.neighbours, key=lambda vertex_id: self.neighbour_order[vertex_id])
