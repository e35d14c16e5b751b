#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Graph edge carrying one bond."""

# local repo modules
from . import bond_semantics


#============================================
class Edge:
	"""A bond between two vertices.

	Attributes:
		order: Bond order, 0 for the dot disconnection.
		bond_type: Bond symbol as written ('-', '=', '/', ...).
		wedge: '' when flat, otherwise 'up' or 'down'.
		center: True when the bond is drawn straight through its atoms.
	"""

	def __init__(self, edge_id, source_id, target_id, bond_type="-"):
		self.id = edge_id
		self.source_id = source_id
		self.target_id = target_id
		self.bond_type = "-"
		self.order = 1
		self.is_aromatic = False
		self.is_ring_closure = False
		self.is_part_of_aromatic_ring = False
		self.center = False
		self.wedge = ""
		self.set_bond_type(bond_type)

	def __repr__(self):
		return f"Edge({self.id}, {self.source_id}{self.bond_type}{self.target_id})"

	def set_bond_type(self, bond_type):
		self.bond_type = bond_semantics.normalize_bond_symbol(bond_type)
		self.order = bond_semantics.bond_order(self.bond_type)

	def other(self, vertex_id):
		"""Return the endpoint opposite vertex_id."""
		if vertex_id == self.source_id:
			return self.target_id
		if vertex_id == self.target_id:
			return self.source_id
		raise ValueError(f"vertex {vertex_id} is not an endpoint of edge {self.id}")

	def has_vertex(self, vertex_id):
		return vertex_id in (self.source_id, self.target_id)

	def set_wedge(self, wedge):
		if wedge not in bond_semantics.WEDGE_TYPES:
			raise ValueError(f"Unknown wedge direction: {wedge!r}")
		self.wedge = wedge
