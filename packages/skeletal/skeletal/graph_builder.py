#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Build a molecule graph from a SMILES parse tree."""

# Standard Library
import logging

# local repo modules
from . import parse_tree
from .atom import Atom
from .atom import RingBond
from .graph import Graph


logger = logging.getLogger(__name__)


#============================================
class GraphBuilder:
	"""Single-use builder that owns the running counters of one build.

	Args:
		isomeric: When True chiral bracket atoms get explicit stereo
			hydrogen vertices and are flagged as stereocenters.
	"""

	def __init__(self, isomeric=True):
		self.isomeric = isomeric
		self.graph = Graph(isomeric=isomeric)
		self._atom_idx = 0
		self._node_vertex = {}
		self._node_order_base = {}
		self._open_ring_bonds = {}

	#============================================
	def build(self, tree):
		"""Walk the parse tree and return the populated graph.

		Args:
			tree: Root parse-tree node.

		Returns:
			Graph: Vertices, edges and the heavy-atom index map.
		"""
		for step in parse_tree.walk(tree):
			if self._should_fold_hydrogen(step):
				self._fold_hydrogen(step)
				continue
			vertex = self._add_atom_vertex(step)
			self._add_stereo_hydrogens(vertex)
			self._add_ring_bonds(step, vertex)
		for label in self._open_ring_bonds:
			logger.debug("ring closure %s left open", label)
		logger.debug("built %r", self.graph)
		return self.graph

	#============================================
	def _should_fold_hydrogen(self, step):
		"""Return True for a terminal hydrogen that carries nothing special."""
		node = step.node
		if step.parent_index is None:
			return False
		if parse_tree.atom_symbol(node) != "H":
			return False
		if parse_tree.branches(node) or parse_tree.next_node(node) or parse_tree.ringbonds(node):
			return False
		bracket = parse_tree.bracket(node)
		if bracket is not None:
			if bracket.get("isotope") or parse_tree.parse_charge(bracket.get("charge")):
				return False
			if bracket.get("hcount"):
				return False
		parent_id = self._node_vertex.get(step.parent_index)
		if parent_id is None:
			return False
		parent_atom = self.graph.vertices[parent_id].value
		if parent_atom.is_hydrogen or parent_atom.is_stereo_center:
			return False
		return True

	#============================================
	def _fold_hydrogen(self, step):
		parent_id = self._node_vertex[step.parent_index]
		parent_atom = self.graph.vertices[parent_id].value
		parent_atom.folded_hydrogens += 1
		parent_atom.bond_count += 1

	#============================================
	def _add_atom_vertex(self, step):
		node = step.node
		symbol = parse_tree.atom_symbol(node)
		bracket = parse_tree.bracket(node)
		atom = Atom.from_symbol(
			symbol,
			bracket=bracket,
			bond_type=node.get("bond"),
			branch_bond=node.get("branchBond"),
		)
		if bracket is not None:
			atom.charge = parse_tree.parse_charge(bracket.get("charge"))
			if atom.chirality and self.isomeric:
				atom.is_stereo_center = True
		is_sole_atom = step.parent_index is None and parse_tree.next_node(node) is None
		if atom.element != "H" or is_sole_atom:
			atom.idx = self._atom_idx
			self._atom_idx += 1
		vertex = self.graph.add_vertex(atom)
		if atom.idx is not None:
			self.graph.atom_idx_to_vertex_id.append(vertex.id)
		self._node_vertex[step.index] = vertex.id
		hydrogen_slots = atom.hydrogen_count if bracket is not None else 0
		self._node_order_base[step.index] = hydrogen_slots + len(parse_tree.ringbonds(node))
		if step.parent_index is not None:
			parent_id = self._node_vertex[step.parent_index]
			parent = self.graph.vertices[parent_id]
			order_key = self._node_order_base[step.parent_index] + step.order
			vertex.parent_vertex_id = parent_id
			vertex.add_neighbour(parent_id, -1)
			parent.add_child(vertex.id, order_key)
			vertex.value.add_neighbouring_element(parent.value.element)
			parent.value.add_neighbouring_element(atom.element)
			self.graph.add_edge(parent_id, vertex.id, step.bond_symbol)
		return vertex

	#============================================
	def _add_stereo_hydrogens(self, vertex):
		"""Insert explicit hydrogen vertices for a chiral bracket atom."""
		atom = vertex.value
		if not self.isomeric or not atom.chirality or atom.bracket is None:
			return
		for position in range(atom.hydrogen_count):
			hydrogen = Atom.from_symbol("H")
			hydrogen_vertex = self.graph.add_vertex(hydrogen)
			hydrogen_vertex.parent_vertex_id = vertex.id
			hydrogen_vertex.add_neighbour(vertex.id, -1)
			vertex.add_child(hydrogen_vertex.id, position)
			hydrogen.add_neighbouring_element(atom.element)
			atom.add_neighbouring_element("H")
			self.graph.add_edge(vertex.id, hydrogen_vertex.id, "-")
			atom.stereo_hydrogens += 1

	#============================================
	def _add_ring_bonds(self, step, vertex):
		"""Open or close the ring-closure labels written on one atom."""
		atom = vertex.value
		hydrogen_slots = atom.hydrogen_count if atom.bracket is not None else 0
		for position, (label, symbol) in enumerate(parse_tree.ringbonds(step.node)):
			order_key = hydrogen_slots + position
			ring_bond = RingBond(label=label, bond_type=symbol)
			atom.ringbonds.append(ring_bond)
			if label not in self._open_ring_bonds:
				self._open_ring_bonds[label] = (vertex.id, symbol, order_key, ring_bond)
				continue
			partner_id, partner_symbol, partner_key, partner_bond = self._open_ring_bonds.pop(label)
			ring_bond.partner_id = partner_id
			partner_bond.partner_id = vertex.id
			if partner_id == vertex.id or self.graph.has_edge(partner_id, vertex.id):
				logger.debug("skipping duplicate ring closure %s", label)
				continue
			partner = self.graph.vertices[partner_id]
			partner.add_neighbour(vertex.id, partner_key)
			vertex.add_neighbour(partner_id, order_key)
			partner.value.add_neighbouring_element(atom.element)
			atom.add_neighbouring_element(partner.value.element)
			edge = self.graph.add_edge(partner_id, vertex.id, partner_symbol or symbol or "-")
			edge.is_ring_closure = True


#============================================
def build(tree, isomeric=True):
	"""Build a graph from a parse tree.

	Args:
		tree: Root parse-tree node.
		isomeric: Keep stereochemistry (stereo hydrogens, stereocenters).

	Returns:
		Graph: The populated graph.
	"""
	builder = GraphBuilder(isomeric=isomeric)
	return builder.build(tree)
