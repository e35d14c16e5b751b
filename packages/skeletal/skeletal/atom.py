#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Atom payload carried by graph vertices."""

# Standard Library
import dataclasses

# local repo modules
from . import periodic_table


#============================================
@dataclasses.dataclass
class RingBond:
	"""A ring-closure label recorded on one endpoint atom."""
	label: object
	bond_type: str | None = None
	partner_id: int | None = None


#============================================
@dataclasses.dataclass
class PseudoElement:
	"""A collapsed terminal group drawn as part of its carrier atom label."""
	element: str
	count: int = 0
	hydrogen_count: int = 0
	charge: int = 0
	previous_element: str = ""


#============================================
@dataclasses.dataclass
class Atom:
	"""Chemical payload of a vertex.

	Attributes:
		element: Capitalized element symbol ('C', 'Cl', 'Se').
		is_aromatic: True when the atom was written in lower case.
		idx: Dense heavy-atom index, None for suppressed hydrogens.
		bond_type: Bond symbol between this atom and its chain successor.
		branch_bond: Bond symbol between the parent and this branch start.
		bracket: Bracket-atom mapping from the parse tree, or None.
		rings: Ids of the rings containing this atom.
	"""
	element: str
	is_aromatic: bool = False
	idx: int | None = None
	bond_type: str = "-"
	branch_bond: str | None = None
	ringbonds: list = dataclasses.field(default_factory=list)
	rings: list = dataclasses.field(default_factory=list)
	bracket: dict | None = None
	charge: int = 0
	isotope: int | None = None
	atom_class: int | None = None
	hydrogen_count: int = 0
	folded_hydrogens: int = 0
	stereo_hydrogens: int = 0
	chirality: str = ""
	is_stereo_center: bool = False
	cip_label: str = ""
	priority: int = 0
	attached_pseudo_elements: dict = dataclasses.field(default_factory=dict)
	is_drawn: bool = True
	is_part_of_aromatic_ring: bool = False
	is_connected_to_ring: bool = False
	neighbouring_elements: list = dataclasses.field(default_factory=list)
	bond_count: int = 0
	anchored_rings: list = dataclasses.field(default_factory=list)
	bridge_node: bool = False
	subtree_depth: int = 1

	@classmethod
	def from_symbol(cls, symbol: str, bracket=None, bond_type=None, branch_bond=None):
		"""Create an atom from a written element symbol.

		Args:
			symbol: Element as written, lower case marks aromaticity.
			bracket: Optional bracket-atom mapping.
			bond_type: Chain bond symbol stored on the parse-tree node.
			branch_bond: Branch bond symbol stored on the parse-tree node.

		Returns:
			Atom: The new atom.
		"""
		is_aromatic = symbol != "*" and symbol[0].islower()
		element = symbol if symbol == "*" else periodic_table.normalize_symbol(symbol)
		atom = cls(
			element=element,
			is_aromatic=is_aromatic,
			bond_type=bond_type or "-",
			branch_bond=branch_bond,
		)
		if bracket is not None:
			atom.bracket = dict(bracket)
			atom.hydrogen_count = int(bracket.get("hcount") or 0)
			atom.chirality = bracket.get("chirality") or ""
			atom.isotope = bracket.get("isotope") or None
			atom.atom_class = bracket.get("class") or None
		return atom

	@property
	def is_hydrogen(self):
		return self.element == "H"

	@property
	def is_heteroatom(self):
		return self.element not in ("C", "H")

	@property
	def atomic_number(self):
		return periodic_table.atomic_number(self.element)

	def add_neighbouring_element(self, element):
		self.neighbouring_elements.append(element)

	def attach_pseudo_element(self, element, previous_element, hydrogen_count=0, charge=0):
		"""Record one collapsed terminal atom on this carrier atom."""
		key = f"{hydrogen_count}{element}{charge}"
		entry = self.attached_pseudo_elements.get(key)
		if entry is None:
			entry = PseudoElement(
				element=element,
				hydrogen_count=hydrogen_count,
				charge=charge,
				previous_element=previous_element,
			)
			self.attached_pseudo_elements[key] = entry
		entry.count += 1
		return entry

	def get_attached_pseudo_element_count(self):
		return sum(entry.count for entry in self.attached_pseudo_elements.values())
