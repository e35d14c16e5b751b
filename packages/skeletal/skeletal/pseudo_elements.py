#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Collapse terminal heteroatom groups into pseudo elements."""

# Standard Library
import logging

# local repo modules
from . import periodic_table


logger = logging.getLogger(__name__)


#============================================
def _is_exempt(graph, vertex):
	"""Phosphorus and guanidine-like carbons keep their substituents drawn."""
	atom = vertex.value
	if atom.element == "P":
		return True
	if atom.element == "C" and len(vertex.neighbours) == 3:
		elements = [graph.vertices[neighbour_id].value.element for neighbour_id in vertex.neighbours]
		if elements == ["N", "N", "N"]:
			return True
	return False


#============================================
def init_pseudo_elements(graph):
	"""Hide terminal atoms of heteroatom-rich groups and record them on the carrier.

	A carrier is a non-ring atom that is not a stereocenter, with at least
	three neighbours of which at most one is non-terminal and at least two
	are terminal heteroatoms.

	Args:
		graph: Graph after ring perception.

	Returns:
		int: Number of atoms that were hidden.
	"""
	hidden = 0
	for vertex in graph.vertices:
		atom = vertex.value
		if len(vertex.neighbours) < 3 or atom.rings or atom.is_stereo_center:
			continue
		if _is_exempt(graph, vertex):
			continue
		neighbours = [graph.vertices[neighbour_id] for neighbour_id in vertex.neighbours]
		hetero_count = 0
		chain_count = 0
		for neighbour in neighbours:
			element = neighbour.value.element
			if element not in ("C", "H") and len(neighbour.neighbours) == 1:
				hetero_count += 1
			if len(neighbour.neighbours) > 1:
				chain_count += 1
		if chain_count > 1 or hetero_count < 2:
			continue
		previous = None
		for neighbour in neighbours:
			if len(neighbour.neighbours) > 1:
				previous = neighbour
		for neighbour in neighbours:
			if len(neighbour.neighbours) > 1:
				continue
			neighbour_atom = neighbour.value
			if neighbour_atom.is_stereo_center:
				continue
			neighbour_atom.is_drawn = False
			hydrogens = periodic_table.max_bonds(neighbour_atom.element) - neighbour_atom.bond_count
			charge = 0
			if neighbour_atom.bracket is not None:
				hydrogens = neighbour_atom.hydrogen_count
				charge = neighbour_atom.charge
			atom.attach_pseudo_element(
				neighbour_atom.element,
				previous.value.element if previous is not None else "",
				hydrogen_count=max(hydrogens, 0),
				charge=charge,
			)
			hidden += 1
	hidden += _collapse_acetyl_groups(graph)
	if hidden:
		logger.debug("collapsed %d terminal atom(s) into pseudo elements", hidden)
	return hidden


#============================================
def _collapse_acetyl_groups(graph):
	"""Fold carriers holding exactly '=O' and 'CH3' into an 'Ac' label."""
	hidden = 0
	for vertex in graph.vertices:
		atom = vertex.value
		if atom.element in ("C", "H") or not atom.is_drawn:
			continue
		for neighbour_id in vertex.neighbours:
			neighbour = graph.vertices[neighbour_id].value
			if not neighbour.is_drawn or neighbour.get_attached_pseudo_element_count() != 2:
				continue
			keys = set(neighbour.attached_pseudo_elements)
			if "0O0" in keys and "3C0" in keys:
				neighbour.is_drawn = False
				atom.attach_pseudo_element("Ac", "", hydrogen_count=0)
				hidden += 1
	return hidden
