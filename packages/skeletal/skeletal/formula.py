#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Molecular formula of a built graph."""

# local repo modules
from . import periodic_table


#============================================
def element_counts(graph):
	"""Count atoms per element, including implied and collapsed hydrogens.

	Args:
		graph: Graph from the graph builder.

	Returns:
		dict: Element symbol -> count.
	"""
	counts = {}
	for vertex in graph.vertices:
		atom = vertex.value
		if atom.element == "*":
			continue
		counts[atom.element] = counts.get(atom.element, 0) + 1
		if atom.bracket is not None:
			hydrogens = atom.hydrogen_count - atom.stereo_hydrogens + atom.folded_hydrogens
		else:
			hydrogens = periodic_table.max_bonds(atom.element) - atom.bond_count
			if atom.is_aromatic:
				hydrogens -= 1
			hydrogens = max(hydrogens, 0) + atom.folded_hydrogens
		if hydrogens > 0:
			counts["H"] = counts.get("H", 0) + hydrogens
	return counts


#============================================
def format_formula(counts):
	"""Format element counts carbon first, hydrogen second, then alphabetically."""
	parts = []
	remaining = dict(counts)
	for element in ("C", "H"):
		count = remaining.pop(element, 0)
		if count > 0:
			parts.append(element + (str(count) if count > 1 else ""))
	for element in sorted(remaining):
		count = remaining[element]
		if count > 0:
			parts.append(element + (str(count) if count > 1 else ""))
	return "".join(parts)


#============================================
def molecular_formula(graph):
	return format_formula(element_counts(graph))
