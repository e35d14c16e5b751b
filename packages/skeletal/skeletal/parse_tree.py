#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Accessors and structural checks for SMILES parse trees.

A parse-tree node is a mapping::

	{
		"atom": "C" or {"element": ..., "chirality": ..., "hcount": ...,
			"charge": ..., "isotope": ..., "class": ...},
		"bond": bond symbol between this atom and "next",
		"branchBond": bond symbol between the parent atom and this branch,
		"ringbonds": [{"id": label, "bond": symbol}, ...],
		"branches": [node, ...],
		"branchCount": int,
		"ringbondCount": int,
		"next": node or None,
		"hasNext": bool,
	}

Lower case element strings mark aromatic atoms.
"""

# Standard Library
import collections.abc
import dataclasses

# local repo modules
from . import bond_semantics
from . import periodic_table
from .errors import StructuralError


#============================================
@dataclasses.dataclass(frozen=True)
class WalkStep:
	"""One node visit of a parse-tree walk."""
	index: int
	node: dict
	parent_index: int | None
	bond_symbol: str
	is_branch: bool
	order: int


#============================================
def is_bracket(node) -> bool:
	return isinstance(node.get("atom"), collections.abc.Mapping)


#============================================
def atom_symbol(node) -> str:
	"""Return the element symbol as written (lower case when aromatic)."""
	atom = node.get("atom")
	if isinstance(atom, collections.abc.Mapping):
		return atom.get("element") or ""
	return atom or ""


#============================================
def bracket(node):
	"""Return the bracket-atom mapping, or None for organic-subset atoms."""
	atom = node.get("atom")
	if isinstance(atom, collections.abc.Mapping):
		return atom
	return None


#============================================
def branches(node) -> list:
	items = node.get("branches") or []
	count = node.get("branchCount")
	if count is not None:
		items = items[:count]
	return list(items)


#============================================
def next_node(node):
	if node.get("hasNext") is False:
		return None
	return node.get("next")


#============================================
def ringbonds(node) -> list:
	"""Return the ring-closure (label, bond symbol) pairs of a node.

	The bond symbol is None when the closure has no explicit bond.
	"""
	result = []
	for entry in node.get("ringbonds") or []:
		label = entry.get("id")
		symbol = entry.get("bond", entry.get("bondType"))
		result.append((label, symbol or None))
	return result


#============================================
def parse_charge(value) -> int:
	"""Convert a bracket charge into an integer.

	Accepts integers and the written forms '+', '++', '-', '--', '+2', '-3'.
	"""
	if value is None or value == "":
		return 0
	if isinstance(value, bool):
		raise StructuralError(f"Invalid charge: {value!r}")
	if isinstance(value, int):
		return value
	text = str(value).strip()
	if not text:
		return 0
	sign = text[0]
	if sign not in "+-":
		try:
			return int(text)
		except ValueError as exc:
			raise StructuralError(f"Invalid charge: {value!r}") from exc
	rest = text[1:]
	factor = 1 if sign == "+" else -1
	if rest == "":
		return factor
	if set(rest) == {sign}:
		return factor * (len(rest) + 1)
	try:
		return factor * int(rest)
	except ValueError as exc:
		raise StructuralError(f"Invalid charge: {value!r}") from exc


#============================================
def walk(tree):
	"""Yield WalkStep records in notation (depth-first, left-to-right) order.

	Uses an explicit stack so deeply nested chains do not hit the
	recursion limit. A node is visited before its branches, and branches
	before the chain continuation.

	Args:
		tree: Root parse-tree node.

	Yields:
		WalkStep: One record per node.
	"""
	if tree is None:
		return
	stack = [(tree, None, bond_semantics.DEFAULT_BOND, False, 0)]
	index = 0
	while stack:
		node, parent_index, symbol, is_branch, order = stack.pop()
		_check_node_shape(node)
		yield WalkStep(index, node, parent_index, symbol, is_branch, order)
		child_frames = []
		node_branches = branches(node)
		for branch_position, branch in enumerate(node_branches):
			branch_symbol = branch.get("branchBond") if isinstance(branch, collections.abc.Mapping) else None
			child_frames.append(
				(branch, index, bond_semantics.normalize_bond_symbol(branch_symbol), True, branch_position)
			)
		following = next_node(node)
		if following is not None:
			chain_symbol = bond_semantics.normalize_bond_symbol(node.get("bond"))
			child_frames.append((following, index, chain_symbol, False, len(node_branches)))
		# reversed so that the first branch is popped first
		stack.extend(reversed(child_frames))
		index += 1


#============================================
def _check_node_shape(node):
	if not isinstance(node, collections.abc.Mapping):
		raise StructuralError(f"Parse-tree node must be a mapping, got {type(node).__name__}")
	atom = node.get("atom")
	if isinstance(atom, collections.abc.Mapping):
		element = atom.get("element")
	else:
		element = atom
	if not isinstance(element, str) or not element:
		raise StructuralError(f"Parse-tree node has no element: {node!r}")
	if element != "*" and not periodic_table.is_known(element):
		raise StructuralError(f"Unknown element symbol: {element!r}")


#============================================
def check_tree(tree):
	"""Validate a parse tree before it reaches the graph builder.

	Checks node shapes, bond symbols, ring-closure pairing and the
	valence of organic-subset atoms.

	Args:
		tree: Root parse-tree node.

	Returns:
		int: Number of nodes in the tree.

	Raises:
		StructuralError: On the first problem found.
	"""
	if tree is None:
		raise StructuralError("Parse tree is empty")
	open_labels = {}
	valences = {}
	steps = []
	for step in walk(tree):
		steps.append(step)
		valences.setdefault(step.index, 0)
		if step.parent_index is not None:
			order = bond_semantics.bond_order(step.bond_symbol)
			valences[step.index] += order
			valences[step.parent_index] += order
		seen_here = set()
		for label, symbol in ringbonds(step.node):
			if label is None:
				raise StructuralError(f"Ring closure without label at node {step.index}")
			if symbol is not None:
				bond_semantics.normalize_bond_symbol(symbol)
			if label in seen_here:
				raise StructuralError(f"Ring closure {label} opens and closes on the same atom")
			seen_here.add(label)
			if label in open_labels:
				partner_index, partner_symbol = open_labels.pop(label)
				if symbol and partner_symbol and symbol != partner_symbol:
					if bond_semantics.bond_order(symbol) != bond_semantics.bond_order(partner_symbol):
						raise StructuralError(f"Ring closure {label} has conflicting bond symbols")
				order = bond_semantics.bond_order(partner_symbol or symbol)
				valences[step.index] += order
				valences[partner_index] += order
			else:
				open_labels[label] = (step.index, symbol)
	if open_labels:
		labels = ", ".join(str(label) for label in sorted(open_labels, key=str))
		raise StructuralError(f"Unmatched ring closure label(s): {labels}")
	for step in steps:
		if is_bracket(step.node):
			continue
		symbol = atom_symbol(step.node)
		element = periodic_table.normalize_symbol(symbol) if symbol != "*" else "*"
		allowed = periodic_table.ORGANIC_SUBSET_VALENCES.get(element)
		if allowed is None:
			continue
		if valences[step.index] > allowed:
			raise StructuralError(
				f"Atom {symbol} at node {step.index} has valence {valences[step.index]},"
				f" more than {allowed}"
			)
	return len(steps)
