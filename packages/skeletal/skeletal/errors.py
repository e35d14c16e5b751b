#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Error types raised by the layout pipeline."""


#============================================
class StructuralError(ValueError):
	"""Raised when a parse tree cannot describe a valid molecule graph.

	Covers malformed nodes, unknown bond symbols, unmatched or self-closing
	ring-closure labels, atoms over their allowed valence and malformed
	reaction text.
	"""


#============================================
class LayoutDegeneracy(ValueError):
	"""Raised by geometry helpers when a direction cannot be derived.

	The layout engine catches it and falls back to a default direction.
	"""
