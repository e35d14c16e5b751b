#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Reaction notation: reactants>reagents>products."""

# Standard Library
import logging

# local repo modules
from .drawer import Drawer
from .errors import StructuralError


logger = logging.getLogger(__name__)


#============================================
def split_reaction(text):
	"""Split reaction text into three lists of component strings.

	Args:
		text: Text like 'CCO.O>[H+]>CC=O'.

	Returns:
		tuple: (reactants, reagents, products) lists of strings.

	Raises:
		StructuralError: When the text does not have exactly two '>'.
	"""
	parts = text.strip().split(">")
	if len(parts) != 3:
		raise StructuralError(f"Reaction needs exactly two '>' separators: {text!r}")
	return tuple(
		[component for component in part.split(".") if component]
		for part in parts
	)


#============================================
class Reaction:
	"""A parsed reaction.

	Args:
		text: Reaction text.
		parse: Callable turning one component string into a parse tree.
	"""

	def __init__(self, text, parse):
		self.text = text
		reactants, reagents, products = split_reaction(text)
		self.reactants = [parse(component) for component in reactants]
		self.reagents = [parse(component) for component in reagents]
		self.products = [parse(component) for component in products]

	#============================================
	def draw(self, options=None):
		"""Lay out every component with its own Drawer.

		Returns:
			dict: 'reactants', 'reagents' and 'products' lists of graphs.
		"""
		result = {}
		for role in ("reactants", "reagents", "products"):
			result[role] = [Drawer(options).draw(tree) for tree in getattr(self, role)]
		logger.debug(
			"reaction laid out: %d reactants, %d reagents, %d products",
			len(result["reactants"]), len(result["reagents"]), len(result["products"]),
		)
		return result
