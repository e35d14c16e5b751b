#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Single entry point that turns one parse tree into a laid-out graph."""

# Standard Library
import logging

# local repo modules
from . import formula
from . import graph_builder
from . import parse_tree
from . import pseudo_elements
from . import ring_perception
from .layout import LayoutEngine
from .options import make_options


logger = logging.getLogger(__name__)


#============================================
class Drawer:
	"""Run the whole layout pipeline for a parse tree.

	Each call to draw() builds a fresh graph, so one Drawer can be reused
	for several molecules with the same options.

	Args:
		options: LayoutOptions or a mapping of option names.
		**overrides: Individual option values, camelCase names accepted.
	"""

	def __init__(self, options=None, **overrides):
		self.options = make_options(options, **overrides)
		self.graph = None
		self.engine = None
		self.tree = None

	#============================================
	def draw(self, tree):
		"""Validate, build and lay out a parse tree.

		Args:
			tree: Root parse-tree node.

		Returns:
			Graph: The graph with final positions.

		Raises:
			StructuralError: When the tree is malformed.
		"""
		node_count = parse_tree.check_tree(tree)
		graph = graph_builder.build(tree, isomeric=self.options.isomeric)
		ring_perception.perceive_rings(graph)
		hidden = 0
		if self.options.compact_drawing and self.options.atom_visualization == "default":
			hidden = pseudo_elements.init_pseudo_elements(graph)
		engine = LayoutEngine(graph, self.options)
		engine.run()
		self.tree = tree
		self.graph = graph
		self.engine = engine
		level = logging.INFO if self.options.debug else logging.DEBUG
		logger.log(
			level,
			"drew %d nodes as %d vertices, %d rings, %d hidden atoms, %d wedges",
			node_count, len(graph.vertices), len(graph.rings), hidden, len(engine.wedged_edge_ids),
		)
		return graph

	#============================================
	def get_total_overlap_score(self):
		"""Return the overlap score of the last drawing."""
		if self.engine is None:
			raise RuntimeError("nothing has been drawn yet")
		return self.engine.total_overlap_score

	#============================================
	def get_molecular_formula(self, tree=None):
		"""Return the molecular formula of tree, or of the last drawing.

		Args:
			tree: Optional parse tree; it is built but not laid out.
		"""
		if tree is not None:
			parse_tree.check_tree(tree)
			return formula.molecular_formula(graph_builder.build(tree, isomeric=self.options.isomeric))
		if self.graph is None:
			raise RuntimeError("nothing has been drawn yet")
		return formula.molecular_formula(self.graph)
