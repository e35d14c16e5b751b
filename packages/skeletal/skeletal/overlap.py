#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Overlap scoring and greedy overlap resolution."""

# Standard Library
import logging
import math

# local repo modules
from . import geometry
from .errors import LayoutDegeneracy
from .options import LayoutOptions


logger = logging.getLogger(__name__)

SCORE_EPSILON = 1e-9
PIVOT_STEP = math.pi / 6.0
FLIP_STEP = 2.0 * math.pi / 3.0
NUDGE_STEP = math.radians(20.0)


#============================================
class OverlapResolver:
	"""Score atom overlaps and reduce them by rotating or mirroring subtrees.

	Every move is evaluated against the global score and kept only when it
	strictly lowers it, so score_history never increases.

	Args:
		graph: Graph with placed vertices.
		options: LayoutOptions with the bond length and thresholds.
	"""

	def __init__(self, graph, options=None):
		self.graph = graph
		self.options = options or LayoutOptions()
		self.score_history = []
		self._total = None
		self._ring_system_of = graph.get_ring_system_ids()
		self._bridges = set(graph.get_bridges())

	#============================================
	@property
	def total_overlap_score(self):
		"""Final overlap score, computed on demand before resolve() runs."""
		if self._total is None:
			self._total = self.get_overlap_score()[0]
		return self._total

	#============================================
	def refresh_total(self):
		"""Recompute the final score from the current coordinates."""
		self._total = self.get_overlap_score()[0]
		return self._total

	#============================================
	def get_overlap_score(self):
		"""Compute the global overlap score.

		Returns:
			tuple: (total, vertex_scores) where vertex_scores is a list
			indexed by vertex id.
		"""
		graph = self.graph
		bond_length = self.options.bond_length
		short_threshold = self.options.short_bond_threshold
		clearance = self.options.label_clearance
		vertex_scores = [0.0] * len(graph.vertices)
		total = 0.0
		drawn = [vertex for vertex in graph.vertices if vertex.value.is_drawn]
		for index, first in enumerate(drawn):
			first_system = self._ring_system_of.get(first.id)
			for second in drawn[index + 1:]:
				if graph.has_edge(first.id, second.id):
					continue
				threshold = bond_length
				if first_system is not None and first_system == self._ring_system_of.get(second.id):
					threshold = short_threshold
				dist_sq = geometry.distance_sq(first.position, second.position)
				if dist_sq >= threshold * threshold:
					continue
				weighted = (threshold - math.sqrt(dist_sq)) / threshold
				total += weighted
				vertex_scores[first.id] += weighted
				vertex_scores[second.id] += weighted
		drawn_edges = [
			edge for edge in graph.edges
			if graph.vertices[edge.source_id].value.is_drawn
			and graph.vertices[edge.target_id].value.is_drawn
		]
		for vertex in drawn:
			for edge in drawn_edges:
				if edge.has_vertex(vertex.id):
					continue
				dist_sq = geometry.point_to_segment_distance_sq(
					vertex.position,
					graph.vertices[edge.source_id].position,
					graph.vertices[edge.target_id].position,
				)
				if dist_sq >= clearance * clearance:
					continue
				weighted = (clearance - math.sqrt(dist_sq)) / clearance
				total += weighted
				vertex_scores[vertex.id] += weighted
		return total, vertex_scores

	#============================================
	def get_subtree_overlap_score(self, vertex_id, parent_id, vertex_scores):
		"""Return the mean over-threshold score of the side hanging off parent_id.

		Args:
			vertex_id: Root of the side.
			parent_id: Neighbour excluded from the side.
			vertex_scores: Per-vertex scores from get_overlap_score().

		Returns:
			tuple: (value, center) with center the score-weighted position.
		"""
		sensitivity = self.options.overlap_sensitivity
		score = 0.0
		count = 0
		weighted_x = 0.0
		weighted_y = 0.0
		for side_id in sorted(self.graph.get_side_vertex_ids(vertex_id, parent_id)):
			vertex = self.graph.vertices[side_id]
			if not vertex.value.is_drawn:
				continue
			vertex_score = vertex_scores[side_id]
			if vertex_score > sensitivity:
				score += vertex_score
				count += 1
			weighted_x += vertex.x * vertex_score
			weighted_y += vertex.y * vertex_score
		if count == 0:
			return 0.0, self.graph.vertices[vertex_id].position
		return score / count, (weighted_x / score, weighted_y / score)

	#============================================
	def rotate_subtree(self, vertex_id, parent_id, angle, center):
		"""Rotate every vertex on the vertex_id side of parent_id around center.

		Returns:
			bool: False when the side loops back to parent_id and nothing moved.
		"""
		if self.graph.side_loops_back(vertex_id, parent_id):
			return False
		side = self.graph.get_side_vertex_ids(vertex_id, parent_id)
		for side_id in sorted(side):
			vertex = self.graph.vertices[side_id]
			vertex.set_position(geometry.rotate_around(vertex.position, center, angle))
		return True

	#============================================
	def mirror_subtree(self, vertex_id, parent_id, line_start, line_end):
		"""Reflect the vertex_id side of parent_id across a line."""
		if self.graph.side_loops_back(vertex_id, parent_id):
			return False
		side = self.graph.get_side_vertex_ids(vertex_id, parent_id)
		try:
			for side_id in sorted(side):
				vertex = self.graph.vertices[side_id]
				vertex.set_position(geometry.reflect_across_line(vertex.position, line_start, line_end))
		except LayoutDegeneracy:
			logger.debug("mirror line through %s and %s is degenerate", line_start, line_end)
			return False
		return True

	#============================================
	def is_edge_rotatable(self, edge):
		"""Return True for a single, non-ring bond between two non-terminal atoms."""
		if edge.order > 1 or edge.bond_type in ("/", "\\"):
			return False
		if edge.id not in self._bridges:
			return False
		source = self.graph.vertices[edge.source_id]
		target = self.graph.vertices[edge.target_id]
		if source.is_terminal() or target.is_terminal():
			return False
		if self.graph.are_vertices_in_same_ring(source.id, target.id):
			return False
		return True

	#============================================
	def resolve(self, iterations=None):
		"""Run the bounded greedy search and return the final score.

		Args:
			iterations: Iteration limit, defaults to the options value.

		Returns:
			float: The final global overlap score.
		"""
		if iterations is None:
			iterations = self.options.overlap_resolution_iterations
		total, _ = self.get_overlap_score()
		self.score_history = [total]
		for iteration in range(iterations):
			start_total = total
			for edge in self.graph.edges:
				if not self.is_edge_rotatable(edge):
					continue
				total = self._resolve_edge(edge, total)
			total = self._nudge_terminal_atoms(total)
			self.score_history.append(total)
			logger.debug("overlap iteration %d score %.4f", iteration, total)
			if total >= start_total - SCORE_EPSILON:
				break
		self._total = total
		return total

	#============================================
	def _orient_edge(self, edge):
		"""Return (anchor_id, moving_id) with moving_id on the smaller side."""
		source_side = self.graph.get_side_vertex_ids(edge.source_id, edge.target_id)
		target_side = self.graph.get_side_vertex_ids(edge.target_id, edge.source_id)
		if len(source_side) < len(target_side):
			return edge.target_id, edge.source_id
		return edge.source_id, edge.target_id

	#============================================
	def _resolve_edge(self, edge, total):
		anchor_id, moving_id = self._orient_edge(edge)
		_, vertex_scores = self.get_overlap_score()
		subtree_value, _ = self.get_subtree_overlap_score(moving_id, anchor_id, vertex_scores)
		if subtree_value <= self.options.overlap_sensitivity:
			return total
		return self._try_moves(self._edge_moves(anchor_id, moving_id), total)

	#============================================
	def _edge_moves(self, anchor_id, moving_id):
		graph = self.graph
		anchor = graph.vertices[anchor_id]
		moving = graph.vertices[moving_id]
		moves = []
		for step in (PIVOT_STEP, -PIVOT_STEP):
			moves.append(lambda step=step: self.rotate_subtree(moving_id, anchor_id, step, anchor.position))
		for neighbour_id in moving.get_neighbours(anchor_id):
			if graph.vertices[neighbour_id].value.rings and moving.value.rings:
				continue
			for step in (FLIP_STEP, -FLIP_STEP):
				moves.append(
					lambda neighbour_id=neighbour_id, step=step:
					self.rotate_subtree(neighbour_id, moving_id, step, moving.position)
				)
		side = graph.get_side_vertex_ids(moving_id, anchor_id)
		if any(graph.vertices[side_id].value.rings for side_id in side):
			moves.append(
				lambda: self.mirror_subtree(moving_id, anchor_id, anchor.position, moving.position)
			)
		return moves

	#============================================
	def _nudge_terminal_atoms(self, total):
		_, vertex_scores = self.get_overlap_score()
		sensitivity = self.options.overlap_sensitivity
		for vertex in self.graph.vertices:
			if vertex_scores[vertex.id] <= sensitivity or not vertex.value.is_drawn:
				continue
			if len(vertex.neighbours) != 1:
				continue
			pivot = self.graph.vertices[vertex.neighbours[0]]
			moves = []
			for step in (NUDGE_STEP, -NUDGE_STEP):
				moves.append(
					lambda vertex=vertex, step=step:
					vertex.set_position(geometry.rotate_around(vertex.position, pivot.position, step))
				)
			total = self._try_moves(moves, total)
		return total

	#============================================
	def _try_moves(self, moves, total):
		"""Apply the best move that lowers total, restoring positions otherwise."""
		snapshot = self.graph.get_positions()
		best_total = total
		best_positions = None
		for move in moves:
			move()
			candidate_total, _ = self.get_overlap_score()
			if candidate_total < best_total - SCORE_EPSILON:
				best_total = candidate_total
				best_positions = self.graph.get_positions()
			self.graph.set_positions(snapshot)
		if best_positions is not None:
			self.graph.set_positions(best_positions)
		return best_total
