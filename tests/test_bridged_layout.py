"""Tests for the bridged ring system relaxation."""

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
import smiles_trees
from skeletal import bridged_layout
from skeletal import geometry
from skeletal import graph_builder
from skeletal import ring_perception


#============================================
def _norbornane():
	graph = graph_builder.build(smiles_trees.tree("C1CC2CCC1C2"))
	ring_perception.perceive_rings(graph)
	return graph


#============================================
def test_graph_distances():
	graph = _norbornane()
	distances = bridged_layout.graph_distances(graph, list(range(7)))
	assert distances[(0, 1)] == 1
	assert distances[(0, 6)] == 2
	assert distances[(1, 4)] == 3
	assert distances[(4, 1)] == 3


#============================================
def test_seed_on_circle_keeps_positioned_vertices():
	graph = _norbornane()
	anchor = graph.vertices[0]
	anchor.set_position((10.0, 0.0))
	anchor.positioned = True
	radius = bridged_layout.seed_on_circle(graph, list(range(7)), (0.0, 0.0), 30.0)
	assert anchor.position == (10.0, 0.0)
	for vertex_id in range(1, 7):
		point = graph.vertices[vertex_id].position
		assert geometry.distance(point, (0.0, 0.0)) == pytest.approx(radius)


#============================================
def test_relax_lowers_stress_and_keeps_fixed_vertices():
	graph = _norbornane()
	members = list(range(7))
	bridged_layout.seed_on_circle(graph, members, (0.0, 0.0), 30.0)
	fixed_point = graph.vertices[0].position
	distances = bridged_layout.graph_distances(graph, members)
	before = bridged_layout._stress(graph, distances, 30.0)
	after = bridged_layout.relax(graph, members, {0}, 30.0)
	assert after < before
	assert graph.vertices[0].position == fixed_point
	for vertex in graph.vertices:
		assert geometry.is_finite(vertex.position)


#============================================
def test_relax_with_everything_fixed_moves_nothing():
	graph = _norbornane()
	members = list(range(7))
	bridged_layout.seed_on_circle(graph, members, (0.0, 0.0), 30.0)
	before = graph.get_positions()
	bridged_layout.relax(graph, members, set(members), 30.0)
	assert graph.get_positions() == before


#============================================
def test_relax_separates_coincident_vertices():
	graph = _norbornane()
	members = list(range(7))
	for vertex_id in members:
		graph.vertices[vertex_id].set_position((0.0, 0.0))
	bridged_layout.relax(graph, members, {0}, 30.0)
	assert geometry.distance(graph.vertices[1].position, graph.vertices[0].position) > 1.0
