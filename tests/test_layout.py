"""Tests for the staged layout engine."""

# Standard Library
import itertools
import math

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
import smiles_trees
from skeletal import geometry
from skeletal import graph_builder
from skeletal import layout
from skeletal import parse_tree
from skeletal import ring_perception
from skeletal import stereo
from skeletal.drawer import Drawer
from skeletal.options import LayoutOptions


SAMPLE_SMILES = [
	"C",
	"CCO",
	"CCCCCCCCCC",
	"CC(C)(C)C",
	"FC(F)(F)C(F)(F)F",
	"C#CC",
	"C=C=C",
	"c1ccccc1",
	"c1ccc2ccccc2c1",
	"C1CCC12CCC2",
	"C1CC2CCC1C2",
	"C1CC2CC1C23CC3",
	"C12C3C4C1C5C2C3C45",
	"CS(=O)(=O)O",
	"CC(=O)Oc1ccccc1C(=O)O",
	"N[C@@H](Cc1ccccc1)C(=O)O",
	"[Na+].[Cl-]",
	"c1ccc(cc1)-c1ccccc1",
	"CC1(C)CCCCC1",
]


#============================================
def _engine(smiles, **overrides):
	graph = graph_builder.build(smiles_trees.tree(smiles))
	ring_perception.perceive_rings(graph)
	return layout.LayoutEngine(graph, LayoutOptions(**overrides))


#============================================
def _bond_lengths(graph):
	lengths = []
	for edge in graph.edges:
		first = graph.vertices[edge.source_id].position
		second = graph.vertices[edge.target_id].position
		lengths.append(geometry.distance(first, second))
	return lengths


#============================================
def test_stages_run_in_order():
	engine = _engine("CCO")
	assert engine.stage == layout.STAGE_UNPLACED
	engine.run()
	assert engine.stage == layout.STAGE_DONE
	assert tuple(engine.stage_history) == layout.LAYOUT_STAGES


#============================================
def test_engine_runs_only_once():
	engine = _engine("CCO")
	engine.run()
	with pytest.raises(RuntimeError):
		engine.run()


#============================================
@pytest.mark.parametrize("smiles", SAMPLE_SMILES)
def test_every_vertex_gets_a_finite_position(smiles):
	tree = smiles_trees.tree(smiles)
	node_count = parse_tree.check_tree(tree)
	graph = Drawer().draw(tree)
	stereo_hydrogens = sum(vertex.value.stereo_hydrogens for vertex in graph.vertices)
	assert len(graph.vertices) == node_count + stereo_hydrogens
	for vertex in graph.vertices:
		assert vertex.positioned
		assert geometry.is_finite(vertex.position)


#============================================
@pytest.mark.parametrize("smiles", ["CCCCCCCCCC", "CC(C)(C)C", "C=CC(O)CC#N", "CC(C)CC(C)(C)C"])
def test_chain_bonds_have_bond_length(smiles):
	engine = _engine(smiles, bond_length=25.0)
	engine.run()
	for value in _bond_lengths(engine.graph):
		assert value == pytest.approx(25.0)


#============================================
def test_benzene_is_a_regular_hexagon():
	engine = _engine("c1ccccc1")
	engine.run()
	for value in _bond_lengths(engine.graph):
		assert value == pytest.approx(30.0)
	ring = engine.graph.rings[0]
	assert ring.positioned
	assert ring.circumradius == pytest.approx(30.0)
	for vertex_id in ring.members:
		point = engine.graph.vertices[vertex_id].position
		assert geometry.distance(point, ring.centroid) == pytest.approx(30.0)


#============================================
def test_fused_rings_share_an_edge():
	engine = _engine("c1ccc2ccccc2c1")
	engine.run()
	for value in _bond_lengths(engine.graph):
		assert value == pytest.approx(30.0)
	first, second = engine.graph.rings
	assert geometry.distance(first.centroid, second.centroid) == pytest.approx(30.0 * math.sqrt(3.0))


#============================================
def test_substituted_ring_keeps_bond_lengths():
	engine = _engine("Cc1ccccc1")
	engine.run()
	for value in _bond_lengths(engine.graph):
		assert value == pytest.approx(30.0)


#============================================
def test_bridged_system_atoms_are_apart():
	engine = _engine("C1CC2CCC1C2")
	engine.run()
	graph = engine.graph
	for first, second in itertools.combinations(graph.vertices, 2):
		assert geometry.distance(first.position, second.position) > 0.25 * 30.0


#============================================
def test_triple_bond_is_linear():
	engine = _engine("CC#CC")
	engine.run()
	points = [vertex.position for vertex in engine.graph.vertices]
	first = geometry.sub(points[1], points[0])
	last = geometry.sub(points[3], points[2])
	assert geometry.cross(first, last) == pytest.approx(0.0, abs=1e-6)
	assert engine.graph.get_edge(1, 2).center


#============================================
def test_gem_substituents_are_spread():
	engine = _engine("CC1(C)CCCCC1")
	engine.run()
	graph = engine.graph
	assert geometry.distance(graph.vertices[0].position, graph.vertices[2].position) > 0.5 * 30.0


#============================================
def test_hidden_atoms_sit_on_their_carrier():
	drawer = Drawer()
	graph = drawer.draw(smiles_trees.tree("CS(=O)(=O)O"))
	sulfur = graph.vertices[1]
	for vertex_id in (2, 3, 4):
		hidden = graph.vertices[vertex_id]
		assert not hidden.value.is_drawn
		assert hidden.position == pytest.approx(sulfur.position)


#============================================
def test_layout_is_deterministic():
	smiles = "CC(=O)Oc1ccccc1C(=O)O"
	first = Drawer().draw(smiles_trees.tree(smiles))
	second = Drawer().draw(smiles_trees.tree(smiles))
	assert first.get_positions() == second.get_positions()
	assert [edge.wedge for edge in first.edges] == [edge.wedge for edge in second.edges]


#============================================
def test_bond_length_option_scales_layout():
	small = _engine("CCC", bond_length=10.0)
	small.run()
	large = _engine("CCC", bond_length=20.0)
	large.run()
	for first, second in zip(small.graph.vertices, large.graph.vertices):
		assert second.x == pytest.approx(2.0 * first.x)
		assert second.y == pytest.approx(2.0 * first.y)


#============================================
def _closest_unbonded_distance(graph):
	closest = None
	for first, second in itertools.combinations(graph.vertices, 2):
		if graph.has_edge(first.id, second.id):
			continue
		value = geometry.distance(first.position, second.position)
		if closest is None or value < closest:
			closest = value
	return closest


#============================================
@pytest.mark.parametrize("smiles", [
	"CC12CCCCC1CCCC2",
	"CCC12CCCCC1CCCC2",
	"C1CCC2(C)CCCCC2C1",
	"OCC12CCCCC1CCCC2",
])
def test_substituent_on_fusion_atom_clears_both_rings(smiles):
	graph = Drawer().draw(smiles_trees.tree(smiles))
	assert _closest_unbonded_distance(graph) > 0.8 * 30.0


#============================================
def test_fusion_atom_substituent_points_away_from_joined_atom():
	graph = Drawer().draw(smiles_trees.tree("CC12CCCCC1CCCC2"))
	methyl = graph.vertices[0].position
	fusion = graph.vertices[1].position
	joined = graph.vertices[6].position
	outward = geometry.sub(methyl, fusion)
	inward = geometry.sub(joined, fusion)
	assert geometry.dot(outward, inward) == pytest.approx(-30.0 * 30.0)


#============================================
@pytest.mark.parametrize("smiles", [
	"F/C=C\\F",
	"F/C=C/F",
	"CC(C)(C)/C=C\\C(C)(C)C",
	"CC/C=C\\CCC",
])
def test_marked_double_bond_is_placed_as_written(smiles):
	engine = _engine(smiles)
	engine._advance(layout.STAGE_TREE_PLACED, engine._place_tree)
	graph = engine.graph
	configurations = list(stereo.double_bond_configurations(graph))
	assert configurations
	for edge, first_id, second_id, written_cis in configurations:
		assert stereo.is_drawn_cis(graph, edge, first_id, second_id) == written_cis
