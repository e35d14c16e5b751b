"""Tests for wedges, cis/trans repair and CIP labels."""

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
import smiles_trees
from skeletal import geometry
from skeletal import stereo
from skeletal.drawer import Drawer


#============================================
def _draw(smiles, **overrides):
	return Drawer(**overrides).draw(smiles_trees.tree(smiles))


#============================================
def _stereocenters(graph):
	return [vertex for vertex in graph.vertices if vertex.value.is_stereo_center]


#============================================
@pytest.mark.parametrize(
	"smiles",
	[
		"N[C@@H](C)C(=O)O",
		"N[C@H](C)C(=O)O",
		"C[C@](F)(Cl)Br",
		"C[C@@](F)(Cl)Br",
		"F[C@H](Cl)Br",
		"F[C@@H]1CCCCC1",
		"C[C@H](O)[C@@H](C)O",
		"N[C@@H](Cc1ccccc1)C(=O)O",
	],
)
def test_one_wedge_reproduces_each_tag(smiles):
	graph = _draw(smiles)
	centers = _stereocenters(graph)
	assert centers
	for vertex in centers:
		wedged = [edge for edge in graph.get_edges(vertex.id) if edge.wedge]
		assert len(wedged) == 1
		assert wedged[0].source_id == vertex.id
		assert stereo.derive_chirality(graph, vertex.id) == vertex.value.chirality


#============================================
def test_non_isomeric_draw_has_no_wedges():
	graph = _draw("N[C@@H](C)C(=O)O", isomeric=False)
	assert not any(edge.wedge for edge in graph.edges)
	assert not _stereocenters(graph)


#============================================
@pytest.mark.parametrize(
	"smiles, label",
	[
		("N[C@@H](C)C(=O)O", "S"),
		("N[C@H](C)C(=O)O", "R"),
		("F[C@H](Cl)Br", "R"),
		("F[C@@H](Cl)Br", "S"),
	],
)
def test_cip_labels(smiles, label):
	graph = _draw(smiles)
	assert graph.vertices[1].value.cip_label == label


#============================================
def test_priorities_are_ranked():
	graph = _draw("F[C@H](Cl)Br")
	ranks = {vertex.value.element: vertex.value.priority for vertex in graph.vertices if vertex.id != 1}
	assert ranks["Br"] == 0
	assert ranks["Cl"] == 1
	assert ranks["F"] == 2
	assert ranks["H"] == 3


#============================================
def test_chirality_neighbours_insert_implicit_slot():
	graph = _draw("N[C@](C)(O)", isomeric=True)
	assert stereo.chirality_neighbours(graph, 1) == [0, None, 2, 3]


#============================================
@pytest.mark.parametrize(
	"smiles, written_cis",
	[("F/C=C/F", False), ("F/C=C\\F", True), ("C/C=C/CC", False), ("C\\C=C/CC", True)],
)
def test_double_bond_configuration_is_drawn(smiles, written_cis):
	graph = _draw(smiles)
	configurations = list(stereo.double_bond_configurations(graph))
	assert len(configurations) == 1
	edge, first_id, second_id, cis = configurations[0]
	assert cis == written_cis
	assert stereo.is_drawn_cis(graph, edge, first_id, second_id) == written_cis


#============================================
def test_unmarked_double_bond_is_not_reported():
	graph = _draw("FC=CF")
	assert list(stereo.double_bond_configurations(graph)) == []


#============================================
def test_repair_mirrors_wrong_side():
	graph = _draw("F/C=C/F")
	edge = graph.get_edge(1, 2)
	fluorine = graph.vertices[3]
	start = graph.vertices[1].position
	end = graph.vertices[2].position
	# force the cis drawing, then let the stereo stage fix it
	fluorine.set_position(geometry.reflect_across_line(fluorine.position, start, end))
	assert stereo.is_drawn_cis(graph, edge, 0, 3)
	assert stereo.repair_cis_trans(graph) == 1
	assert not stereo.is_drawn_cis(graph, edge, 0, 3)
