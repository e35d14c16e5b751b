"""Tests for the Drawer entry point."""

# Standard Library
import logging

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
import skeletal
import smiles_trees
from skeletal.drawer import Drawer
from skeletal.errors import StructuralError
from skeletal.overlap import OverlapResolver


#============================================
def test_draw_returns_placed_graph():
	drawer = Drawer()
	graph = drawer.draw(smiles_trees.tree("CC(=O)O"))
	assert graph is drawer.graph
	assert all(vertex.positioned for vertex in graph.vertices)
	assert drawer.engine.stage == "done"


#============================================
def test_overlap_score_and_formula():
	drawer = Drawer()
	drawer.draw(smiles_trees.tree("c1ccccc1"))
	assert drawer.get_total_overlap_score() == pytest.approx(0.0)
	assert drawer.get_molecular_formula() == "C6H6"


#============================================
def test_formula_of_another_tree():
	drawer = Drawer()
	assert drawer.get_molecular_formula(smiles_trees.tree("CCO")) == "C2H6O"
	assert drawer.graph is None


#============================================
def test_accessors_need_a_drawing():
	drawer = Drawer()
	with pytest.raises(RuntimeError):
		drawer.get_total_overlap_score()
	with pytest.raises(RuntimeError):
		drawer.get_molecular_formula()


#============================================
def test_malformed_tree_raises_structural_error():
	with pytest.raises(StructuralError):
		Drawer().draw(smiles_trees.tree("C1CC"))


#============================================
def test_structural_error_is_value_error():
	with pytest.raises(ValueError):
		Drawer().draw({"atom": "Qq"})


#============================================
def test_options_from_mapping_and_keywords():
	drawer = Drawer({"bondLength": 20.0}, isomeric=False)
	assert drawer.options.bond_length == 20.0
	assert drawer.options.isomeric is False


#============================================
def test_unknown_option_raises():
	with pytest.raises(ValueError):
		Drawer(wobble=True)


#============================================
def test_drawer_is_reusable():
	drawer = Drawer()
	first = drawer.draw(smiles_trees.tree("CCC"))
	second = drawer.draw(smiles_trees.tree("CC"))
	assert first is not second
	assert len(second.vertices) == 2
	assert drawer.get_molecular_formula() == "C2H6"


#============================================
def test_debug_logs_summary(caplog):
	with caplog.at_level(logging.INFO, logger="skeletal"):
		Drawer(debug=True).draw(smiles_trees.tree("CCO"))
	messages = [record.getMessage() for record in caplog.records]
	assert any(message.startswith("drew 3 nodes") for message in messages)
	assert any(message.startswith("layout done") for message in messages)


#============================================
def test_package_exports():
	assert skeletal.Drawer is Drawer
	assert skeletal.LAYOUT_STAGES[0] == "unplaced"
	assert skeletal.LAYOUT_STAGES[-1] == "done"


#============================================
@pytest.mark.parametrize("smiles", [
	"CC(C)(C)/C=C\\C(C)(C)C",
	"F/C=C\\F",
	"CC12CCCCC1CCCC2",
	"CC12CCC(O)CC1CCC1C2CCC2(C)CCCC12",
	"N[C@@H](Cc1ccccc1)C(=O)O",
	"C1CC2CCC1C2",
])
def test_reported_score_matches_final_geometry(smiles):
	drawer = Drawer()
	graph = drawer.draw(smiles_trees.tree(smiles))
	fresh, _ = OverlapResolver(graph, drawer.options).get_overlap_score()
	assert drawer.get_total_overlap_score() == pytest.approx(fresh)
