"""Tests for bond symbol semantics and wedge orientation."""

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
import smiles_trees
from skeletal import bond_semantics
from skeletal import graph_builder
from skeletal.errors import StructuralError


#============================================
@pytest.mark.parametrize(
	"symbol, order",
	[(None, 1), ("", 1), ("-", 1), ("=", 2), ("#", 3), ("$", 4), (":", 1), ("/", 1), ("\\", 1), (".", 0)],
)
def test_bond_order(symbol, order):
	assert bond_semantics.bond_order(symbol) == order


#============================================
def test_unknown_bond_symbol_raises():
	with pytest.raises(StructuralError):
		bond_semantics.normalize_bond_symbol("~")


#============================================
def test_is_directional():
	assert bond_semantics.is_directional("/")
	assert not bond_semantics.is_directional("-")


#============================================
def test_canonicalize_puts_stereocenter_first():
	graph = graph_builder.build(smiles_trees.tree("N[C@@H](C)O"))
	center_id = 1
	edge = graph.get_edge(0, center_id)
	assert edge.source_id == 0
	edge.set_wedge("up")
	bond_semantics.canonicalize_wedge_edge(edge, graph)
	assert edge.source_id == center_id
	assert edge.target_id == 0


#============================================
def test_canonicalize_skips_plain_edges():
	graph = graph_builder.build(smiles_trees.tree("CC"))
	edge = graph.edges[0]
	bond_semantics.canonicalize_wedge_edge(edge, graph)
	assert (edge.source_id, edge.target_id) == (0, 1)
