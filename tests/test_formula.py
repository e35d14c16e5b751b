"""Tests for molecular formulas."""

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
import smiles_trees
from skeletal import formula
from skeletal import graph_builder


#============================================
@pytest.mark.parametrize(
	"smiles, expected",
	[
		("c1ccccc1", "C6H6"),
		("CCO", "C2H6O"),
		("C", "CH4"),
		("C[H]", "CH4"),
		("c1cc[nH]c1", "C4H5N"),
		("n1ccccc1", "C5H5N"),
		("N[C@@H](C)C(=O)O", "C3H7NO2"),
		("CS(=O)(=O)O", "CH4O3S"),
		("CC(=O)[O-].[Na+]", "C2H3NaO2"),
		("[NH4+]", "H4N"),
		("[Na+].[Cl-]", "ClNa"),
		("C#N", "CHN"),
	],
)
def test_molecular_formula(smiles, expected):
	graph = graph_builder.build(smiles_trees.tree(smiles))
	assert formula.molecular_formula(graph) == expected


#============================================
def test_formula_ignores_stereo_mode():
	tree = smiles_trees.tree("N[C@@H](C)C(=O)O")
	isomeric = formula.molecular_formula(graph_builder.build(tree, isomeric=True))
	flat = formula.molecular_formula(graph_builder.build(tree, isomeric=False))
	assert isomeric == flat


#============================================
def test_format_formula_order():
	assert formula.format_formula({"O": 1, "H": 2}) == "H2O"
	assert formula.format_formula({"Br": 1, "C": 2, "H": 5}) == "C2H5Br"
	assert formula.format_formula({"C": 0, "N": 2}) == "N2"


#============================================
def test_wildcard_atoms_are_skipped():
	graph = graph_builder.build(smiles_trees.tree("*C"))
	assert formula.element_counts(graph) == {"C": 1, "H": 3}
