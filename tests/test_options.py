"""Tests for layout option merging and validation."""

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
from skeletal import options


#============================================
def test_defaults():
	opts = options.LayoutOptions()
	assert opts.bond_length == 30.0
	assert opts.short_bond_length == 0.8
	assert opts.overlap_resolution_iterations == 1
	assert opts.atom_visualization == "default"
	assert opts.isomeric is True


#============================================
def test_short_bond_threshold_scales_with_bond_length():
	opts = options.make_options(bond_length=50.0, short_bond_length=0.5)
	assert opts.short_bond_threshold == pytest.approx(25.0)


#============================================
def test_label_clearance():
	opts = options.make_options(bond_spacing=4.0, font_size_large=10.0)
	assert opts.label_clearance == pytest.approx(9.0)


#============================================
def test_camel_case_aliases():
	opts = options.make_options({"bondLength": 40.0, "compactDrawing": False})
	assert opts.bond_length == 40.0
	assert opts.compact_drawing is False


#============================================
def test_overrides_win_over_mapping():
	opts = options.make_options({"bond_length": 40.0}, bond_length=20.0)
	assert opts.bond_length == 20.0


#============================================
def test_existing_options_are_reused():
	base = options.LayoutOptions(bond_length=12.0)
	assert options.make_options(base) is base
	changed = options.make_options(base, debug=True)
	assert changed.bond_length == 12.0
	assert changed.debug is True


#============================================
def test_unknown_option_raises():
	with pytest.raises(ValueError, match="Unknown layout option"):
		options.make_options(bondLenght=30.0)


#============================================
@pytest.mark.parametrize(
	"overrides",
	[
		{"bond_length": 0.0},
		{"short_bond_length": 1.5},
		{"overlap_sensitivity": -0.1},
		{"overlap_resolution_iterations": -1},
		{"overlap_resolution_iterations": 1.5},
		{"atom_visualization": "sticks"},
	],
)
def test_invalid_values_raise(overrides):
	with pytest.raises(ValueError):
		options.make_options(**overrides)
