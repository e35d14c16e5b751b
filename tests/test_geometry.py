"""Tests for the 2D vector helpers."""

# Standard Library
import math

# Third Party
import pytest

# Local repo modules
import conftest


conftest.add_skeletal_to_sys_path()

# local repo modules
from skeletal import geometry
from skeletal.errors import LayoutDegeneracy


#============================================
def test_normalize_zero_vector_raises():
	with pytest.raises(LayoutDegeneracy):
		geometry.normalize((0.0, 0.0))


#============================================
def test_layout_degeneracy_is_value_error():
	with pytest.raises(ValueError):
		geometry.angle_of((0.0, 0.0))


#============================================
def test_rotate_quarter_turn():
	x, y = geometry.rotate((1.0, 0.0), math.pi / 2.0)
	assert x == pytest.approx(0.0, abs=1e-12)
	assert y == pytest.approx(1.0)


#============================================
def test_rotate_around_center():
	point = geometry.rotate_around((2.0, 1.0), (1.0, 1.0), math.pi)
	assert point == pytest.approx((0.0, 1.0))


#============================================
def test_hexagon_circumradius_equals_side():
	assert geometry.poly_circumradius(30.0, 6) == pytest.approx(30.0)


#============================================
def test_polygon_needs_three_corners():
	with pytest.raises(LayoutDegeneracy):
		geometry.poly_circumradius(30.0, 2)


#============================================
def test_apothem_of_square():
	radius = geometry.poly_circumradius(2.0, 4)
	assert geometry.apothem(radius, 4) == pytest.approx(1.0)


#============================================
def test_inner_angle_of_hexagon():
	assert geometry.inner_angle(6) == pytest.approx(math.radians(120.0))


#============================================
def test_side_of_line():
	assert geometry.side_of_line((0.5, 1.0), (0.0, 0.0), (1.0, 0.0)) == 1
	assert geometry.side_of_line((0.5, -1.0), (0.0, 0.0), (1.0, 0.0)) == -1
	assert geometry.side_of_line((2.0, 0.0), (0.0, 0.0), (1.0, 0.0)) == 0


#============================================
def test_reflect_across_line():
	point = geometry.reflect_across_line((1.0, 2.0), (0.0, 0.0), (3.0, 0.0))
	assert point == pytest.approx((1.0, -2.0))


#============================================
def test_point_to_segment_distance_clamps_to_end():
	dist_sq = geometry.point_to_segment_distance_sq((3.0, 4.0), (-1.0, 0.0), (0.0, 0.0))
	assert dist_sq == pytest.approx(25.0)


#============================================
def test_centroid_of_empty_set_raises():
	with pytest.raises(LayoutDegeneracy):
		geometry.centroid([])


#============================================
def test_normalize_angle_wraps():
	assert geometry.normalize_angle(2.5 * math.pi) == pytest.approx(math.pi / 2.0)
	assert geometry.normalize_angle(-math.pi / 2.0) == pytest.approx(-math.pi / 2.0)


#============================================
def test_determinant_of_identity():
	rows = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
	assert geometry.determinant3(rows) == pytest.approx(1.0)


#============================================
def test_parity_of_permutation():
	assert geometry.parity_of_permutation([0, 1, 2, 3]) == 1
	assert geometry.parity_of_permutation([1, 0, 2, 3]) == -1
	assert geometry.parity_of_permutation([1, 2, 0, 3]) == 1
