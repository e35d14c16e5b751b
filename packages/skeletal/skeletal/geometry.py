#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Primitive 2D geometry operations on (x, y) tuples."""

# Standard Library
import math

# local repo modules
from .errors import LayoutDegeneracy


EPSILON = 1e-9


#============================================
def add(a: tuple[float, float], b: tuple[float, float]) -> tuple[float, float]:
	return (a[0] + b[0], a[1] + b[1])


#============================================
def sub(a: tuple[float, float], b: tuple[float, float]) -> tuple[float, float]:
	return (a[0] - b[0], a[1] - b[1])


#============================================
def scale(a: tuple[float, float], factor: float) -> tuple[float, float]:
	return (a[0] * factor, a[1] * factor)


#============================================
def dot(a: tuple[float, float], b: tuple[float, float]) -> float:
	return a[0] * b[0] + a[1] * b[1]


#============================================
def cross(a: tuple[float, float], b: tuple[float, float]) -> float:
	"""Return the z component of the 3D cross product of two 2D vectors."""
	return a[0] * b[1] - a[1] * b[0]


#============================================
def length(a: tuple[float, float]) -> float:
	return math.hypot(a[0], a[1])


#============================================
def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
	return math.hypot(a[0] - b[0], a[1] - b[1])


#============================================
def distance_sq(a: tuple[float, float], b: tuple[float, float]) -> float:
	dx = a[0] - b[0]
	dy = a[1] - b[1]
	return dx * dx + dy * dy


#============================================
def normalize(a: tuple[float, float]) -> tuple[float, float]:
	"""Return the unit vector of a.

	Raises:
		LayoutDegeneracy: When a has (near) zero length.
	"""
	norm = length(a)
	if norm <= EPSILON:
		raise LayoutDegeneracy(f"cannot normalize zero-length vector {a}")
	return (a[0] / norm, a[1] / norm)


#============================================
def angle_of(a: tuple[float, float]) -> float:
	"""Return the direction angle of a vector in radians.

	Raises:
		LayoutDegeneracy: When a has (near) zero length.
	"""
	if length(a) <= EPSILON:
		raise LayoutDegeneracy(f"zero-length vector {a} has no direction")
	return math.atan2(a[1], a[0])


#============================================
def from_angle(angle: float, radius: float = 1.0) -> tuple[float, float]:
	return (math.cos(angle) * radius, math.sin(angle) * radius)


#============================================
def rotate(a: tuple[float, float], angle: float) -> tuple[float, float]:
	cos_a = math.cos(angle)
	sin_a = math.sin(angle)
	return (a[0] * cos_a - a[1] * sin_a, a[0] * sin_a + a[1] * cos_a)


#============================================
def rotate_around(
		point: tuple[float, float],
		center: tuple[float, float],
		angle: float) -> tuple[float, float]:
	"""Rotate point around center by angle radians (counterclockwise)."""
	return add(rotate(sub(point, center), angle), center)


#============================================
def midpoint(a: tuple[float, float], b: tuple[float, float]) -> tuple[float, float]:
	return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


#============================================
def centroid(points) -> tuple[float, float]:
	"""Return the arithmetic mean of a non-empty sequence of points."""
	points = list(points)
	if not points:
		raise LayoutDegeneracy("centroid of an empty point set")
	sum_x = sum(point[0] for point in points)
	sum_y = sum(point[1] for point in points)
	return (sum_x / len(points), sum_y / len(points))


#============================================
def is_finite(point) -> bool:
	if point is None:
		return False
	return math.isfinite(point[0]) and math.isfinite(point[1])


#============================================
def normalize_angle(angle: float) -> float:
	"""Wrap an angle into (-pi, pi]."""
	wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
	if wrapped <= 0:
		wrapped += 2.0 * math.pi
	return wrapped - math.pi


#============================================
def poly_circumradius(side_length: float, ring_size: int) -> float:
	"""Return the circumradius of a regular polygon.

	Args:
		side_length: Edge length of the polygon.
		ring_size: Number of polygon corners, at least 3.

	Returns:
		float: Distance from the polygon center to each corner.
	"""
	if ring_size < 3:
		raise LayoutDegeneracy(f"polygon needs at least 3 corners, got {ring_size}")
	return side_length / (2.0 * math.sin(math.pi / ring_size))


#============================================
def apothem(circumradius: float, ring_size: int) -> float:
	"""Return the distance from a regular polygon center to an edge midpoint."""
	return circumradius * math.cos(math.pi / ring_size)


#============================================
def central_angle(ring_size: int) -> float:
	return 2.0 * math.pi / ring_size


#============================================
def inner_angle(ring_size: int) -> float:
	"""Return the interior angle at each corner of a regular polygon."""
	return math.pi - central_angle(ring_size)


#============================================
def reflect_across_line(
		point: tuple[float, float],
		line_start: tuple[float, float],
		line_end: tuple[float, float]) -> tuple[float, float]:
	"""Mirror point across the infinite line through line_start and line_end.

	Raises:
		LayoutDegeneracy: When the two line points coincide.
	"""
	direction = normalize(sub(line_end, line_start))
	offset = sub(point, line_start)
	along = scale(direction, dot(offset, direction))
	perpendicular = sub(offset, along)
	return add(line_start, sub(along, perpendicular))


#============================================
def side_of_line(
		point: tuple[float, float],
		line_start: tuple[float, float],
		line_end: tuple[float, float]) -> int:
	"""Return +1 or -1 for the side of the line a point lies on, 0 on the line."""
	value = cross(sub(line_end, line_start), sub(point, line_start))
	if abs(value) <= EPSILON:
		return 0
	if value > 0:
		return 1
	return -1


#============================================
def point_to_segment_distance_sq(
		point: tuple[float, float],
		seg_start: tuple[float, float],
		seg_end: tuple[float, float]) -> float:
	"""Return squared distance from one point to one segment."""
	px, py = point
	x1, y1 = seg_start
	x2, y2 = seg_end
	dx = x2 - x1
	dy = y2 - y1
	denominator = (dx * dx) + (dy * dy)
	if denominator <= 1e-12:
		return ((px - x1) * (px - x1)) + ((py - y1) * (py - y1))
	t_value = ((px - x1) * dx + (py - y1) * dy) / denominator
	t_value = max(0.0, min(1.0, t_value))
	closest_x = x1 + (dx * t_value)
	closest_y = y1 + (dy * t_value)
	return ((px - closest_x) * (px - closest_x)) + ((py - closest_y) * (py - closest_y))


#============================================
def determinant3(rows) -> float:
	"""Return the determinant of a 3x3 matrix given as three rows."""
	(a, b, c), (d, e, f), (g, h, i) = rows
	return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


#============================================
def parity_of_permutation(sequence) -> int:
	"""Return +1 for an even and -1 for an odd permutation of sortable items."""
	items = list(sequence)
	swaps = 0
	for i in range(len(items)):
		for j in range(i + 1, len(items)):
			if items[i] > items[j]:
				swaps += 1
	if swaps % 2 == 0:
		return 1
	return -1
