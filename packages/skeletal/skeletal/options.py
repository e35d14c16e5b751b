#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Layout options and option merging."""

# Standard Library
import dataclasses


ATOM_VISUALIZATIONS = ("default", "balls", "allballs")

# camelCase names accepted as aliases of the field names
OPTION_ALIASES = {
	"bondLength": "bond_length",
	"bondSpacing": "bond_spacing",
	"shortBondLength": "short_bond_length",
	"overlapSensitivity": "overlap_sensitivity",
	"overlapResolutionIterations": "overlap_resolution_iterations",
	"fontSizeLarge": "font_size_large",
	"fontSizeSmall": "font_size_small",
	"atomVisualization": "atom_visualization",
	"compactDrawing": "compact_drawing",
}


#============================================
@dataclasses.dataclass(frozen=True)
class LayoutOptions:
	"""Geometric constants for one layout pass.

	Options never change the topology of the graph, only distances,
	thresholds and the iteration limit.
	"""
	bond_length: float = 30.0
	bond_spacing: float = 0.17 * 30.0
	short_bond_length: float = 0.8
	overlap_sensitivity: float = 0.42
	overlap_resolution_iterations: int = 1
	font_size_large: float = 11.0
	font_size_small: float = 3.0
	atom_visualization: str = "default"
	compact_drawing: bool = True
	isomeric: bool = True
	debug: bool = False

	def __post_init__(self):
		if self.bond_length <= 0:
			raise ValueError(f"bond_length must be positive, got {self.bond_length}")
		if self.bond_spacing < 0:
			raise ValueError(f"bond_spacing must be non-negative, got {self.bond_spacing}")
		if not 0.0 < self.short_bond_length <= 1.0:
			raise ValueError(
				f"short_bond_length must be in (0, 1], got {self.short_bond_length}"
			)
		if self.overlap_sensitivity < 0:
			raise ValueError(
				f"overlap_sensitivity must be non-negative, got {self.overlap_sensitivity}"
			)
		if int(self.overlap_resolution_iterations) != self.overlap_resolution_iterations:
			raise ValueError("overlap_resolution_iterations must be an integer")
		if self.overlap_resolution_iterations < 0:
			raise ValueError("overlap_resolution_iterations must be non-negative")
		if self.atom_visualization not in ATOM_VISUALIZATIONS:
			raise ValueError(f"Unknown atom_visualization: {self.atom_visualization}")

	@property
	def short_bond_threshold(self):
		"""Distance below which two atoms of the same ring system overlap."""
		return self.bond_length * self.short_bond_length

	@property
	def label_clearance(self):
		"""Distance an atom keeps from bonds it is not part of."""
		return self.bond_spacing + self.font_size_large / 2.0


#============================================
def make_options(options=None, **overrides) -> LayoutOptions:
	"""Build LayoutOptions from a mapping and keyword overrides.

	Args:
		options: LayoutOptions instance, mapping of option names, or None.
		**overrides: Option names (snake_case or camelCase) and values.

	Returns:
		LayoutOptions: Validated options.
	"""
	if isinstance(options, LayoutOptions):
		base = options
	else:
		base = LayoutOptions()
	values = {}
	if options is not None and not isinstance(options, LayoutOptions):
		values.update(options)
	values.update(overrides)
	if not values:
		return base
	field_names = {field.name for field in dataclasses.fields(LayoutOptions)}
	changes = {}
	for key, value in values.items():
		name = OPTION_ALIASES.get(key, key)
		if name not in field_names:
			raise ValueError(f"Unknown layout option: {key}")
		changes[name] = value
	return dataclasses.replace(base, **changes)
