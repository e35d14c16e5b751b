#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""skeletal - 2D layout of molecules from SMILES parse trees."""

# local repo modules
from .drawer import Drawer
from .errors import LayoutDegeneracy
from .errors import StructuralError
from .formula import molecular_formula
from .graph import Graph
from .graph_builder import build
from .layout import LAYOUT_STAGES
from .layout import LayoutEngine
from .options import LayoutOptions
from .options import make_options
from .overlap import OverlapResolver
from .reaction import Reaction
from .ring_perception import perceive_rings

__all__ = [
	"Drawer",
	"Graph",
	"LAYOUT_STAGES",
	"LayoutDegeneracy",
	"LayoutEngine",
	"LayoutOptions",
	"OverlapResolver",
	"Reaction",
	"StructuralError",
	"build",
	"make_options",
	"molecular_formula",
	"perceive_rings",
]

__version__ = "0.1.0"
