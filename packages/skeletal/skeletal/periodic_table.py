#--------------------------------------------------------------------------
#     This file is part of skeletal - a 2D molecule layout library
#--------------------------------------------------------------------------

"""Load element data from the packaged JSON file."""

# Standard Library
import json
import os


DATA_PATH = os.path.abspath(
	os.path.join(os.path.dirname(__file__), "data", "elements.json")
)

# largest valences allowed for unbracketed atoms
ORGANIC_SUBSET_VALENCES = {
	"B": 3,
	"C": 4,
	"N": 5,
	"O": 2,
	"P": 5,
	"S": 6,
	"F": 1,
	"Cl": 1,
	"Br": 1,
	"I": 1,
}


#============================================
def _load_elements():
	"""Load element data from JSON into a symbol-keyed dict."""
	with open(DATA_PATH, "r") as handle:
		raw_data = json.load(handle)
	elements = {}
	for symbol, entry in raw_data.items():
		elements[symbol] = {
			"number": int(entry["number"]),
			"max_bonds": int(entry["max_bonds"]),
		}
	return elements


elements = _load_elements()


#============================================
def normalize_symbol(symbol: str) -> str:
	"""Return the canonical capitalization of an element symbol.

	Aromatic (lower case) symbols such as 'c' or 'se' map to 'C' and 'Se'.
	"""
	if not symbol:
		raise ValueError("element symbol must be a non-empty string")
	return symbol[0].upper() + symbol[1:].lower()


#============================================
def is_known(symbol: str) -> bool:
	return normalize_symbol(symbol) in elements


#============================================
def atomic_number(symbol: str) -> int:
	"""Return the atomic number for symbol, 0 for unknown symbols."""
	entry = elements.get(normalize_symbol(symbol))
	if entry is None:
		return 0
	return entry["number"]


#============================================
def max_bonds(symbol: str) -> int:
	"""Return the default number of bonds used to infer implicit hydrogens."""
	entry = elements.get(normalize_symbol(symbol))
	if entry is None:
		return 0
	return entry["max_bonds"]
