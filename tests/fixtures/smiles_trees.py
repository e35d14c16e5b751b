"""Build SMILES parse trees for tests.

Covers the organic subset, aromatic atoms, bracket atoms, branches,
ring-closure digits and %nn labels, and every bond symbol. Produces the
same node shape as the parser used by applications: 'bond' is the bond to
'next', 'branchBond' sits on the first node of a branch.
"""

BOND_SYMBOLS = "-=#$:/\\."
ORGANIC_TWO_LETTER = ("Cl", "Br")
ORGANIC_ONE_LETTER = "BCNOPSFIbcnops*"
BRACKET_TWO_LETTER = (
	"Cl", "Br", "Na", "Li", "Mg", "Si", "Se", "Fe", "Co", "Cu", "Zn",
	"Ca", "Al", "As", "Pt", "Hg", "se", "as",
)


#============================================
def _new_node(atom):
	return {
		"atom": atom,
		"bond": "-",
		"branchBond": None,
		"ringbonds": [],
		"branches": [],
		"branchCount": 0,
		"ringbondCount": 0,
		"next": None,
		"hasNext": False,
	}


#============================================
class _Reader:
	def __init__(self, text):
		self.text = text
		self.pos = 0

	def peek(self, offset=0):
		index = self.pos + offset
		if index < len(self.text):
			return self.text[index]
		return ""

	def take(self):
		char = self.peek()
		self.pos += 1
		return char

	def read_digits(self):
		start = self.pos
		while self.peek().isdigit():
			self.pos += 1
		return self.text[start:self.pos]

	#============================================
	def read_chain(self):
		first = self.read_atom()
		node = first
		while True:
			self.read_ringbonds(node)
			self.read_branches(node)
			bond = None
			if self.peek() and self.peek() in BOND_SYMBOLS:
				bond = self.take()
			if not self.peek() or self.peek() == ")":
				if bond is not None:
					raise ValueError(f"dangling bond at {self.pos} in {self.text!r}")
				return first
			following = self.read_atom()
			node["bond"] = bond or "-"
			node["next"] = following
			node["hasNext"] = True
			node = following

	#============================================
	def read_ringbonds(self, node):
		while True:
			bond = None
			offset = 0
			if self.peek() and self.peek() in BOND_SYMBOLS and self.peek(1) and (self.peek(1).isdigit() or self.peek(1) == "%"):
				bond = self.peek()
				offset = 1
			char = self.peek(offset)
			if char.isdigit():
				self.pos += offset + 1
				label = int(char)
			elif char == "%":
				self.pos += offset + 1
				label = int(self.take() + self.take())
			else:
				return
			node["ringbonds"].append({"id": label, "bond": bond})
			node["ringbondCount"] += 1

	#============================================
	def read_branches(self, node):
		while self.peek() == "(":
			self.take()
			bond = None
			if self.peek() in BOND_SYMBOLS:
				bond = self.take()
			branch = self.read_chain()
			if self.take() != ")":
				raise ValueError(f"unclosed branch in {self.text!r}")
			branch["branchBond"] = bond
			node["branches"].append(branch)
			node["branchCount"] += 1

	#============================================
	def read_atom(self):
		char = self.peek()
		if char == "[":
			return _new_node(self.read_bracket())
		if self.text[self.pos:self.pos + 2] in ORGANIC_TWO_LETTER:
			self.pos += 2
			return _new_node(self.text[self.pos - 2:self.pos])
		if char and char in ORGANIC_ONE_LETTER:
			self.pos += 1
			return _new_node(char)
		raise ValueError(f"unexpected {char!r} at {self.pos} in {self.text!r}")

	#============================================
	def read_bracket(self):
		self.take()
		isotope = self.read_digits()
		if self.text[self.pos:self.pos + 2] in BRACKET_TWO_LETTER:
			element = self.text[self.pos:self.pos + 2]
			self.pos += 2
		else:
			element = self.take()
		chirality = None
		if self.peek() == "@":
			self.take()
			chirality = "@"
			if self.peek() == "@":
				self.take()
				chirality = "@@"
		hcount = 0
		if self.peek() == "H":
			self.take()
			digits = self.read_digits()
			hcount = int(digits) if digits else 1
		charge = 0
		if self.peek() in ("+", "-"):
			sign = self.take()
			factor = 1 if sign == "+" else -1
			digits = self.read_digits()
			if digits:
				charge = factor * int(digits)
			else:
				charge = factor
				while self.peek() == sign:
					self.take()
					charge += factor
		atom_class = None
		if self.peek() == ":":
			self.take()
			atom_class = int(self.read_digits())
		if self.take() != "]":
			raise ValueError(f"unclosed bracket atom in {self.text!r}")
		return {
			"element": element,
			"chirality": chirality,
			"hcount": hcount,
			"charge": charge,
			"isotope": int(isotope) if isotope else None,
			"class": atom_class,
		}


#============================================
def tree(text):
	"""Return the parse tree of a SMILES string."""
	reader = _Reader(text)
	root = reader.read_chain()
	if reader.pos != len(text):
		raise ValueError(f"trailing text at {reader.pos} in {text!r}")
	return root
