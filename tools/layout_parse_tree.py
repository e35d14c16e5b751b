#!/usr/bin/env python3
"""Lay out a JSON SMILES parse tree and print the graph as JSON."""

# Standard Library
import argparse
import json
import logging
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SKELETAL_DIR = os.path.join(REPO_ROOT, "packages", "skeletal")
if SKELETAL_DIR not in sys.path:
	sys.path.insert(0, SKELETAL_DIR)

# local repo modules
import skeletal


#============================================
def parse_args(argv=None):
	"""Parse command-line arguments."""
	parser = argparse.ArgumentParser(
		description="Compute 2D coordinates for a SMILES parse tree stored as JSON."
	)
	parser.add_argument(
		"-i",
		"--input",
		dest="input_path",
		default="-",
		help="Path to the parse-tree JSON file ('-' reads stdin).",
	)
	parser.add_argument(
		"-o",
		"--output",
		dest="output_path",
		default="-",
		help="Path to write the layout JSON ('-' writes stdout).",
	)
	parser.add_argument(
		"-b",
		"--bond-length",
		dest="bond_length",
		type=float,
		default=None,
		help="Bond length in drawing units.",
	)
	parser.add_argument(
		"-n",
		"--iterations",
		dest="overlap_resolution_iterations",
		type=int,
		default=None,
		help="Overlap resolution iteration limit.",
	)
	parser.add_argument(
		"--no-isomeric",
		dest="isomeric",
		action="store_false",
		help="Ignore chirality and cis/trans marks.",
	)
	parser.add_argument(
		"--expanded",
		dest="compact_drawing",
		action="store_false",
		help="Draw every atom instead of collapsing terminal groups.",
	)
	parser.add_argument(
		"-v",
		"--verbose",
		dest="verbose",
		action="store_true",
		help="Log the layout summary to stderr.",
	)
	return parser.parse_args(argv)


#============================================
def read_tree(input_path):
	"""Load the parse tree from a file or stdin."""
	if input_path == "-":
		return json.load(sys.stdin)
	with open(input_path, "r") as handle:
		return json.load(handle)


#============================================
def layout_tree(tree, overrides):
	"""Lay out one tree and return a JSON-ready dict."""
	drawer = skeletal.Drawer(**overrides)
	graph = drawer.draw(tree)
	data = graph.as_dict()
	data["overlap_score"] = drawer.get_total_overlap_score()
	data["formula"] = drawer.get_molecular_formula()
	return data


#============================================
def option_overrides(args):
	"""Collect the option values given on the command line."""
	overrides = {
		"isomeric": args.isomeric,
		"compact_drawing": args.compact_drawing,
		"debug": args.verbose,
	}
	if args.bond_length is not None:
		overrides["bond_length"] = args.bond_length
	if args.overlap_resolution_iterations is not None:
		overrides["overlap_resolution_iterations"] = args.overlap_resolution_iterations
	return overrides


#============================================
def main(argv=None):
	"""Run the layout and write the result."""
	args = parse_args(argv)
	if args.verbose:
		logging.basicConfig(level=logging.INFO, stream=sys.stderr)
	tree = read_tree(args.input_path)
	try:
		data = layout_tree(tree, option_overrides(args))
	except skeletal.StructuralError as error:
		print(f"invalid parse tree: {error}", file=sys.stderr)
		return 1
	text = json.dumps(data, indent=2)
	if args.output_path == "-":
		print(text)
	else:
		with open(args.output_path, "w") as handle:
			handle.write(text + "\n")
	return 0


if __name__ == "__main__":
	sys.exit(main())
