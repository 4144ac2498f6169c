"""
Molkit - molecules as graphs of atoms and bonds.

A small object toolkit for chemistry scripting: atoms, bonds and molecules
with consistent adjacency under mutation, connected-component separation,
cloning and combination, molecular formulas, and basic 3D geometry.

    >>> from molkit import Molecule
    >>> mol = Molecule.parse("H2O")
    >>> len(mol)
    3
    >>> mol.formula("%s%d{<sub>%d</sub>}")
    'H<sub>2</sub>O'

Submodules:
    molkit.geometry - distances, angles and dihedrals
    molkit.formula  - formula parsing and formatting
    molkit.files    - file-format plugins (formula, dumper)
"""

__version__ = "0.1.0"

# Core types
from molkit.base import ChemObject
from molkit.types import Atom, Bond, Molecule

# Exceptions
from molkit.exceptions import (
    ChemError,
    ParseError,
    InvalidFormulaError,
    NotFoundError,
    UnsupportedOperandError,
    DegenerateGeometryError,
    DuplicateIdError,
    FormatError,
)

# Element data
from molkit.elements import Element, ELEMENTS

# Formula codec
from molkit.formula import parse_formula, format_formula, hill_order, FORMULA_SORTS

# Geometry
from molkit.geometry import Vector3, distance, angle, dihedral, angle_deg, dihedral_deg

# Submodules; importing files registers the built-in formats
from molkit import geometry, formula, files

__all__ = [
    # Types
    "ChemObject", "Atom", "Bond", "Molecule",
    # Exceptions
    "ChemError", "ParseError", "InvalidFormulaError", "NotFoundError",
    "UnsupportedOperandError", "DegenerateGeometryError", "DuplicateIdError",
    "FormatError",
    # Elements
    "Element", "ELEMENTS",
    # Formula
    "parse_formula", "format_formula", "hill_order", "FORMULA_SORTS",
    # Geometry
    "Vector3", "distance", "angle", "dihedral", "angle_deg", "dihedral_deg",
    # Submodules
    "geometry", "formula", "files",
]
