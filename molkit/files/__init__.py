"""Molecule file formats: plugin base class, registry and built-in formats."""

from molkit.files.base import (
    MoleculeFile,
    register_format,
    get_format,
    formats,
    detect_format,
)
from molkit.files.formula import FormulaFile
from molkit.files.dumper import DumperFile

__all__ = [
    "MoleculeFile",
    "register_format",
    "get_format",
    "formats",
    "detect_format",
    "FormulaFile",
    "DumperFile",
]
