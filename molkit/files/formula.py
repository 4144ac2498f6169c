"""
Molecular formula file format.

Registered as ``"formula"``. Writing renders the molecule's formula through
:func:`molkit.formula.format_formula`; parsing builds one unbonded atom per
element count. Formula files are never detected automatically.

Options:
    formula_format: Template for writing (default ``"%s%d"``).
    formula_sort: Ordering preset name or callable for writing.
    formula_grammar: ``"basic"`` (default) or ``"extended"`` for parsing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from molkit.files.base import MoleculeFile, Source, _read_text, register_format
from molkit.formula import parse_formula

if TYPE_CHECKING:
    from molkit.types import Molecule

GRAMMARS = ("basic", "extended")


class FormulaFile(MoleculeFile):
    """Reader/writer for formula strings such as ``"C2H6O"``."""
    
    @classmethod
    def parse_string(cls, text: str, **options: Any) -> "Molecule":
        """Build a molecule with ``count`` atoms of each element.
        
        Raises:
            InvalidFormulaError: If the text is not a valid formula.
            ValueError: If ``formula_grammar`` is not a known grammar.
        """
        grammar = options.get("formula_grammar") or "basic"
        if grammar not in GRAMMARS:
            raise ValueError(f"Unknown formula grammar '{grammar}'")
        counts = parse_formula(text, extended=grammar == "extended")
        
        mol = cls.mol_class(options)()
        atom_class = cls.atom_class(options)
        for symbol, count in counts.items():
            mol.add_atom(*(atom_class(symbol) for _ in range(count)))
        return mol
    
    @classmethod
    def parse_file(cls, source: Source, **options: Any) -> "Molecule":
        """Read a formula from the first line of a file."""
        return cls.parse_string(_read_text(source).strip(), **options)
    
    @classmethod
    def write_string(cls, mol: "Molecule", **options: Any) -> str:
        return mol.formula(options.get("formula_format"), options.get("formula_sort"))
    
    @classmethod
    def file_is(cls, path, **options: Any) -> bool:
        return False


register_format("formula", FormulaFile)
