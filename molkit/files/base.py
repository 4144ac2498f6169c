"""
File-format plugin base class and registry.

A file format is a :class:`MoleculeFile` subclass that overrides
:meth:`~MoleculeFile.parse_string` and/or :meth:`~MoleculeFile.write_string`
and registers itself under a name when its module is imported:

    class MyFile(MoleculeFile):
        @classmethod
        def parse_string(cls, text, **options):
            mol = cls.mol_class(options)()
            ...
            return mol

    register_format("myfile", MyFile)

Options understood by every format:
    mol_class: Molecule class to build (default :class:`molkit.types.Molecule`).
    atom_class: Atom class to build (default ``mol_class.atom_class``).
    bond_class: Bond class to build (default ``mol_class.bond_class``).

Unknown options are ignored, so the same options can be passed to any
format.
"""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Union

from molkit.exceptions import FormatError

if TYPE_CHECKING:
    from molkit.types import Atom, Bond, Molecule

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO[str]]

_FORMATS: dict[str, type["MoleculeFile"]] = {}


def _read_text(source: Source) -> str:
    if hasattr(source, "read"):
        return source.read()
    return Path(source).read_text(encoding="utf-8")


def _write_text(target: Source, text: str) -> None:
    if hasattr(target, "write"):
        target.write(text)
    else:
        Path(target).write_text(text, encoding="utf-8")


class MoleculeFile:
    """Base class for molecule file formats.
    
    All methods are class methods; formats keep no per-file state.
    """
    
    @classmethod
    def mol_class(cls, options: dict[str, Any]) -> type["Molecule"]:
        """Molecule class selected by the ``mol_class`` option."""
        from molkit.types import Molecule
        
        return options.get("mol_class") or Molecule
    
    @classmethod
    def atom_class(cls, options: dict[str, Any]) -> type["Atom"]:
        """Atom class selected by the ``atom_class`` option."""
        return options.get("atom_class") or cls.mol_class(options).atom_class
    
    @classmethod
    def bond_class(cls, options: dict[str, Any]) -> type["Bond"]:
        """Bond class selected by the ``bond_class`` option."""
        return options.get("bond_class") or cls.mol_class(options).bond_class
    
    @classmethod
    def parse_string(cls, text: str, **options: Any) -> "Molecule":
        """Parse a string into a molecule.
        
        Raises:
            FormatError: If the format cannot be read.
        """
        raise FormatError(f"parse_string() is not implemented for {cls.__name__}")
    
    @classmethod
    def write_string(cls, mol: "Molecule", **options: Any) -> str:
        """Convert a molecule to a string.
        
        Raises:
            FormatError: If the format cannot be written.
        """
        raise FormatError(f"write_string() is not implemented for {cls.__name__}")
    
    @classmethod
    def parse_file(cls, source: Source, **options: Any) -> "Molecule":
        """Read a file (path or open text file) and parse its contents."""
        return cls.parse_string(_read_text(source), **options)
    
    @classmethod
    def write_file(cls, mol: "Molecule", target: Source, **options: Any) -> None:
        """Write a molecule to a file (path or open text file)."""
        _write_text(target, cls.write_string(mol, **options))
    
    @classmethod
    def name_is(cls, name: str | os.PathLike, **options: Any) -> bool:
        """Check if a file name belongs to this format.
        
        Only looks at the name, so it works for files yet to be written.
        """
        return False
    
    @classmethod
    def string_is(cls, text: str, **options: Any) -> bool:
        """Check if a string looks like this format."""
        return False
    
    @classmethod
    def file_is(cls, path: str | os.PathLike, **options: Any) -> bool:
        """Check if an existing file is in this format.
        
        Reads the file and asks :meth:`string_is`; falls back to
        :meth:`name_is` when the file cannot be read.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return cls.name_is(path, **options)
        return cls.string_is(text, **options)


def register_format(name: str, file_class: type[MoleculeFile]) -> None:
    """Register a file-format class under ``name``."""
    previous = _FORMATS.get(name)
    if previous is not None and previous is not file_class:
        warnings.warn(
            f"File format '{name}' was registered by {previous.__name__}; "
            f"replacing it with {file_class.__name__}"
        )
    _FORMATS[name] = file_class


def get_format(name: str) -> type[MoleculeFile]:
    """Look up a registered format.
    
    Raises:
        FormatError: If no format is registered under ``name``.
    """
    try:
        return _FORMATS[name]
    except KeyError:
        raise FormatError(
            f"Unknown file format '{name}'; registered: {', '.join(formats())}",
            name,
        ) from None


def formats() -> list[str]:
    """Names of the registered formats, sorted."""
    return sorted(_FORMATS)


def detect_format(path: str | os.PathLike, must_exist: bool = True) -> type[MoleculeFile]:
    """Guess the format of a file.
    
    Args:
        path: File name.
        must_exist: Inspect the file contents (for reading). When False only
            the name is used (for writing).
    
    Raises:
        FormatError: If no registered format claims the file.
    """
    for name, file_class in _FORMATS.items():
        if must_exist:
            claimed = file_class.file_is(path)
        else:
            claimed = file_class.name_is(path)
        if claimed:
            logger.debug("Detected format '%s' for %s", name, path)
            return file_class
    raise FormatError(f"Cannot determine the file format of {os.fspath(path)}")
