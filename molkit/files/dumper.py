"""
Debug dump file format.

Registered as ``"dumper"``. Writes everything a molecule holds (ids, names,
types, attributes, coordinates, explicit masses, bonds with their atom ids
and orders) as JSON with sorted keys, so two dumps of equal molecules
compare equal as text. Reading rebuilds the whole graph and never executes
code, so untrusted files are safe to parse.

Options:
    dumper_indent: Indentation passed to :func:`json.dumps` (default 1,
        None for a single line).

Files are recognized by a ``.json`` suffix or by their leading
``"format": "molkit-dump"`` member.
"""

from __future__ import annotations

import json
import os
import re
from typing import TYPE_CHECKING, Any, Final

from molkit.exceptions import FormatError, ParseError
from molkit.files.base import MoleculeFile, register_format

if TYPE_CHECKING:
    from molkit.base import ChemObject
    from molkit.types import Atom, Bond, Molecule

DUMP_FORMAT: Final[str] = "molkit-dump"
DUMP_VERSION: Final[int] = 1

_HEADER_RE: Final = re.compile(r'\A\s*\{\s*"format"\s*:\s*"molkit-dump"')


def _common(obj: "ChemObject") -> dict[str, Any]:
    return {
        "id": obj.id,
        "name": obj.name,
        "type": obj.type,
        "attrs": dict(obj.attrs),
    }


def _dump_atom(atom: "Atom") -> dict[str, Any]:
    data = _common(atom)
    data.update(
        symbol=atom.symbol,
        atomic_number=atom.atomic_number,
        coords=list(atom.coords),
    )
    # Only an explicitly assigned mass; tabulated masses are looked up on load
    if atom._mass is not None:
        data["mass"] = atom._mass
    return data


def _dump_bond(bond: "Bond") -> dict[str, Any]:
    data = _common(bond)
    data.update(order=bond.order, atoms=[a.id for a in bond.atoms])
    return data


class DumperFile(MoleculeFile):
    """Complete, reproducible JSON dump of a molecule."""
    
    @classmethod
    def write_string(cls, mol: "Molecule", **options: Any) -> str:
        """Dump a molecule.
        
        Raises:
            FormatError: If an attribute value is not JSON serializable.
        """
        data = {
            "format": DUMP_FORMAT,
            "version": DUMP_VERSION,
            "molecule": dict(
                _common(mol),
                atoms=[_dump_atom(a) for a in mol.atoms()],
                bonds=[_dump_bond(b) for b in mol.bonds()],
            ),
        }
        indent = options.get("dumper_indent", 1)
        try:
            return json.dumps(data, indent=indent, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise FormatError(f"Cannot dump molecule {mol.id}: {exc}", "dumper") from exc
    
    @classmethod
    def parse_string(cls, text: str, **options: Any) -> "Molecule":
        """Rebuild a molecule from a dump.
        
        Raises:
            ParseError: If the text is not a molkit dump or is inconsistent.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Invalid dump: {exc.msg}", position=exc.pos) from exc
        if not isinstance(data, dict) or data.get("format") != DUMP_FORMAT:
            raise ParseError("Not a molkit dump")
        
        try:
            return cls._build(data["molecule"], options)
        except KeyError as exc:
            raise ParseError(f"Malformed dump: missing field {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Malformed dump: {exc}") from exc
    
    @classmethod
    def _build(cls, data: dict[str, Any], options: dict[str, Any]) -> "Molecule":
        mol = cls.mol_class(options)(
            id=data["id"], name=data["name"], type=data["type"], attrs=data["attrs"]
        )
        atom_class = cls.atom_class(options)
        bond_class = cls.bond_class(options)
        
        atoms = []
        for a in data["atoms"]:
            atoms.append(atom_class(
                a["symbol"],
                atomic_number=a.get("atomic_number"),
                coords=a["coords"],
                mass=a.get("mass"),
                id=a["id"],
                name=a["name"],
                type=a["type"],
                attrs=a["attrs"],
            ))
        mol.add_atom(*atoms)
        
        bonds = []
        for b in data["bonds"]:
            members = [mol.by_id(atom_id) for atom_id in b["atoms"]]
            if any(m is None for m in members):
                raise ParseError(f"Bond {b['id']} refers to an unknown atom")
            bonds.append(bond_class(
                members,
                order=b["order"],
                id=b["id"],
                name=b["name"],
                type=b["type"],
                attrs=b["attrs"],
            ))
        mol.add_bond(*bonds)
        return mol
    
    @classmethod
    def name_is(cls, name: str | os.PathLike, **options: Any) -> bool:
        return os.fspath(name).lower().endswith(".json")
    
    @classmethod
    def string_is(cls, text: str, **options: Any) -> bool:
        return bool(_HEADER_RE.match(text))


register_format("dumper", DumperFile)
