"""
Core molecular data types.

This module defines the molecule graph: :class:`Atom`, :class:`Bond` and
:class:`Molecule`. A molecule owns its atoms and bonds; the links between
them (an atom's adjacency list, its parent molecule) are weak references
and never keep an object alive on their own.

Atoms and bonds are created standalone and then attached:

    >>> mol = Molecule()
    >>> c = mol.new_atom("C", coords=(0, 0, 0))
    >>> o = mol.new_atom("O", coords=(1.2, 0, 0))
    >>> b = mol.new_bond(atoms=[c, o], order=2)
    >>> [a.symbol for a in c.neighbors()]
    ['O']
    >>> mol.formula()
    'CO'

Positions passed to :meth:`Molecule.atoms`, :meth:`Molecule.delete_atom`
and friends are 1-based. Deleting an atom or bond shifts every later
position down by one, so positions must not be kept across deletions; ids
and object references stay valid.
"""

from __future__ import annotations

import copy
import functools
import logging
import re
import weakref
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, NamedTuple, Union

from molkit import geometry
from molkit.base import ChemObject
from molkit.elements import get_atomic_mass, get_atomic_number, get_symbol
from molkit.exceptions import DuplicateIdError, NotFoundError, UnsupportedOperandError
from molkit.formula import FormulaSort, format_formula
from molkit.geometry import PointLike, Vector3

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)


class _Link(NamedTuple):
    """Adjacency entry: a neighboring atom and the bond leading to it."""

    neighbor: weakref.ref
    bond: weakref.ref


class Atom(ChemObject):
    """An atom: element, coordinates and its bonded neighbors.

    ``symbol`` and ``atomic_number`` are kept consistent: setting one looks
    the other up in the periodic table. An unknown symbol gives an
    ``atomic_number`` of None, an out-of-range number gives an empty symbol.

    Attributes:
        id: Unique id within the parent molecule (``"a1"``, ``"a2"``... by default).
        name: Free-form name, e.g. a PDB atom name.
        type: Free-form atom type.

    Example:
        >>> atom = Atom("Br", coords=(0.0, 1.0, 0.0))
        >>> atom.atomic_number
        35
    """

    __slots__ = ("_symbol", "_atomic_number", "_coords", "_mass", "_links", "_parent")

    _id_prefix = "a"

    def __init__(
        self,
        symbol: str = "",
        *,
        atomic_number: int | None = None,
        coords: PointLike | None = None,
        mass: float | None = None,
        id: str | None = None,
        name: str = "",
        type: str = "",
        attrs: Mapping[str, Any] | None = None,
    ) -> None:
        """Create an atom.

        Args:
            symbol: Element symbol. Takes precedence over ``atomic_number``.
            atomic_number: Used to derive the symbol when none is given.
            coords: Three coordinates; defaults to the origin.
            mass: Explicit mass overriding the tabulated one.
            id: Explicit id; a sequential one is assigned otherwise.
            name: Free-form name.
            type: Free-form atom type.
            attrs: Initial attribute store.
        """
        super().__init__(id=id, name=name, type=type, attrs=attrs)
        self._symbol = ""
        self._atomic_number: int | None = None
        self._coords = geometry.ORIGIN
        self._mass = mass
        self._links: list[_Link] = []
        self._parent: weakref.ref | None = None

        if symbol:
            self.symbol = symbol
        elif atomic_number is not None:
            self.atomic_number = atomic_number
        if coords is not None:
            self.set_coords(coords)

    def __repr__(self) -> str:
        return f"Atom(id={self.id!r}, symbol={self._symbol!r})"

    # -- element -----------------------------------------------------------

    @property
    def symbol(self) -> str:
        """Element symbol."""
        return self._symbol

    @symbol.setter
    def symbol(self, symbol: str) -> None:
        symbol = symbol.replace(" ", "")
        self._symbol = symbol
        self._atomic_number = get_atomic_number(symbol)

    @property
    def atomic_number(self) -> int | None:
        """Atomic number (Z), or None for an unknown symbol."""
        return self._atomic_number

    @atomic_number.setter
    def atomic_number(self, number: int) -> None:
        self._atomic_number = number
        self._symbol = get_symbol(number) or ""

    @property
    def mass(self) -> float | None:
        """Explicit mass if one was set, else the standard atomic mass.

        None when neither is known. Assign None to drop an explicit mass.
        """
        if self._mass is not None:
            return self._mass
        return get_atomic_mass(self._symbol)

    @mass.setter
    def mass(self, mass: float | None) -> None:
        self._mass = mass

    # -- coordinates -------------------------------------------------------

    @property
    def coords(self) -> Vector3:
        """Cartesian coordinates."""
        return self._coords

    @coords.setter
    def coords(self, value: PointLike) -> None:
        self.set_coords(value)

    def set_coords(self, *args: Any) -> Vector3:
        """Set coordinates from ``x, y, z``, a vector, or a sequence.

        Returns:
            The stored coordinates.

        Raises:
            ValueError: If the input does not hold exactly three numbers.
        """
        self._coords = geometry.vector(*args)
        return self._coords

    # -- graph -------------------------------------------------------------

    @property
    def parent(self) -> "Molecule | None":
        """Molecule that owns this atom, if any."""
        return self._parent() if self._parent is not None else None

    def add_bond(self, bond: "Bond") -> None:
        """Record ``bond`` in the adjacency list.

        One entry is added for every other atom of the bond. This is the
        low-level half of bond creation, called by :meth:`Bond.set_atoms`;
        use :meth:`Molecule.add_bond` to attach bonds to a molecule.
        """
        for other in bond.atoms:
            if other is not self:
                self._links.append(_Link(weakref.ref(other), weakref.ref(bond)))

    def remove_bond(self, bond: "Bond") -> None:
        """Drop every adjacency entry that refers to ``bond``."""
        self._links = [link for link in self._links if link.bond() is not bond]

    def _live_links(self) -> Iterator[tuple["Atom", "Bond"]]:
        for link in self._links:
            neighbor, bond = link.neighbor(), link.bond()
            if neighbor is not None and bond is not None:
                yield neighbor, bond

    def neighbors(self, exclude: "Atom | None" = None) -> list["Atom"]:
        """Bonded neighbor atoms, optionally without ``exclude``."""
        return [n for n, _ in self._live_links() if exclude is None or n is not exclude]

    def bonds(self, exclude: "Atom | None" = None) -> list["Bond"]:
        """Bonds in adjacency order, skipping those leading to ``exclude``."""
        return [b for n, b in self._live_links() if exclude is None or n is not exclude]

    @property
    def degree(self) -> int:
        """Number of adjacency entries."""
        return len(self.neighbors())

    def delete(self) -> None:
        """Remove this atom (and its bonds) from the parent molecule.

        Raises:
            NotFoundError: If the atom has no parent molecule.
        """
        parent = self.parent
        if parent is None:
            raise NotFoundError(f"Atom {self.id} does not belong to a molecule", self)
        parent.delete_atom(self)

    # -- geometry ----------------------------------------------------------

    def distance(self, obj: "Atom | Molecule | PointLike", return_closest: bool = False):
        """Minimum distance to an atom, a point, or a molecule.

        Args:
            obj: Atom, raw coordinates, or a molecule (closest atom is used).
            return_closest: Also return the closest atom (or the point).

        Returns:
            Distance, or ``(distance, closest)`` with ``return_closest``.
            For an empty molecule the distance and closest atom are None.

        Raises:
            UnsupportedOperandError: For any other kind of operand.
        """
        if isinstance(obj, Molecule):
            best: float | None = None
            closest: Atom | None = None
            for atom in obj.atoms():
                d = geometry.distance(self._coords, atom.coords)
                if best is None or d < best:
                    best, closest = d, atom
            return (best, closest) if return_closest else best
        if isinstance(obj, ChemObject) and not isinstance(obj, Atom):
            raise UnsupportedOperandError(
                f"Atom.distance() undefined for objects of type '{type(obj).__name__}'"
            )
        d = geometry.distance(self._coords, obj)
        return (d, obj) if return_closest else d

    def angle(self, vertex: PointLike, other: PointLike) -> float:
        """Angle self-vertex-other in radians."""
        return geometry.angle(self, vertex, other)

    def angle_deg(self, vertex: PointLike, other: PointLike) -> float:
        """Angle self-vertex-other in degrees."""
        return geometry.angle_deg(self, vertex, other)

    def dihedral(self, p2: PointLike, p3: PointLike, p4: PointLike) -> float:
        """Dihedral angle self-p2-p3-p4 in radians."""
        return geometry.dihedral(self, p2, p3, p4)

    def dihedral_deg(self, p2: PointLike, p3: PointLike, p4: PointLike) -> float:
        """Dihedral angle self-p2-p3-p4 in degrees."""
        return geometry.dihedral_deg(self, p2, p3, p4)

    def _copy_unlinked(self) -> "Self":
        new = copy.copy(self)
        new._attrs = copy.deepcopy(self._attrs)
        new._links = []
        new._parent = None
        return new


class Bond(ChemObject):
    """A bond: an ordered list of atoms (usually two) plus an order.

    The bond references its atoms but does not own them. Setting the atoms
    registers the bond in each atom's adjacency list.

    Atoms hold their bonds only weakly. A bond must be kept alive, normally
    by adding it to a molecule; once nothing references it, it drops out of
    its atoms' adjacency lists.

    Attributes:
        id: Unique id within the parent molecule (``"b1"``... by default).
        order: Bond order, typically 1, 2, 3 or a fractional value.
        type: Free-form bond type (e.g. ``"="``).

    Example:
        >>> a1, a2 = Atom("H"), Atom("H", coords=(0.74, 0, 0))
        >>> bond = Bond(atoms=[a1, a2])
        >>> round(bond.length(), 2)
        0.74
    """

    __slots__ = ("order", "_atoms", "_parent")

    _id_prefix = "b"

    def __init__(
        self,
        atoms: Iterable[Atom] = (),
        *,
        order: float = 1,
        id: str | None = None,
        name: str = "",
        type: str = "",
        attrs: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(id=id, name=name, type=type, attrs=attrs)
        self.order = order
        self._atoms: tuple[Atom, ...] = ()
        self._parent: weakref.ref | None = None
        atoms = tuple(atoms)
        if atoms:
            self.set_atoms(atoms)

    def __repr__(self) -> str:
        atom_ids = [a.id for a in self._atoms]
        return f"Bond(id={self.id!r}, atoms={atom_ids!r}, order={self.order!r})"

    def __contains__(self, atom: object) -> bool:
        """Check if atom is part of this bond."""
        return any(a is atom for a in self._atoms)

    @property
    def atoms(self) -> tuple[Atom, ...]:
        """Atoms in the bond, in the order given."""
        return self._atoms

    def set_atoms(self, atoms: Iterable[Atom]) -> None:
        """Define the atoms of the bond and link the bond into each atom.

        Adjacency entries made by an earlier call are not removed; detach
        the old atoms (``atom.remove_bond(bond)``) before calling this a
        second time on the same bond.
        """
        self._atoms = tuple(atoms)
        for atom in self._atoms:
            atom.add_bond(self)

    def other_atom(self, atom: Atom) -> Atom:
        """Get the atom on the other end of a two-atom bond.

        Raises:
            ValueError: If ``atom`` is not part of this bond.
        """
        if len(self._atoms) == 2:
            first, second = self._atoms
            if atom is first:
                return second
            if atom is second:
                return first
        raise ValueError(f"Atom {atom.id} not in bond {self.id}")

    def length(self) -> float:
        """Distance between the two atoms; 0 unless there are exactly two."""
        if len(self._atoms) != 2:
            return 0.0
        return geometry.distance(self._atoms[0], self._atoms[1])

    @property
    def parent(self) -> "Molecule | None":
        """Molecule that owns this bond, if any."""
        return self._parent() if self._parent is not None else None

    def delete(self) -> None:
        """Remove this bond from the parent molecule.

        Raises:
            NotFoundError: If the bond has no parent molecule.
        """
        parent = self.parent
        if parent is None:
            raise NotFoundError(f"Bond {self.id} does not belong to a molecule", self)
        parent.delete_bond(self)

    def _detach(self) -> None:
        for atom in self._atoms:
            atom.remove_bond(self)

    def _copy_unlinked(self) -> "Self":
        new = copy.copy(self)
        new._attrs = copy.deepcopy(self._attrs)
        new._atoms = ()
        new._parent = None
        return new


class _hybridmethod:
    """Method that receives the instance, or the class when called on it."""

    def __init__(self, func) -> None:
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, obj, cls):
        return functools.partial(self.func, cls if obj is None else obj)


AtomRef = Union[Atom, int, str]
BondRef = Union[Bond, int, str]


class Molecule(ChemObject):
    """A molecule: the owner of a set of atoms and bonds.

    The molecule is the only place where atoms and bonds should be added or
    removed; it keeps the id index and the atoms' adjacency lists in step.
    Atom and bond ids share one namespace and must be unique.

    Not thread-safe: callers sharing a molecule between threads must lock
    around mutation.

    Attributes:
        id: Molecule id (``"mol1"``... by default).
        name: Free-form name.
        atom_class: Class used by :meth:`new_atom`.
        bond_class: Class used by :meth:`new_bond`.
    """

    __slots__ = ("_atoms", "_bonds", "_by_id")

    _id_prefix = "mol"

    atom_class: ClassVar[type[Atom]] = Atom
    bond_class: ClassVar[type[Bond]] = Bond

    def __init__(
        self,
        atoms: Iterable[Atom] = (),
        bonds: Iterable[Bond] = (),
        *,
        id: str | None = None,
        name: str = "",
        type: str = "",
        attrs: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(id=id, name=name, type=type, attrs=attrs)
        self._atoms: list[Atom] = []
        self._bonds: list[Bond] = []
        self._by_id: dict[str, Atom | Bond] = {}
        self.add_atom(*atoms)
        self.add_bond(*bonds)

    def __repr__(self) -> str:
        return (
            f"Molecule(id={self.id!r}, atoms={len(self._atoms)}, "
            f"bonds={len(self._bonds)})"
        )

    def __len__(self) -> int:
        """Return number of atoms."""
        return len(self._atoms)

    def __iter__(self) -> Iterator[Atom]:
        """Iterate over atoms."""
        return iter(self._atoms)

    def __contains__(self, obj: object) -> bool:
        """Check if an atom or bond belongs to this molecule."""
        return isinstance(obj, ChemObject) and self._by_id.get(obj.id) is obj

    @property
    def num_atoms(self) -> int:
        """Number of atoms in the molecule."""
        return len(self._atoms)

    @property
    def num_bonds(self) -> int:
        """Number of bonds in the molecule."""
        return len(self._bonds)

    # -- membership --------------------------------------------------------

    def _check_new_ids(self, objs: Sequence[ChemObject]) -> None:
        seen: set[str] = set()
        for obj in objs:
            if obj.id in self._by_id or obj.id in seen:
                raise DuplicateIdError(
                    f"Id '{obj.id}' already used in molecule {self.id}", obj.id
                )
            seen.add(obj.id)

    def add_atom(self, *atoms: Atom) -> Atom | None:
        """Add one or more atoms to the molecule.

        All atoms are checked before any is added.

        Returns:
            The last atom added (None when called without atoms).

        Raises:
            DuplicateIdError: If an id is already in use (or repeated).
        """
        self._check_new_ids(atoms)
        for atom in atoms:
            self._atoms.append(atom)
            self._by_id[atom.id] = atom
            atom._parent = weakref.ref(self)
            logger.debug("Added atom %s to %s", atom.id, self.id)
        return atoms[-1] if atoms else None

    def new_atom(self, *args: Any, **kwargs: Any) -> Atom:
        """Create an atom with ``atom_class(*args, **kwargs)`` and add it."""
        return self.add_atom(self.atom_class(*args, **kwargs))

    def add_bond(self, *bonds: Bond) -> Bond | None:
        """Add one or more bonds to the molecule.

        A bond's atoms are linked to it when the bond's atoms are set, so
        the bond must be fully built before it is added. All bonds are
        checked before any is added.

        Returns:
            The last bond added (None when called without bonds).

        Raises:
            DuplicateIdError: If an id is already in use (or repeated).
            NotFoundError: If a bond refers to an atom outside the molecule.
        """
        self._check_new_ids(bonds)
        for bond in bonds:
            for atom in bond.atoms:
                if atom not in self:
                    raise NotFoundError(
                        f"Bond {bond.id} refers to atom {atom.id}, "
                        f"which is not in molecule {self.id}",
                        atom,
                    )
        for bond in bonds:
            self._bonds.append(bond)
            self._by_id[bond.id] = bond
            bond._parent = weakref.ref(self)
            logger.debug("Added bond %s to %s", bond.id, self.id)
        return bonds[-1] if bonds else None

    def new_bond(self, *args: Any, **kwargs: Any) -> Bond:
        """Create a bond with ``bond_class(*args, **kwargs)`` and add it."""
        return self.add_bond(self.bond_class(*args, **kwargs))

    def _resolve(self, ref: Any, kind: type, seq: list) -> Any:
        label = kind.__name__.lower()
        if isinstance(ref, int) and not isinstance(ref, bool):
            if not 1 <= ref <= len(seq):
                raise NotFoundError(f"No {label} at position {ref} in {self.id}", ref)
            return seq[ref - 1]
        if isinstance(ref, str):
            obj = self._by_id.get(ref)
            if not isinstance(obj, kind):
                raise NotFoundError(f"No {label} with id '{ref}' in {self.id}", ref)
            return obj
        if isinstance(ref, kind) and ref in self:
            return ref
        raise NotFoundError(f"{ref!r} is not a {label} of {self.id}", ref)

    def delete_atom(self, ref: AtomRef) -> Atom:
        """Remove an atom and every bond it takes part in.

        Args:
            ref: The atom, its id, or its 1-based position.

        Returns:
            The removed atom, now without a parent.

        Raises:
            NotFoundError: If ``ref`` does not resolve to a member atom.
        """
        atom = self._resolve(ref, Atom, self._atoms)
        for bond in [b for b in self._bonds if atom in b]:
            self.delete_bond(bond)
        del self._by_id[atom.id]
        # Positional splice: later positions shift down by one
        position = next(i for i, a in enumerate(self._atoms) if a is atom)
        del self._atoms[position]
        atom._parent = None
        logger.debug("Deleted atom %s from %s", atom.id, self.id)
        return atom

    def delete_bond(self, ref: BondRef) -> Bond:
        """Remove a bond and unlink it from its atoms.

        Args:
            ref: The bond, its id, or its 1-based position.

        Returns:
            The removed bond. It keeps its atoms but they no longer list it.

        Raises:
            NotFoundError: If ``ref`` does not resolve to a member bond.
        """
        bond = self._resolve(ref, Bond, self._bonds)
        del self._by_id[bond.id]
        position = next(i for i, b in enumerate(self._bonds) if b is bond)
        del self._bonds[position]
        bond._detach()
        bond._parent = None
        logger.debug("Deleted bond %s from %s", bond.id, self.id)
        return bond

    def by_id(self, id: str) -> Atom | Bond | None:
        """Look up an atom or bond by id."""
        return self._by_id.get(id)

    def atoms(self, *positions: int) -> list[Atom]:
        """All atoms, or those at the given 1-based positions.

        Positions may repeat and come in any order.

        Raises:
            NotFoundError: If a position is out of range.
        """
        if not positions:
            return list(self._atoms)
        return [self._resolve(i, Atom, self._atoms) for i in positions]

    def bonds(self, *positions: int) -> list[Bond]:
        """All bonds, or those at the given 1-based positions.

        Raises:
            NotFoundError: If a position is out of range.
        """
        if not positions:
            return list(self._bonds)
        return [self._resolve(i, Bond, self._bonds) for i in positions]

    def atoms_by_name(self, pattern: str) -> list[Atom]:
        """Atoms whose whole name matches the regular expression."""
        regex = re.compile(pattern)
        return [atom for atom in self._atoms if regex.fullmatch(atom.name)]

    def atom_by_name(self, pattern: str) -> Atom | None:
        """First atom whose whole name matches, or None."""
        matches = self.atoms_by_name(pattern)
        return matches[0] if matches else None

    # -- copies and components ---------------------------------------------

    def _empty_copy(self) -> "Self":
        new = copy.copy(self)
        new._attrs = copy.deepcopy(self._attrs)
        new._atoms = []
        new._bonds = []
        new._by_id = {}
        return new

    def _cloned_graph(self) -> tuple[list[Atom], list[Bond]]:
        atom_map: dict[int, Atom] = {}
        atoms: list[Atom] = []
        for atom in self._atoms:
            new_atom = atom._copy_unlinked()
            atom_map[id(atom)] = new_atom
            atoms.append(new_atom)
        bonds: list[Bond] = []
        for bond in self._bonds:
            new_bond = bond._copy_unlinked()
            new_bond.set_atoms(atom_map[id(a)] for a in bond.atoms)
            bonds.append(new_bond)
        return atoms, bonds

    def clone(self) -> "Self":
        """Deep copy of the molecule with its whole atom/bond graph.

        Ids, names, coordinates and attributes are preserved; changing the
        clone never affects the original.
        """
        new = self._empty_copy()
        atoms, bonds = self._cloned_graph()
        new.add_atom(*atoms)
        new.add_bond(*bonds)
        return new

    def _renumber_if_taken(self, objs: Sequence[ChemObject]) -> None:
        taken = set(self._by_id)
        for obj in objs:
            if obj.id in taken:
                old_id = obj.id
                while obj.id in taken:
                    obj.id = type(obj).next_id()
                logger.warning(
                    "Id %s already used in %s; renamed to %s", old_id, self.id, obj.id
                )
            taken.add(obj.id)

    @_hybridmethod
    def combine(self_or_cls, *others: "Molecule") -> "Molecule":
        """Merge copies of other molecules into one molecule.

        Called on an instance, copies are added to that instance. Called on
        the class (``Molecule.combine(m1, m2)``), a new molecule is made
        first. The molecules passed in are never modified. Copied atoms and
        bonds whose id is already taken get a fresh id.

        Returns:
            The molecule that received the atoms and bonds.
        """
        if isinstance(self_or_cls, type):
            mol = self_or_cls()
        else:
            mol = self_or_cls
        for other in others:
            atoms, bonds = other._cloned_graph()
            mol._renumber_if_taken(atoms)
            mol.add_atom(*atoms)
            mol._renumber_if_taken(bonds)
            mol.add_bond(*bonds)
        return mol

    def connected_components(self) -> list[list[Atom]]:
        """Find connected components in the molecule.

        Returns:
            List of components, each a list of atoms in molecule order.
            Components are ordered by their first atom.
        """
        color: dict[int, int] = {}
        n_components = 0
        for start in self._atoms:
            if id(start) in color:
                continue
            color[id(start)] = n_components
            stack = [start]
            while stack:
                atom = stack.pop()
                for neighbor in atom.neighbors():
                    if id(neighbor) not in color:
                        color[id(neighbor)] = n_components
                        stack.append(neighbor)
            n_components += 1

        components: list[list[Atom]] = [[] for _ in range(n_components)]
        for atom in self._atoms:
            components[color[id(atom)]].append(atom)
        return components

    def separate(self) -> list["Self"]:
        """Split into one new molecule per connected component.

        Works on a clone, so the molecule itself is left untouched. Every
        bond goes to the component of its first atom.

        Returns:
            New molecules, ordered by the position of their first atom.
        """
        work = self.clone()
        components = work.connected_components()

        owner: dict[int, int] = {}
        for index, component in enumerate(components):
            for atom in component:
                owner[id(atom)] = index

        bonds_by_component: list[list[Bond]] = [[] for _ in components]
        for bond in work._bonds:
            if bond.atoms:
                bonds_by_component[owner[id(bond.atoms[0])]].append(bond)
            elif bonds_by_component:
                bonds_by_component[0].append(bond)

        # Detach everything from the working copy before re-homing it
        work._atoms, work._bonds, work._by_id = [], [], {}

        molecules = []
        for atoms, bonds in zip(components, bonds_by_component):
            mol = type(self)(name=self.name)
            mol.add_atom(*atoms)
            mol.add_bond(*bonds)
            molecules.append(mol)
        logger.debug("Separated %s into %d molecules", self.id, len(molecules))
        return molecules

    # -- measurements ------------------------------------------------------

    def distance(self, obj: "Atom | Molecule | PointLike", return_closest: bool = False):
        """Minimum distance between this molecule's atoms and ``obj``.

        A naive scan over all atom pairs, O(n*m); no spatial index.

        Args:
            obj: Atom, raw coordinates, or another molecule.
            return_closest: Also return the closest pair.

        Returns:
            Distance, or ``(distance, own_atom, other)`` with
            ``return_closest``, where ``other`` is the closest atom of a
            molecule operand or the operand itself. Distance and atoms
            are None when either side has no atoms.

        Raises:
            UnsupportedOperandError: If ``obj`` is not an atom, point or molecule.
        """
        if not isinstance(obj, (Atom, Molecule)):
            if isinstance(obj, ChemObject):
                raise UnsupportedOperandError(
                    f"Molecule.distance() undefined for objects of type '{type(obj).__name__}'"
                )
            obj = geometry.as_point(obj)
        best: float | None = None
        own: Atom | None = None
        other: Any = None
        for atom in self._atoms:
            d, closest = atom.distance(obj, return_closest=True)
            if d is not None and (best is None or d < best):
                best, own, other = d, atom, closest
        return (best, own, other) if return_closest else best

    def mass(self) -> float:
        """Sum of atomic masses; atoms without a known mass count as 0."""
        total = 0.0
        for atom in self._atoms:
            mass = atom.mass
            if mass is None:
                logger.warning("Atom %s (%r) has no known mass", atom.id, atom.symbol)
                continue
            total += mass
        return total

    def formula_hash(self) -> dict[str, int]:
        """Element symbol -> number of atoms, in order of first appearance."""
        counts: dict[str, int] = {}
        for atom in self._atoms:
            counts[atom.symbol] = counts.get(atom.symbol, 0) + 1
        return counts

    def formula(
        self,
        fmt: str | None = None,
        sort: Union[str, FormulaSort, None] = None,
    ) -> str:
        """Formula string; see :func:`molkit.formula.format_formula`.

        Example:
            >>> Molecule.parse("C2H6O").formula("%s%d{<sub>%d</sub>}")
            'C<sub>2</sub>H<sub>6</sub>O'
        """
        return format_formula(self.formula_hash(), fmt, sort)

    # -- file formats ------------------------------------------------------

    @classmethod
    def register_format(cls, name: str, file_class: type) -> None:
        """Register a file-format class under ``name``."""
        from molkit.files import register_format

        register_format(name, file_class)

    @classmethod
    def formats(cls) -> list[str]:
        """Names of the registered file formats."""
        from molkit.files import formats

        return formats()

    @classmethod
    def parse(cls, text: str, format: str = "formula", **options: Any) -> "Molecule":
        """Build a molecule from a string in a registered format.

        Example:
            >>> Molecule.parse("H2O").formula_hash()
            {'H': 2, 'O': 1}
        """
        from molkit.files import get_format

        options.setdefault("mol_class", cls)
        return get_format(format).parse_string(text, **options)

    @classmethod
    def read(cls, path, format: str | None = None, **options: Any) -> "Molecule":
        """Read a molecule from a file; the format is detected when omitted."""
        from molkit.files import detect_format, get_format

        file_class = get_format(format) if format else detect_format(path)
        options.setdefault("mol_class", cls)
        return file_class.parse_file(path, **options)

    def to_string(self, format: str = "formula", **options: Any) -> str:
        """Render the molecule in a registered format."""
        from molkit.files import get_format

        return get_format(format).write_string(self, **options)

    def write(self, path, format: str | None = None, **options: Any) -> None:
        """Write the molecule to a file; the format is guessed from the name when omitted."""
        from molkit.files import detect_format, get_format

        file_class = get_format(format) if format else detect_format(path, must_exist=False)
        file_class.write_file(self, path, **options)
