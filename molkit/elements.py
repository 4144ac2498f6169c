"""
Chemical elements and constants.

This module provides the periodic table used to keep an atom's symbol and
atomic number consistent, together with standard atomic masses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final


@dataclass(frozen=True, slots=True)
class Element:
    """Immutable element data.
    
    Attributes:
        atomic_number: Atomic number (proton count).
        symbol: Element symbol (e.g., "C", "Cl").
        name: Full element name.
        mass: Standard relative atomic mass, or None if not tabulated.
    """
    
    atomic_number: int
    symbol: str
    name: str
    mass: float | None = None
    
    # Class-level registry
    _by_symbol: ClassVar[dict[str, "Element"]] = {}
    _by_number: ClassVar[dict[int, "Element"]] = {}
    
    def __post_init__(self) -> None:
        Element._by_symbol[self.symbol] = self
        # Isotope entries (D, T) share a number with H but must not replace it
        Element._by_number.setdefault(self.atomic_number, self)
    
    @classmethod
    def from_symbol(cls, symbol: str) -> "Element | None":
        """Look up element by symbol (exact, case-sensitive)."""
        return cls._by_symbol.get(symbol)
    
    @classmethod
    def from_atomic_number(cls, num: int) -> "Element | None":
        """Look up element by atomic number."""
        return cls._by_number.get(num)


# Relative atomic masses from the 1995 IUPAC recommendation; the
# heaviest elements have no tabulated mass.
_ELEMENTS_DATA: Final[list[tuple[int, str, str, float | None]]] = [
    # (atomic_number, symbol, name, mass)
    (1, "H", "Hydrogen", 1.00794),
    (2, "He", "Helium", 4.002602),
    (3, "Li", "Lithium", 6.941),
    (4, "Be", "Beryllium", 9.012182),
    (5, "B", "Boron", 10.811),
    (6, "C", "Carbon", 12.0107),
    (7, "N", "Nitrogen", 14.00674),
    (8, "O", "Oxygen", 15.9994),
    (9, "F", "Fluorine", 18.9984032),
    (10, "Ne", "Neon", 20.1797),
    (11, "Na", "Sodium", 22.989770),
    (12, "Mg", "Magnesium", 24.3050),
    (13, "Al", "Aluminum", 26.981538),
    (14, "Si", "Silicon", 28.0855),
    (15, "P", "Phosphorus", 30.973761),
    (16, "S", "Sulfur", 32.066),
    (17, "Cl", "Chlorine", 35.4527),
    (18, "Ar", "Argon", 39.948),
    (19, "K", "Potassium", 39.0983),
    (20, "Ca", "Calcium", 40.078),
    (21, "Sc", "Scandium", 44.955910),
    (22, "Ti", "Titanium", 47.867),
    (23, "V", "Vanadium", 50.9415),
    (24, "Cr", "Chromium", 51.9961),
    (25, "Mn", "Manganese", 54.938049),
    (26, "Fe", "Iron", 55.845),
    (27, "Co", "Cobalt", 58.933200),
    (28, "Ni", "Nickel", 58.6934),
    (29, "Cu", "Copper", 63.546),
    (30, "Zn", "Zinc", 65.39),
    (31, "Ga", "Gallium", 69.723),
    (32, "Ge", "Germanium", 72.61),
    (33, "As", "Arsenic", 74.92160),
    (34, "Se", "Selenium", 78.96),
    (35, "Br", "Bromine", 79.904),
    (36, "Kr", "Krypton", 83.80),
    (37, "Rb", "Rubidium", 85.4678),
    (38, "Sr", "Strontium", 87.62),
    (39, "Y", "Yttrium", 88.90585),
    (40, "Zr", "Zirconium", 91.224),
    (41, "Nb", "Niobium", 92.90638),
    (42, "Mo", "Molybdenum", 95.94),
    (43, "Tc", "Technetium", 98.0),
    (44, "Ru", "Ruthenium", 101.07),
    (45, "Rh", "Rhodium", 102.90550),
    (46, "Pd", "Palladium", 106.42),
    (47, "Ag", "Silver", 107.8682),
    (48, "Cd", "Cadmium", 112.411),
    (49, "In", "Indium", 114.818),
    (50, "Sn", "Tin", 118.710),
    (51, "Sb", "Antimony", 121.760),
    (52, "Te", "Tellurium", 127.60),
    (53, "I", "Iodine", 126.90447),
    (54, "Xe", "Xenon", 131.29),
    (55, "Cs", "Cesium", 132.90545),
    (56, "Ba", "Barium", 137.327),
    (57, "La", "Lanthanum", 138.9055),
    (58, "Ce", "Cerium", 140.116),
    (59, "Pr", "Praseodymium", 140.90765),
    (60, "Nd", "Neodymium", 144.24),
    (61, "Pm", "Promethium", 145.0),
    (62, "Sm", "Samarium", 150.36),
    (63, "Eu", "Europium", 151.964),
    (64, "Gd", "Gadolinium", 157.25),
    (65, "Tb", "Terbium", 158.92534),
    (66, "Dy", "Dysprosium", 162.50),
    (67, "Ho", "Holmium", 164.93032),
    (68, "Er", "Erbium", 167.26),
    (69, "Tm", "Thulium", 168.93421),
    (70, "Yb", "Ytterbium", 173.04),
    (71, "Lu", "Lutetium", 174.967),
    (72, "Hf", "Hafnium", 178.49),
    (73, "Ta", "Tantalum", 180.9479),
    (74, "W", "Tungsten", 183.84),
    (75, "Re", "Rhenium", 186.207),
    (76, "Os", "Osmium", 190.23),
    (77, "Ir", "Iridium", 192.217),
    (78, "Pt", "Platinum", 195.078),
    (79, "Au", "Gold", 196.96655),
    (80, "Hg", "Mercury", 200.59),
    (81, "Tl", "Thallium", 204.3833),
    (82, "Pb", "Lead", 207.2),
    (83, "Bi", "Bismuth", 208.98038),
    (84, "Po", "Polonium", 209.0),
    (85, "At", "Astatine", 210.0),
    (86, "Rn", "Radon", 222.0),
    (87, "Fr", "Francium", 223.0),
    (88, "Ra", "Radium", 226.0),
    (89, "Ac", "Actinium", 227.0),
    (90, "Th", "Thorium", 232.038),
    (91, "Pa", "Protactinium", 231.03588),
    (92, "U", "Uranium", 238.0289),
    (93, "Np", "Neptunium", 237.0),
    (94, "Pu", "Plutonium", 244.0),
    (95, "Am", "Americium", 243.0),
    (96, "Cm", "Curium", 247.0),
    (97, "Bk", "Berkelium", 247.0),
    (98, "Cf", "Californium", 251.0),
    (99, "Es", "Einsteinium", 252.0),
    (100, "Fm", "Fermium", 257.0),
    (101, "Md", "Mendelevium", 258.0),
    (102, "No", "Nobelium", 259.0),
    (103, "Lr", "Lawrencium", 262.0),
    (104, "Rf", "Rutherfordium", 261.0),
    (105, "Db", "Dubnium", 262.0),
    (106, "Sg", "Seaborgium", 266.0),
    (107, "Bh", "Bohrium", 264.0),
    (108, "Hs", "Hassium", 269.0),
    (109, "Mt", "Meitnerium", 268.0),
    (110, "Ds", "Darmstadtium", 271.0),
    (111, "Rg", "Roentgenium", None),
    (112, "Cn", "Copernicium", None),
    (113, "Nh", "Nihonium", None),
    (114, "Fl", "Flerovium", None),
    (115, "Mc", "Moscovium", None),
    (116, "Lv", "Livermorium", None),
    (117, "Ts", "Tennessine", None),
    (118, "Og", "Oganesson", None),
]

# Hydrogen isotopes with their own symbols
_ISOTOPES_DATA: Final[list[tuple[int, str, str, float]]] = [
    (1, "D", "Deuterium", 2.014101),
    (1, "T", "Tritium", 3.016049),
]

ELEMENTS: Final[tuple[Element, ...]] = tuple(
    Element(num, sym, name, mass)
    for num, sym, name, mass in _ELEMENTS_DATA
)

ISOTOPES: Final[tuple[Element, ...]] = tuple(
    Element(num, sym, name, mass)
    for num, sym, name, mass in _ISOTOPES_DATA
)

MAX_ATOMIC_NUMBER: Final[int] = len(ELEMENTS)


def get_atomic_number(symbol: str) -> int | None:
    """Get atomic number for an element symbol.
    
    Args:
        symbol: Element symbol (e.g., "C", "Cl", "D").
    
    Returns:
        Atomic number, or None if the symbol is unknown.
    """
    elem = Element.from_symbol(symbol)
    return elem.atomic_number if elem else None


def get_symbol(atomic_num: int) -> str | None:
    """Get the element symbol for an atomic number.
    
    Returns:
        Symbol, or None if the number is out of range.
    """
    elem = Element.from_atomic_number(atomic_num)
    return elem.symbol if elem else None


def get_atomic_mass(symbol: str) -> float | None:
    """Get the standard atomic mass for an element symbol."""
    elem = Element.from_symbol(symbol)
    return elem.mass if elem else None


def is_element_symbol(symbol: str) -> bool:
    """Check if symbol names a known element or hydrogen isotope."""
    return symbol in Element._by_symbol
