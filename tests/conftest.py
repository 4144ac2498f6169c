"""Test configuration and fixtures for molkit tests."""

import pytest

from molkit import Molecule


def build_ethane() -> Molecule:
    """Ethane with explicit hydrogens and rough coordinates."""
    mol = Molecule(name="ethane")
    c1 = mol.new_atom("C", coords=(0.0, 0.0, 0.0), name="C1")
    c2 = mol.new_atom("C", coords=(1.54, 0.0, 0.0), name="C2")
    mol.new_bond(atoms=[c1, c2])
    for carbon, x in ((c1, -0.36), (c2, 1.90)):
        for n, (y, z) in enumerate(((1.03, 0.0), (-0.51, 0.89), (-0.51, -0.89)), 1):
            h = mol.new_atom("H", coords=(x, y, z), name=f"H{carbon.name[1]}{n}")
            mol.new_bond(atoms=[carbon, h])
    return mol


@pytest.fixture
def ethane() -> Molecule:
    """Ethane: 2 carbons and 6 hydrogens, 7 bonds."""
    return build_ethane()


@pytest.fixture
def water() -> Molecule:
    """Water with coordinates: O at the origin, H-O-H about 104.5 degrees."""
    mol = Molecule(name="water")
    o = mol.new_atom("O", coords=(0.0, 0.0, 0.0), name="O")
    h1 = mol.new_atom("H", coords=(0.757, 0.586, 0.0), name="H1")
    h2 = mol.new_atom("H", coords=(-0.757, 0.586, 0.0), name="H2")
    mol.new_bond(atoms=[o, h1])
    mol.new_bond(atoms=[o, h2])
    return mol


@pytest.fixture
def chain() -> Molecule:
    """Five carbons in a row, one unit apart along x."""
    mol = Molecule(name="chain")
    atoms = [mol.new_atom("C", coords=(float(i), 0.0, 0.0)) for i in range(5)]
    for left, right in zip(atoms, atoms[1:]):
        mol.new_bond(atoms=[left, right])
    return mol


@pytest.fixture
def drug_smiles() -> list[str]:
    """Neutral real-world molecules."""
    return [
        # Ethanol
        "CCO",
        # Aspirin
        "CC(=O)OC1=CC=CC=C1C(=O)O",
        # Caffeine
        "CN1C=NC2=C1C(=O)N(C(=O)N2C)C",
        # Ibuprofen
        "CC(C)Cc1ccc(cc1)C(C)C(=O)O",
        # Acetaminophen
        "CC(=O)Nc1ccc(O)cc1",
        # Chlorobenzene
        "Clc1ccccc1",
        # Dimethyl sulfoxide
        "CS(=O)C",
    ]
