"""Tests for connected components, separation, cloning and combination."""

import logging

import pytest

from molkit import Atom, Molecule
from molkit.exceptions import UnsupportedOperandError
from molkit.geometry import Vector3


def cut_ethane(ethane):
    """Remove the C-C bond, leaving two CH3 fragments."""
    c1 = ethane.atom_by_name("C1")
    c2 = ethane.atom_by_name("C2")
    (cc_bond,) = [b for b in c1.bonds() if c2 in b]
    ethane.delete_bond(cc_bond)
    return ethane


class TestConnectedComponents:
    """Graph traversal over the adjacency lists."""

    def test_single_component(self, ethane):
        components = ethane.connected_components()
        assert len(components) == 1
        assert components[0] == ethane.atoms()

    def test_after_cut(self, ethane):
        components = cut_ethane(ethane).connected_components()
        assert len(components) == 2
        assert [a.name for a in components[0]] == ["C1", "H11", "H12", "H13"]
        assert [a.name for a in components[1]] == ["C2", "H21", "H22", "H23"]

    def test_isolated_atoms(self):
        mol = Molecule()
        for symbol in "CNO":
            mol.new_atom(symbol)
        assert len(mol.connected_components()) == 3

    def test_empty(self):
        assert Molecule().connected_components() == []


class TestSeparate:
    """Splitting a molecule into fragments."""

    def test_cut_ethane(self, ethane):
        fragments = cut_ethane(ethane).separate()
        assert len(fragments) == 2
        for fragment in fragments:
            assert fragment.formula_hash() == {"C": 1, "H": 3}
            assert fragment.num_bonds == 3
            assert fragment.formula() == "CH3"

    def test_fragments_are_copies(self, ethane):
        """Separation leaves the source molecule untouched."""
        cut_ethane(ethane)
        fragments = ethane.separate()
        assert ethane.num_atoms == 8
        assert ethane.num_bonds == 6
        for fragment in fragments:
            for atom in fragment:
                assert atom not in ethane
                assert atom.parent is fragment

    def test_ids_preserved(self, ethane):
        original_ids = {a.id for a in ethane}
        fragments = cut_ethane(ethane).separate()
        separated_ids = {a.id for f in fragments for a in f}
        assert separated_ids == original_ids

    def test_fragment_adjacency(self, ethane):
        """Bonds in each fragment link that fragment's atoms."""
        fragments = cut_ethane(ethane).separate()
        for fragment in fragments:
            carbon = fragment.atom_by_name("C.")
            assert carbon.degree == 3
            assert all(n in fragment for n in carbon.neighbors())

    def test_connected(self, ethane):
        (fragment,) = ethane.separate()
        assert fragment is not ethane
        assert fragment.num_atoms == 8
        assert fragment.num_bonds == 7

    def test_order_follows_first_atom(self):
        mol = Molecule()
        o = mol.new_atom("O")
        c = mol.new_atom("C")
        h = mol.new_atom("H")
        mol.new_bond(atoms=[o, h])
        fragments = mol.separate()
        assert [f.formula_hash() for f in fragments] == [{"O": 1, "H": 1}, {"C": 1}]

    def test_keeps_name(self, ethane):
        fragments = cut_ethane(ethane).separate()
        assert all(f.name == "ethane" for f in fragments)

    def test_empty(self):
        assert Molecule().separate() == []


class TestClone:
    """Deep copies."""

    def test_same_content(self, water):
        clone = water.clone()
        assert clone is not water
        assert clone.id == water.id
        assert [a.id for a in clone] == [a.id for a in water]
        assert [a.coords for a in clone] == [a.coords for a in water]
        assert [b.id for b in clone.bonds()] == [b.id for b in water.bonds()]

    def test_new_objects(self, water):
        clone = water.clone()
        for original, copied in zip(water, clone):
            assert copied is not original
            assert copied.parent is clone

    def test_adjacency_refers_to_clone(self, water):
        clone = water.clone()
        o = clone.atoms(1)[0]
        assert all(n in clone for n in o.neighbors())
        assert all(b in clone for b in o.bonds())

    def test_independent_coordinates(self, water):
        clone = water.clone()
        clone.atoms(1)[0].set_coords(5, 5, 5)
        assert water.atoms(1)[0].coords == Vector3(0.0, 0.0, 0.0)

    def test_independent_deletion(self, water):
        clone = water.clone()
        clone.delete_atom(1)
        assert len(water) == 3
        assert water.num_bonds == 2
        assert water.atoms(1)[0].degree == 2

    def test_independent_attrs(self, water):
        water.atoms(1)[0].attr("tags", ["donor"])
        clone = water.clone()
        clone.atoms(1)[0].attr("tags").append("acceptor")
        assert water.atoms(1)[0].attr("tags") == ["donor"]


class TestCombine:
    """Merging molecules."""

    def test_class_form(self, water, ethane):
        merged = Molecule.combine(water, ethane)
        assert isinstance(merged, Molecule)
        assert merged is not water
        assert merged.num_atoms == 11
        assert merged.num_bonds == 9
        assert merged.formula_hash() == {"O": 1, "H": 8, "C": 2}

    def test_inputs_untouched(self, water, ethane):
        atoms = water.atoms()
        Molecule.combine(water, ethane)
        assert water.atoms() == atoms
        assert all(a.parent is water for a in water)
        assert ethane.num_atoms == 8

    def test_instance_form(self, water, ethane):
        result = water.combine(ethane)
        assert result is water
        assert water.num_atoms == 11
        assert water.num_bonds == 9

    def test_renumbers_colliding_ids(self, water, caplog):
        with caplog.at_level(logging.WARNING, logger="molkit.types"):
            merged = Molecule.combine(water, water)
        ids = [a.id for a in merged] + [b.id for b in merged.bonds()]
        assert len(ids) == len(set(ids)) == 10
        assert "already used" in caplog.text

    def test_no_renumbering_needed(self, water, caplog):
        other = Molecule()
        other.new_atom("N")
        with caplog.at_level(logging.WARNING, logger="molkit.types"):
            merged = Molecule.combine(water, other)
        assert [a.id for a in merged][:3] == [a.id for a in water]
        assert caplog.text == ""

    def test_renumbered_bonds_stay_linked(self, water):
        merged = Molecule.combine(water, water)
        for atom in merged:
            assert all(b in merged for b in atom.bonds())
        assert len(merged.connected_components()) == 2

    def test_combine_then_separate(self, ethane):
        """Fragments merged back together separate into the same pieces."""
        fragments = cut_ethane(ethane).separate()
        merged = Molecule.combine(*fragments)
        assert merged.num_atoms == 8
        assert merged.num_bonds == 6
        again = merged.separate()
        assert [sorted(a.id for a in f) for f in again] == [
            sorted(a.id for a in f) for f in fragments
        ]

    def test_combine_nothing(self):
        assert len(Molecule.combine()) == 0

    def test_subclass(self, water):
        class Solvent(Molecule):
            pass

        assert isinstance(Solvent.combine(water), Solvent)


class TestMoleculeDistance:
    """Minimum distance from a molecule."""

    def test_to_point(self, chain):
        assert chain.distance((10, 0, 0)) == 6.0

    def test_return_closest_point(self, chain):
        d, own, other = chain.distance((10, 0, 0), return_closest=True)
        assert d == 6.0
        assert own is chain.atoms(5)[0]
        assert other == Vector3(10.0, 0.0, 0.0)

    def test_to_atom(self, chain):
        atom = Atom("O", coords=(-2, 0, 0))
        d, own, other = chain.distance(atom, return_closest=True)
        assert d == 2.0
        assert own is chain.atoms(1)[0]
        assert other is atom

    def test_to_molecule(self, chain, water):
        for atom in water:
            atom.set_coords(atom.coords.x + 2.0, atom.coords.y + 1.0, 0.0)
        d, own, other = chain.distance(water, return_closest=True)
        assert d == pytest.approx(1.0)
        assert own is chain.atoms(3)[0]
        assert other is water.atoms(1)[0]

    def test_empty_self(self):
        assert Molecule().distance((0, 0, 0)) is None
        assert Molecule().distance((0, 0, 0), return_closest=True) == (None, None, None)

    def test_empty_other(self, chain):
        assert chain.distance(Molecule()) is None

    def test_bond_operand(self, chain):
        with pytest.raises(UnsupportedOperandError):
            chain.distance(chain.bonds(1)[0])

    def test_bad_point(self, chain):
        with pytest.raises(UnsupportedOperandError):
            chain.distance("origin")
