"""Tests for formula parsing and formatting.

Hill-order formulas and molecular weights are checked against RDKit.
"""

import pytest

# RDKit is used as an independent reference for formulas and masses
from rdkit import Chem
from rdkit.Chem import Descriptors, rdMolDescriptors

from molkit import Molecule
from molkit.exceptions import InvalidFormulaError, ParseError
from molkit.formula import (
    ABBREVIATIONS,
    FORMULA_SORTS,
    format_formula,
    hill_order,
    parse_formula,
    resolve_formula_sort,
)


def rdkit_mol(smiles: str):
    """RDKit molecule with explicit hydrogens."""
    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit could not parse: {smiles}")
    return Chem.AddHs(mol)


def rdkit_formula(smiles: str) -> str:
    """Hill-order formula computed by RDKit."""
    return rdMolDescriptors.CalcMolFormula(rdkit_mol(smiles))


def rdkit_mol_weight(smiles: str) -> float:
    """Average molecular weight computed by RDKit."""
    return Descriptors.MolWt(rdkit_mol(smiles))


def molecule_from_smiles(smiles: str) -> Molecule:
    """Build a molkit molecule (hydrogens included) through RDKit.
    
    Args:
        smiles: Input SMILES string.
    
    Returns:
        Molecule with one atom per RDKit atom and one bond per RDKit bond.
    """
    rd = rdkit_mol(smiles)
    mol = Molecule(name=smiles)
    atoms = [mol.new_atom(a.GetSymbol()) for a in rd.GetAtoms()]
    for b in rd.GetBonds():
        mol.new_bond(
            atoms=[atoms[b.GetBeginAtomIdx()], atoms[b.GetEndAtomIdx()]],
            order=b.GetBondTypeAsDouble(),
        )
    return mol


class TestParseFormula:
    """Basic grammar: Symbol[count] tokens only."""

    def test_water(self):
        assert parse_formula("H2O") == {"H": 2, "O": 1}

    def test_first_appearance_order(self):
        assert list(parse_formula("OH2")) == ["O", "H"]

    def test_repeated_symbols_accumulate(self):
        assert parse_formula("CH3CH2OH") == {"C": 2, "H": 6, "O": 1}

    def test_multi_digit(self):
        assert parse_formula("C60") == {"C": 60}

    def test_zero_count_dropped(self):
        assert parse_formula("C0H4") == {"H": 4}

    def test_unknown_symbol_accepted(self):
        """The grammar checks shape, not the periodic table."""
        assert parse_formula("Xx2") == {"Xx": 2}

    @pytest.mark.parametrize("text", [
        "", "h2o", "2H2O", "H2O+", "(CH3)2", "H 2O", "H2O\n", "H²O", "H\u0662O", "Cé",
    ])
    def test_invalid(self, text):
        with pytest.raises(InvalidFormulaError):
            parse_formula(text)

    def test_error_types(self):
        """Formula errors are both parse errors and value errors."""
        with pytest.raises(ParseError):
            parse_formula("h2o")
        with pytest.raises(ValueError) as exc_info:
            parse_formula("h2o")
        assert exc_info.value.formula == "h2o"


class TestExtendedGrammar:
    """Groups, multipliers, coefficients and abbreviations."""

    def test_groups_and_abbreviations(self):
        assert parse_formula("1[Ph(Me)3]2", extended=True) == {"C": 18, "H": 28}

    def test_parentheses(self):
        assert parse_formula("Ca(OH)2", extended=True) == {"Ca": 1, "O": 2, "H": 2}

    def test_nested_brackets(self):
        counts = parse_formula("K4[Fe(CN)6]", extended=True)
        assert counts == {"K": 4, "Fe": 1, "C": 6, "N": 6}

    def test_braces(self):
        assert parse_formula("{CH2}3", extended=True) == {"C": 3, "H": 6}

    def test_coefficient(self):
        assert parse_formula("2H2O", extended=True) == {"H": 4, "O": 2}

    def test_abbreviations(self):
        assert parse_formula("EtOH", extended=True) == {"C": 2, "H": 6, "O": 1}
        assert parse_formula("PhBz", extended=True) == {"C": 13, "H": 10, "O": 1}

    def test_element_symbols_not_abbreviated(self):
        """Pr is praseodymium, not propyl."""
        assert "Pr" not in ABBREVIATIONS
        assert parse_formula("Pr", extended=True) == {"Pr": 1}

    def test_plain_formula(self):
        assert parse_formula("C2H6O", extended=True) == parse_formula("C2H6O")

    def test_extended_off_by_default(self):
        with pytest.raises(InvalidFormulaError):
            parse_formula("Ca(OH)2")

    @pytest.mark.parametrize("text", [
        "", "(", "(CH3", "(CH3]", "()", "Ca)", "2", "c2", "H²O", "H\u0662O", "Cé", "²H2O",
    ])
    def test_invalid(self, text):
        with pytest.raises(InvalidFormulaError):
            parse_formula(text, extended=True)

    def test_error_position(self):
        with pytest.raises(InvalidFormulaError) as exc_info:
            parse_formula("CH3-CH3", extended=True)
        assert exc_info.value.position == 3
        assert "^" in str(exc_info.value)

    def test_non_ascii_reported_in_place(self):
        """Only ASCII letters and digits form symbols and counts."""
        with pytest.raises(InvalidFormulaError) as exc_info:
            parse_formula("Cé", extended=True)
        assert exc_info.value.position == 1


class TestFormatFormula:
    """Template rendering."""

    def test_default(self):
        assert format_formula({"H": 2, "O": 1}) == "H2O"

    def test_alphabetical_by_default(self):
        assert format_formula({"O": 1, "H": 2, "C": 2}) == "C2H2O"
        assert format_formula({"Na": 1, "Cl": 1}) == "ClNa"

    def test_subscript_group(self):
        counts = {"C": 1, "H": 4, "O": 1}
        assert format_formula(counts, "%s%d{<sub>%d</sub>}") == "CH<sub>4</sub>O"

    def test_always_count(self):
        assert format_formula({"H": 2, "O": 1}, "%s%D") == "H2O1"

    def test_separator(self):
        assert format_formula({"H": 2, "O": 1}, "%s%D ") == "H2 O1 "

    def test_escapes(self):
        assert format_formula({"H": 2}, r"\%s=%s%d") == "%s=H2"
        assert format_formula({"H": 2}, r"%s\%d") == "H%d"
        assert format_formula({"H": 2}, r"%s\\") == "H\\"

    def test_empty(self):
        assert format_formula({}) == ""

    def test_hill_preset(self):
        counts = {"O": 1, "H": 6, "C": 2}
        assert format_formula(counts, sort="hill") == "C2H6O"

    def test_hill_without_carbon(self):
        assert hill_order({"O": 1, "H": 2}) == ["H", "O"]
        assert hill_order({"S": 1, "O": 4, "H": 2}) == ["H", "O", "S"]

    def test_hill_carbon_without_hydrogen(self):
        assert hill_order({"Cl": 4, "C": 1}) == ["C", "Cl"]

    def test_custom_sort(self):
        def by_count(counts):
            return sorted(counts, key=lambda s: (-counts[s], s))

        assert format_formula({"C": 2, "H": 6, "O": 1}, sort=by_count) == "H6C2O"

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            format_formula({"H": 2}, sort="weight")

    def test_presets(self):
        assert set(FORMULA_SORTS) == {"alphabetical", "hill"}
        assert resolve_formula_sort("hill") is hill_order


class TestRoundTrip:
    """Parsing what was formatted gives the same counts."""

    @pytest.mark.parametrize("counts", [
        {"H": 2, "O": 1},
        {"C": 6, "H": 12, "O": 6},
        {"Fe": 2, "O": 3},
    ])
    def test_round_trip(self, counts):
        assert parse_formula(format_formula(counts)) == counts


class TestAgainstRDKit:
    """Formula and mass match RDKit for real molecules."""

    def test_hill_formula(self, drug_smiles):
        for smiles in drug_smiles:
            mol = molecule_from_smiles(smiles)
            assert mol.formula(sort="hill") == rdkit_formula(smiles), smiles

    def test_mass(self, drug_smiles):
        for smiles in drug_smiles:
            mol = molecule_from_smiles(smiles)
            assert mol.mass() == pytest.approx(rdkit_mol_weight(smiles), abs=0.05), smiles

    def test_parsed_formula_mass(self):
        mol = Molecule.parse(rdkit_formula("CCO"))
        assert mol.mass() == pytest.approx(rdkit_mol_weight("CCO"), abs=0.01)
