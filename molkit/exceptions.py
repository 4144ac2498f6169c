"""
Custom exceptions for molkit.

This module defines a hierarchy of exceptions for handling errors raised by
the molecule graph, the formula codec and the file-format layer.
"""

from __future__ import annotations


class ChemError(Exception):
    """Base exception for all molkit errors."""
    pass


class ParseError(ChemError):
    """Error while parsing a text representation of a molecule.
    
    Attributes:
        message: Description of what went wrong.
        text: The input being parsed.
        position: Character position where the error occurred.
    """
    
    def __init__(
        self,
        message: str,
        text: str | None = None,
        position: int | None = None,
    ) -> None:
        self.message = message
        self.text = text
        self.position = position
        
        if text is not None and position is not None:
            super().__init__(f"{message}\n  {text}\n  {' ' * position}^")
        elif text is not None:
            super().__init__(f"{message} in: {text}")
        else:
            super().__init__(message)


class InvalidFormulaError(ParseError, ValueError):
    """Formula text does not follow the formula grammar."""
    
    @property
    def formula(self) -> str | None:
        return self.text


class NotFoundError(ChemError, LookupError):
    """An atom, bond, index or id is not a member of the molecule."""
    
    def __init__(self, message: str, key: object = None) -> None:
        self.key = key
        super().__init__(message)


class UnsupportedOperandError(ChemError, TypeError):
    """Operand cannot be projected to a point (not an atom, point or molecule)."""
    pass


class DegenerateGeometryError(ChemError, ValueError):
    """Angle or dihedral is undefined because a vector has zero length."""
    pass


class DuplicateIdError(ChemError, ValueError):
    """An atom or bond with the same id is already in the molecule.
    
    Attributes:
        id: The colliding id.
    """
    
    def __init__(self, message: str, id: str | None = None) -> None:
        self.id = id
        super().__init__(message)


class FormatError(ChemError):
    """Unknown file format, or a format that cannot perform the operation."""
    
    def __init__(self, message: str, format: str | None = None) -> None:
        self.format = format
        super().__init__(message)
