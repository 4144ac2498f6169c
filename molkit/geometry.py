"""
Three-dimensional geometry helpers.

Distances, bond angles and dihedral angles between points. A point is
either a :class:`Vector3`, a sequence or numpy array of three numbers, or an
atom (whose coordinates are used). All functions are pure.

    >>> distance((0, 0, 0), (3, 0, 4))
    5.0
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, NamedTuple, Union

import numpy as np

from molkit.exceptions import DegenerateGeometryError, UnsupportedOperandError

if TYPE_CHECKING:
    from molkit.types import Atom


class Vector3(NamedTuple):
    """Cartesian coordinates of a point."""
    
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    
    def length(self) -> float:
        """Euclidean norm."""
        return float(np.linalg.norm(self))


ORIGIN = Vector3(0.0, 0.0, 0.0)

PointLike = Union["Atom", Vector3, Sequence[float], np.ndarray]


def vector(*args) -> Vector3:
    """Build a Vector3 from ``x, y, z`` or from one three-element sequence.
    
    Raises:
        ValueError: If the input does not hold exactly three numbers.
    """
    if len(args) == 1:
        (seq,) = args
        if isinstance(seq, Vector3):
            return seq
        if isinstance(seq, (str, bytes)):
            raise ValueError(f"Cannot build coordinates from {seq!r}")
    else:
        seq = args
    try:
        values = np.asarray(seq, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Cannot build coordinates from {seq!r}") from exc
    if values.shape != (3,):
        raise ValueError(f"Expected 3 coordinates, got shape {values.shape}")
    return Vector3(*values.tolist())


def as_point(obj: PointLike) -> Vector3:
    """Project an atom or a raw point to its coordinates.
    
    Raises:
        UnsupportedOperandError: If ``obj`` is neither an atom nor a point.
    """
    from molkit.types import Atom
    
    if isinstance(obj, Atom):
        return obj.coords
    if isinstance(obj, Vector3):
        return obj
    if isinstance(obj, (Sequence, np.ndarray)) and not isinstance(obj, (str, bytes)):
        try:
            return vector(obj)
        except ValueError as exc:
            raise UnsupportedOperandError(
                f"{obj!r} is not a three-dimensional point"
            ) from exc
    raise UnsupportedOperandError(
        f"Geometry is undefined for objects of type '{type(obj).__name__}'"
    )


def as_array(obj: PointLike) -> np.ndarray:
    """Coordinates of a point as a float array of shape (3,)."""
    return np.asarray(as_point(obj), dtype=float)


def distance(p: PointLike, q: PointLike) -> float:
    """Distance between two points or atoms."""
    return float(np.linalg.norm(as_array(p) - as_array(q)))


def _vector_angle(v1: np.ndarray, v2: np.ndarray) -> float:
    """Angle in radians between two vectors.
    
    Raises:
        DegenerateGeometryError: If either vector has zero length.
    """
    norm = np.linalg.norm(v1) * np.linalg.norm(v2)
    if norm == 0.0:
        raise DegenerateGeometryError("Angle undefined for a zero-length vector")
    # Rounding can push the cosine slightly outside [-1, 1]
    cosine = np.clip(np.dot(v1, v2) / norm, -1.0, 1.0)
    return float(np.arccos(cosine))


def angle(p1: PointLike, p2: PointLike, p3: PointLike) -> float:
    """Angle p1-p2-p3 in radians; ``p2`` is the vertex.
    
    Raises:
        UnsupportedOperandError: If a point is not an atom or coordinates.
        DegenerateGeometryError: If p2 coincides with p1 or p3.
    """
    c1, c2, c3 = as_array(p1), as_array(p2), as_array(p3)
    return _vector_angle(c1 - c2, c3 - c2)


def dihedral(p1: PointLike, p2: PointLike, p3: PointLike, p4: PointLike) -> float:
    """Signed dihedral angle p1-p2-p3-p4 in radians.
    
    The magnitude is the angle between the normals of the planes
    (p1, p2, p3) and (p2, p3, p4). The sign is positive when the first
    bond vector points along the normal of the second plane.
    
    Raises:
        UnsupportedOperandError: If a point is not an atom or coordinates.
        DegenerateGeometryError: If three consecutive points are collinear
            or coincide.
    """
    c1, c2, c3, c4 = (as_array(p) for p in (p1, p2, p3, p4))
    v1 = c1 - c2
    v2 = c3 - c2
    v3 = c4 - c3
    x1 = np.cross(v1, v2)
    x2 = np.cross(v3, v2)
    abs_dihedral = _vector_angle(x1, x2)
    return abs_dihedral if np.dot(v1, x2) > 0 else -abs_dihedral


def angle_deg(p1: PointLike, p2: PointLike, p3: PointLike) -> float:
    """Same as :func:`angle`, in degrees."""
    return math.degrees(angle(p1, p2, p3))


def dihedral_deg(p1: PointLike, p2: PointLike, p3: PointLike, p4: PointLike) -> float:
    """Same as :func:`dihedral`, in degrees."""
    return math.degrees(dihedral(p1, p2, p3, p4))
