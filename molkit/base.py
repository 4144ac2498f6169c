"""
Common base for atoms, bonds and molecules.

Every object carries an ``id``, a free-form ``name`` and ``type``, and an
open-ended attribute store. File-format plugins keep their own metadata in
the attribute store, namespaced as ``"plugin_name/attribute"``.
"""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Iterator

_MISSING = object()


class ChemObject:
    """Base class with identity and an attribute store.
    
    Subclasses set ``_id_prefix``; a fresh id such as ``"a1"`` is drawn from a
    per-class counter when no id is given.
    
    Identity is explicit: objects compare by object identity, and
    :meth:`same_id` compares ids.
    """
    
    __slots__ = ("id", "name", "type", "_attrs", "__weakref__")
    
    _id_prefix: ClassVar[str] = "obj"
    _id_counter: ClassVar[Iterator[int]] = itertools.count(1)
    
    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Subclasses that declare a prefix get their own sequence
        if "_id_prefix" in cls.__dict__:
            cls._id_counter = itertools.count(1)
    
    def __init__(
        self,
        id: str | None = None,
        name: str = "",
        type: str = "",
        attrs: Mapping[str, Any] | None = None,
    ) -> None:
        self.id = id if id is not None else self.next_id()
        self.name = name
        self.type = type
        self._attrs: dict[str, Any] = dict(attrs) if attrs else {}
    
    @classmethod
    def next_id(cls) -> str:
        """Generate the next sequential id for this class."""
        return f"{cls._id_prefix}{next(cls._id_counter)}"
    
    @classmethod
    def reset_id(cls) -> None:
        """Restart the sequential id counter."""
        cls._id_counter = itertools.count(1)
    
    def attr(self, key: str, value: Any = _MISSING) -> Any:
        """Get or set an attribute.
        
        With one argument returns the value (None if unset). With two
        arguments sets it and returns ``self`` for chaining.
        """
        if value is _MISSING:
            return self._attrs.get(key)
        self._attrs[key] = value
        return self
    
    def del_attr(self, key: str) -> Any:
        """Remove an attribute, returning its old value (None if unset)."""
        return self._attrs.pop(key, None)
    
    @property
    def attrs(self) -> Mapping[str, Any]:
        """Read-only view of the attribute store."""
        return MappingProxyType(self._attrs)
    
    def same_id(self, other: object) -> bool:
        """Check if ``other`` is a chemistry object with the same id."""
        return isinstance(other, ChemObject) and other.id == self.id
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
