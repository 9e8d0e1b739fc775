"""Reference types handed out by the registry.

A reference is a handle to the slot a registry keeps for one key. There are
exactly two kinds:

- :class:`ImmediateReference` is created when a value is registered before
  anyone asked for the key. It is bound from the start and never changes.
- :class:`LazyReference` is created when a key is requested before a value
  exists. It starts unbound and is filled in place by the registry once the
  value is registered, so every holder observes the same fill.

Callers only rely on the :class:`Reference` protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Protocol, TypeVar, runtime_checkable

from lazyreg.exceptions import NotFoundError

K = TypeVar("K")
V = TypeVar("V")
V_co = TypeVar("V_co", covariant=True)


class ReferenceKind(Enum):
    """How a reference was created, independent of whether it is bound now."""

    IMMEDIATE = "immediate"
    LAZY = "lazy"


@runtime_checkable
class Reference(Protocol[V_co]):
    """Read-only capability shared by both reference kinds."""

    def bound(self) -> bool:
        """Return True if a value is available."""
        ...

    def get(self) -> V_co | None:
        """Return the value, or None if the reference is not bound yet."""
        ...

    def need(self) -> V_co:
        """Return the value, raising :class:`NotFoundError` if not bound."""
        ...

    def kind(self) -> ReferenceKind:
        """Return which kind of reference this is."""
        ...


@dataclass(frozen=True, slots=True, eq=False)
class ImmediateReference(Generic[K, V]):
    """Reference bound to its value at construction."""

    key: K
    value: V

    def bound(self) -> bool:
        return True

    def get(self) -> V:
        return self.value

    def need(self) -> V:
        return self.value

    def kind(self) -> ReferenceKind:
        return ReferenceKind.IMMEDIATE


class LazyReference(Generic[K, V]):
    """Reference whose value is filled in after the key was requested.

    The slot goes from empty to filled at most once. After that the reference
    reads exactly like an immediate one, but :meth:`kind` still reports
    ``LAZY``.
    """

    __slots__ = ("_key", "_value")

    def __init__(self, key: K) -> None:
        self._key = key
        self._value: V | None = None

    @property
    def key(self) -> K:
        return self._key

    def _bind(self, value: V) -> V | None:
        """Fill the slot with ``value`` if it is empty.

        Only the registry calls this.

        Returns:
            None if the slot was filled by this call, otherwise the value
            that was already there (left untouched).
        """
        if self._value is None:
            self._value = value
            return None
        return self._value

    def bound(self) -> bool:
        return self._value is not None

    def get(self) -> V | None:
        return self._value

    def need(self) -> V:
        if self._value is None:
            raise NotFoundError(f"No value is bound to {self._key!r} yet", self._key)
        return self._value

    def kind(self) -> ReferenceKind:
        return ReferenceKind.LAZY

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r}, value={self._value!r})"
