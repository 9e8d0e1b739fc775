"""Registry that binds keys to values and supports forward references.

A consumer can ask for a key with :meth:`Registry.get_or_create` before any
value exists and keep the returned reference; once a producer calls
:meth:`Registry.register` for that key the same reference object becomes
bound.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from lazyreg.config import RegistryConfig
from lazyreg.exceptions import AlreadyBoundError, InvalidArgumentError
from lazyreg.references import ImmediateReference, LazyReference, Reference

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


@runtime_checkable
class RegistryView(Protocol[K, V]):
    """Read side of a registry, for code that consumes but never registers."""

    def keys(self) -> frozenset[K]:
        """Return a snapshot of every tracked key."""
        ...

    def get(self, key: K) -> Reference[V] | None:
        """Return the reference for ``key`` if one exists."""
        ...

    def get_or_create(self, key: K) -> Reference[V]:
        """Return the reference for ``key``, creating an unbound one if needed."""
        ...


def already_bound(key: Any, existing: Any, rejected: Any) -> AlreadyBoundError | None:
    """Return the error for binding ``rejected`` over ``existing``, or None.

    Values are compared by identity. An equal but distinct object conflicts.
    """
    if existing is not rejected:
        return AlreadyBoundError(key, existing, rejected)
    return None


def _require_key(key: Any) -> None:
    if key is None:
        raise InvalidArgumentError("key cannot be None")
    try:
        hash(key)
    except TypeError as exc:
        raise InvalidArgumentError(f"key must be hashable, got {type(key).__name__}", key) from exc


class Registry(Generic[K, V]):
    """Keyed map of references.

    Each key maps to exactly one reference for the lifetime of the registry.
    Keys are never removed and references are never replaced; registration
    only fills in references that already exist.
    """

    def __init__(self, config: RegistryConfig | None = None) -> None:
        """Initialize an empty registry.

        Args:
            config: Registry settings. Defaults to :class:`RegistryConfig()`.
        """
        self.config = config or RegistryConfig()
        # Map of key -> the single reference issued for it
        self._references: dict[K, ImmediateReference[K, V] | LazyReference[K, V]] = {}
        self._lock = threading.RLock() if self.config.thread_safe else contextlib.nullcontext()

    @property
    def name(self) -> str:
        return self.config.name

    def keys(self) -> frozenset[K]:
        """Return a snapshot of all tracked keys, bound or not."""
        with self._lock:
            return frozenset(self._references)

    def unbound_keys(self) -> frozenset[K]:
        """Return a snapshot of keys that were requested but never registered."""
        with self._lock:
            return frozenset(key for key, reference in self._references.items() if not reference.bound())

    def get(self, key: K) -> Reference[V] | None:
        """Return the existing reference for ``key`` without creating one.

        Raises:
            InvalidArgumentError: If ``key`` is None or unhashable
        """
        _require_key(key)
        with self._lock:
            return self._references.get(key)

    def get_or_create(self, key: K) -> Reference[V]:
        """Return the reference for ``key``, creating an unbound lazy one if none exists.

        Raises:
            InvalidArgumentError: If ``key`` is None or unhashable
        """
        _require_key(key)
        with self._lock:
            reference = self._references.get(key)
            if reference is None:
                # Nothing registered yet; the lazy reference is filled in by a later register()
                reference = LazyReference(key)
                self._references[key] = reference
                logger.debug("Created lazy reference for %r in %s", key, self.name)
            return reference

    def register(self, key: K, value: V) -> Reference[V]:
        """Bind ``value`` to ``key`` and return the key's reference.

        Re-registering the same object is a no-op. Registering a different
        object for a bound key fails and leaves the existing binding in place.

        Args:
            key: The key to bind
            value: The value to bind

        Returns:
            The reference for ``key``. This is the previously issued lazy
            reference if the key was requested before registration.

        Raises:
            InvalidArgumentError: If ``key`` or ``value`` is None, or ``key`` is unhashable
            AlreadyBoundError: If ``key`` is bound to a different object
        """
        _require_key(key)
        if value is None:
            raise InvalidArgumentError("value cannot be None", key)

        with self._lock:
            reference = self._references.get(key)

            if reference is None:
                reference = ImmediateReference(key, value)
                self._references[key] = reference
                logger.debug("Registered %r in %s", key, self.name)
                return reference

            if isinstance(reference, ImmediateReference):
                existing = reference.value
            else:
                existing = reference._bind(value)
                if existing is None:
                    logger.debug("Bound forward reference %r in %s", key, self.name)
                    return reference

            error = already_bound(key, existing, value)
            if error is not None:
                raise error
            return reference

    def __contains__(self, key: object) -> bool:
        _require_key(key)
        with self._lock:
            return key in self._references

    def __len__(self) -> int:
        with self._lock:
            return len(self._references)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, keys={len(self)})"


def create_registry(config: RegistryConfig | dict[str, Any] | None = None, **overrides: Any) -> Registry:
    """Create an empty registry.

    Args:
        config: A :class:`RegistryConfig` or a dict of its fields
        **overrides: Config fields that take precedence over ``config``

    Returns:
        A new, empty :class:`Registry`

    Raises:
        pydantic.ValidationError: If the configuration is invalid
    """
    if isinstance(config, RegistryConfig):
        data = config.model_dump()
    else:
        data = dict(config or {})
    data.update(overrides)
    return Registry(RegistryConfig.model_validate(data))
