"""lazyreg - A key-to-value registry with forward references."""

from lazyreg.config import RegistryConfig
from lazyreg.exceptions import (
    AlreadyBoundError,
    InvalidArgumentError,
    NotFoundError,
    RegistryError,
)
from lazyreg.references import ImmediateReference, LazyReference, Reference, ReferenceKind
from lazyreg.registry import Registry, RegistryView, create_registry

__all__ = [
    "AlreadyBoundError",
    "ImmediateReference",
    "InvalidArgumentError",
    "LazyReference",
    "NotFoundError",
    "Reference",
    "ReferenceKind",
    "Registry",
    "RegistryConfig",
    "RegistryError",
    "RegistryView",
    "create_registry",
]
__version__ = "1.0.0"
