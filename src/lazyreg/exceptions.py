"""Exceptions for the registry.

All failures are raised to the immediate caller. Each exception keeps the
key it relates to so host applications can report it however they like.
"""

from typing import Any, Optional


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(
        self, message: str, key: Optional[Any] = None, *args, details: Optional[dict[str, Any]] = None
    ) -> None:
        """Initialize RegistryError.

        Args:
            message: The error message
            key: The key the failed operation was called with, if any
            *args: Additional args for Exception
            details: Optional extra diagnostic information
        """
        self.key = key
        self.details = details or {}
        super().__init__(message, *args)

    def __reduce__(self):
        # key and details are not part of args
        return type(self), (self.args[0], self.key, *self.args[1:]), {"details": self.details}


class InvalidArgumentError(RegistryError, ValueError):
    """Raised when a key or value is missing or cannot be used as a key."""

    pass


class NotFoundError(RegistryError, LookupError):
    """Raised when a value is required from a reference that is not bound yet."""

    pass


class AlreadyBoundError(RegistryError):
    """Raised when a key is registered again with a different value.

    Attributes:
        key: The key being registered
        existing: The value already bound to the key
        rejected: The value that was refused
    """

    def __init__(self, key: Any, existing: Any, rejected: Any) -> None:
        self.existing = existing
        self.rejected = rejected
        super().__init__(f"{key} is already bound to {existing}, cannot bind to {rejected}", key)

    def __reduce__(self):
        return type(self), (self.key, self.existing, self.rejected), {"details": self.details}
