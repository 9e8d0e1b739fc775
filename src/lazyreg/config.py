"""Configuration model for registries using Pydantic."""

from pydantic import BaseModel, field_validator


class RegistryConfig(BaseModel):
    """Settings applied to a :class:`~lazyreg.registry.Registry` at construction.

    Examples:
    --------
    >>> RegistryConfig()                                   # unnamed, single owner
    >>> RegistryConfig(name="plugins", thread_safe=True)   # guarded by a lock
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: str = "registry"
    # Guard map access and lazy fills with a lock for multi-threaded hosts
    thread_safe: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank registry names."""
        name = v.strip()
        if not name:
            raise ValueError("Registry name cannot be empty")
        return name
