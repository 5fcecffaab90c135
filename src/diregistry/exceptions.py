from __future__ import annotations

from enum import Enum
from typing import Any


class MissingReason(Enum):
    """Describe which lookup failed when a registration is missing."""

    NO_ALIAS = "no_alias"
    """The capability type was never registered, so it has no default name."""

    NO_PROVIDER = "no_provider"
    """The registration name has no provider in the provider table."""

    NO_CONSTRUCTOR = "no_constructor"
    """The concrete type has no constructor with the requested signature."""

    NO_ANNOTATION = "no_annotation"
    """A constructor parameter has no usable type annotation to resolve."""


class DIRegistryError(Exception):
    """Represent a base class for all diregistry-specific failures.

    Catch this type when you want to handle any diregistry error path without
    matching each concrete exception class individually.
    """


class DIRegistryRegistrationMissingError(DIRegistryError):
    """Signal that a capability, name or constructor cannot be found.

    Raised by ``Registry.resolve``, ``Registry.resolve_by_name`` and
    ``Registry.resolve_by_type`` when a lookup fails, and by
    ``Registration.with_constructor`` when no constructor matches the
    requested parameter types.

    Typical fixes include registering the capability before resolving it,
    checking the registration name passed to ``with_dependency``, or adding an
    alternate constructor with ``@constructor``.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: MissingReason,
        dependency: Any | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.dependency = dependency
        self.name = name


class DIRegistryInvalidRegistrationError(DIRegistryError):
    """Signal invalid registration configuration.

    Raised by ``Registry.register`` when the concrete type is not a class or
    does not implement the capability, and by ``Registration`` modifiers when
    they name a parameter the selected constructor does not have.
    """
