from __future__ import annotations

import inspect
from typing import Any

from diregistry._internal.type_checks import is_protocol_class, is_runtime_class
from diregistry.exceptions import DIRegistryInvalidRegistrationError


class RegistrationValidator:
    """Validates registrations before a Registration builder is created."""

    def validate_registration(self, capability: Any, concrete_type: object, name: object) -> None:
        """Validate a capability/concrete pair and its registration name."""
        self.validate_concrete_type(concrete_type)
        self.validate_implements(capability, concrete_type)
        self.validate_name(name)

    def validate_concrete_type(self, concrete_type: object) -> None:
        """Validate that a concrete provider is an instantiable class."""
        if not is_runtime_class(concrete_type):
            msg = f"Concrete provider must be a class, got {concrete_type!r}."
            raise DIRegistryInvalidRegistrationError(msg)
        if inspect.isabstract(concrete_type):
            msg = f"Concrete provider '{concrete_type.__qualname__}' cannot be an abstract class."
            raise DIRegistryInvalidRegistrationError(msg)

    def validate_implements(self, capability: Any, concrete_type: type[Any]) -> None:
        """Validate that the concrete type implements a class capability.

        Protocols are structural and are not checked.
        """
        if not is_runtime_class(capability) or is_protocol_class(capability):
            return
        if not issubclass(concrete_type, capability):
            msg = (
                f"Concrete provider '{concrete_type.__qualname__}' does not implement "
                f"'{capability.__qualname__}'."
            )
            raise DIRegistryInvalidRegistrationError(msg)

    def validate_name(self, name: object) -> None:
        """Validate that a registration name is a non-empty string."""
        if not isinstance(name, str) or not name:
            msg = f"Registration name must be a non-empty string, got {name!r}."
            raise DIRegistryInvalidRegistrationError(msg)
