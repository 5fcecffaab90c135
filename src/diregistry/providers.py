"""Provider and binding callables installed by registrations.

A provider is a zero-argument callable stored in the registry's provider table
under a registration name. A binding is a zero-argument callable that produces
one constructor argument when its provider runs. Both are evaluated lazily, so
a provider may refer to names that are registered after it.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from diregistry.constructors import ConstructorParameter, ConstructorSpec
from diregistry.exceptions import DIRegistryRegistrationMissingError, MissingReason
from diregistry.lock_mode import LockMode

if TYPE_CHECKING:
    from diregistry.registry import Registry

OMIT_ARGUMENT: Any = object()
"""Returned by a binding to let the constructor's own default apply."""

_NOT_CREATED: Any = object()


class Provider(Protocol):
    """Protocol for zero-argument providers stored in the provider table."""

    def __call__(self) -> Any:
        """Build or return an instance."""
        ...


Binding = Callable[[], Any]


class RegistryBinding:
    """Binding that supplies the registry itself."""

    __slots__ = ("_registry",)

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def __call__(self) -> Any:
        return self._registry


class AliasBinding:
    """Binding that resolves a parameter through the default name of its type.

    When the type has no alias, a parameter with a default is omitted and an
    ``optional`` parameter (annotated ``X | None``) receives ``None``.
    """

    __slots__ = ("_dependency", "_optional", "_parameter", "_registry")

    def __init__(
        self,
        registry: Registry,
        dependency: Any,
        parameter: ConstructorParameter,
        *,
        optional: bool = False,
    ) -> None:
        self._registry = registry
        self._dependency = dependency
        self._parameter = parameter
        self._optional = optional

    def __call__(self) -> Any:
        if self._registry._alias_for(self._dependency) is None:
            if not self._parameter.is_required:
                return OMIT_ARGUMENT
            if self._optional:
                return None
        return self._registry.resolve_by_type(self._dependency)


class NamedBinding:
    """Binding that resolves a specific registration name."""

    __slots__ = ("_name", "_registry")

    def __init__(self, registry: Registry, name: str) -> None:
        self._registry = registry
        self._name = name

    def __call__(self) -> Any:
        return self._registry.resolve_by_name(self._name)


class ValueBinding:
    """Binding that always supplies the same value."""

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    def __call__(self) -> Any:
        return self._value


class UnannotatedBinding:
    """Binding for a required parameter the registry has no type for."""

    __slots__ = ("_owner", "_parameter")

    def __init__(self, owner: str, parameter: ConstructorParameter) -> None:
        self._owner = owner
        self._parameter = parameter

    def __call__(self) -> Any:
        if not self._parameter.is_required:
            return OMIT_ARGUMENT
        msg = (
            f"Parameter '{self._parameter.name}' of '{self._owner}' has no type annotation "
            "to resolve. Annotate it or override it with with_dependency/with_constructor."
        )
        raise DIRegistryRegistrationMissingError(msg, reason=MissingReason.NO_ANNOTATION)


class ConstructorProvider:
    """Provider that evaluates every binding and calls the selected constructor.

    ``bindings`` is read on every call, so overrides made on the owning
    registration after installation are still honored.
    """

    __slots__ = ("_bindings", "_constructor")

    def __init__(self, constructor: ConstructorSpec, bindings: Mapping[str, Binding]) -> None:
        self._constructor = constructor
        self._bindings = bindings

    def __call__(self) -> Any:
        arguments = []
        for parameter in self._constructor.parameters:
            value = self._bindings[parameter.name]()
            if value is OMIT_ARGUMENT:
                continue
            arguments.append((parameter, value))
        return self._constructor.invoke(arguments)


class FixedArgumentsProvider:
    """Provider that calls a constructor with the same argument values every time."""

    __slots__ = ("_arguments", "_constructor")

    def __init__(self, constructor: ConstructorSpec, values: Sequence[Any]) -> None:
        self._constructor = constructor
        self._arguments = tuple(zip(constructor.parameters, values, strict=True))

    def __call__(self) -> Any:
        return self._constructor.invoke(self._arguments)


class InstanceProvider:
    """Provider that always returns the same object."""

    __slots__ = ("_instance",)

    def __init__(self, instance: Any) -> None:
        self._instance = instance

    def __call__(self) -> Any:
        return self._instance


class SingletonProvider:
    """Provider that memoizes the first result of another provider.

    With ``LockMode.THREAD`` the wrapped provider runs at most once. With
    ``LockMode.NONE`` concurrent first calls may each run it and the last
    result written is the one kept.
    """

    __slots__ = ("_instance", "_lock", "_provider")

    def __init__(self, provider: Provider, lock_mode: LockMode) -> None:
        self._provider = provider
        self._instance: Any = _NOT_CREATED
        self._lock = threading.RLock() if lock_mode is LockMode.THREAD else None

    def __call__(self) -> Any:
        instance = self._instance
        if instance is not _NOT_CREATED:
            return instance
        if self._lock is None:
            instance = self._provider()
            self._instance = instance
            return instance
        with self._lock:
            # Double-check: another thread may have finished while we waited.
            if self._instance is _NOT_CREATED:
                self._instance = self._provider()
            return self._instance


__all__ = [
    "OMIT_ARGUMENT",
    "AliasBinding",
    "Binding",
    "ConstructorProvider",
    "FixedArgumentsProvider",
    "InstanceProvider",
    "NamedBinding",
    "Provider",
    "RegistryBinding",
    "SingletonProvider",
    "UnannotatedBinding",
    "ValueBinding",
]
