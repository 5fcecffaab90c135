from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, overload

from typing_extensions import Self

from diregistry._internal.type_checks import optional_member
from diregistry.constructors import ConstructorParameter, ConstructorSpec
from diregistry.exceptions import (
    DIRegistryInvalidRegistrationError,
    DIRegistryRegistrationMissingError,
    MissingReason,
)
from diregistry.lock_mode import LockMode
from diregistry.providers import (
    AliasBinding,
    Binding,
    ConstructorProvider,
    FixedArgumentsProvider,
    InstanceProvider,
    NamedBinding,
    RegistryBinding,
    SingletonProvider,
    UnannotatedBinding,
    ValueBinding,
)

if TYPE_CHECKING:
    from diregistry.registry import Registry

logger = logging.getLogger(__name__)


class Registration:
    """Fluent handle returned by ``Registry.register``.

    Creating a registration selects a constructor of the concrete type, binds
    each of its parameters and installs a constructor provider under the
    registration name. Every modifier returns the same registration and
    replaces either one parameter binding or the installed provider, so later
    calls win over earlier ones.

    Examples:
        .. code-block:: python

            registry.register(Operand, Constant, "five").with_constructor("value", 5)
            registry.register(Operand, Sum, "add").with_dependency("left", "five")

    """

    def __init__(self, registry: Registry, name: str, concrete_type: type[Any]) -> None:
        self._registry = registry
        self._name = name
        self._concrete_type = concrete_type
        self._constructor = registry._inspector.select_default(concrete_type)
        self._fixed_arguments = False
        self._bindings: dict[str, Binding] = {
            parameter.name: self._default_binding(parameter)
            for parameter in self._constructor.parameters
        }
        registry._install_provider(name, ConstructorProvider(self._constructor, self._bindings))
        logger.debug(
            "Registered %s under %r using constructor %s",
            concrete_type.__qualname__,
            name,
            self._constructor.name,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def concrete_type(self) -> type[Any]:
        return self._concrete_type

    @property
    def constructor(self) -> ConstructorSpec:
        """The constructor this registration calls.

        The default selection until ``with_constructor`` switches signatures.
        """
        return self._constructor

    def as_instance(self, instance: Any) -> Self:
        """Resolve this registration to ``instance`` every time.

        The constructor provider is discarded.
        """
        self._registry._install_provider(self._name, InstanceProvider(instance))
        return self

    def as_singleton(self, *, lock_mode: LockMode | None = None) -> Self:
        """Memoize the currently installed provider of this registration.

        The first resolution runs the provider; every later resolution returns
        the cached result. Modifiers that replace the provider after this call
        are not memoized.

        Args:
            lock_mode: Locking for the first resolution. Defaults to the
                registry's ``lock_mode``.

        Raises:
            DIRegistryRegistrationMissingError: If the registration was cleared
                from the registry before this call.

        """
        provider = self._registry._get_provider(self._name)
        if provider is None:
            msg = f"Registration '{self._name}' is not registered, cannot wrap it as a singleton."
            raise DIRegistryRegistrationMissingError(
                msg,
                reason=MissingReason.NO_PROVIDER,
                name=self._name,
            )
        effective_lock_mode = lock_mode if lock_mode is not None else self._registry.lock_mode
        self._registry._install_provider(
            self._name,
            SingletonProvider(provider, effective_lock_mode),
        )
        return self

    def with_dependency(self, parameter: str, registration_name: str) -> Self:
        """Resolve ``parameter`` from the registration named ``registration_name``.

        The named registration may be added after this call; it only has to
        exist when this registration is resolved.

        Raises:
            DIRegistryInvalidRegistrationError: If the constructor has no such
                parameter, or fixed arguments were installed by
                ``with_constructor`` with a type sequence.

        """
        self._require_parameter(parameter)
        self._bindings[parameter] = NamedBinding(self._registry, registration_name)
        return self

    @overload
    def with_constructor(self, parameter: str, value: Any) -> Self: ...

    @overload
    def with_constructor(
        self,
        parameter: Sequence[Any],
        value: Sequence[Any],
    ) -> Self: ...

    def with_constructor(self, parameter: str | Sequence[Any], value: Any) -> Self:
        """Fix constructor arguments.

        With a parameter name, bind that single parameter to ``value``.

        With a sequence of parameter types, switch to the constructor whose
        annotated parameter types equal it exactly and always call it with the
        ``value`` sequence, ignoring every per-parameter binding. Per-parameter
        modifiers are rejected after that switch.

        Raises:
            DIRegistryInvalidRegistrationError: If the parameter name is
                unknown, parameters are fixed, or the value count does not
                match the type count.
            DIRegistryRegistrationMissingError: If no constructor has the
                requested parameter types.

        """
        if isinstance(parameter, str):
            self._require_parameter(parameter)
            self._bindings[parameter] = ValueBinding(value)
            return self
        return self._with_constructor_signature(tuple(parameter), tuple(value))

    def _with_constructor_signature(
        self,
        parameter_types: tuple[Any, ...],
        values: tuple[Any, ...],
    ) -> Self:
        spec = self._registry._inspector.find_by_signature(self._concrete_type, parameter_types)
        if spec is None:
            signature = ", ".join(_type_name(parameter_type) for parameter_type in parameter_types)
            msg = (
                f"Attempt to initialize {self._concrete_type.__qualname__}:{self._name} "
                f"with non-existent constructor ({signature})."
            )
            raise DIRegistryRegistrationMissingError(
                msg,
                reason=MissingReason.NO_CONSTRUCTOR,
                dependency=self._concrete_type,
                name=self._name,
            )
        if len(parameter_types) != len(values):
            msg = (
                f"Constructor {spec.name} of '{self._concrete_type.__qualname__}' takes "
                f"{len(parameter_types)} parameters but {len(values)} values were given."
            )
            raise DIRegistryInvalidRegistrationError(msg)

        self._registry._install_provider(self._name, FixedArgumentsProvider(spec, values))
        self._constructor = spec
        self._fixed_arguments = True
        return self

    def _default_binding(self, parameter: ConstructorParameter) -> Binding:
        if self._registry._inspector.is_registry_parameter(parameter):
            return RegistryBinding(self._registry)
        if not parameter.is_annotated:
            return UnannotatedBinding(self._concrete_type.__qualname__, parameter)
        member = optional_member(parameter.annotation)
        if member is not None:
            return AliasBinding(self._registry, member, parameter, optional=True)
        return AliasBinding(self._registry, parameter.annotation, parameter)

    def _require_parameter(self, parameter: str) -> None:
        if self._fixed_arguments:
            msg = (
                f"Registration '{self._name}' calls constructor {self._constructor.name} "
                f"of '{self._concrete_type.__qualname__}' with fixed arguments; "
                f"parameter '{parameter}' cannot be overridden."
            )
            raise DIRegistryInvalidRegistrationError(msg)
        if self._constructor.parameter(parameter) is None:
            known = ", ".join(f"'{p.name}'" for p in self._constructor.parameters) or "none"
            msg = (
                f"Constructor {self._constructor.name} of '{self._concrete_type.__qualname__}' "
                f"has no parameter '{parameter}'. Known parameters: {known}."
            )
            raise DIRegistryInvalidRegistrationError(msg)

    def __repr__(self) -> str:
        return f"Registration(name={self._name!r}, concrete_type={self._concrete_type.__qualname__})"


def _type_name(candidate: Any) -> str:
    return getattr(candidate, "__name__", repr(candidate))


__all__ = ["Registration"]
