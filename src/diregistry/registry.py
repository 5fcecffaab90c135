from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, overload

from diregistry._internal.type_checks import qualified_name
from diregistry.constructors import ConstructorInspector
from diregistry.exceptions import DIRegistryRegistrationMissingError, MissingReason
from diregistry.lock_mode import LockMode
from diregistry.registration import Registration
from diregistry.validators import RegistrationValidator

if TYPE_CHECKING:
    from diregistry.providers import Provider

T = TypeVar("T")

logger = logging.getLogger(__name__)


def default_registration_name(capability: Any) -> str:
    """Return the name used when a capability is registered without one."""
    return qualified_name(capability)


class Registry:
    """Map capability types to concrete implementations and build them on demand.

    The registry owns two tables: providers keyed by registration name and
    aliases from a capability type to its default registration name. The
    first registration of a capability fixes its alias; later registrations
    of the same capability under other names only add named entries.

    Resolution is lazy. Constructor arguments are resolved when the provider
    runs, not when it is registered, so dependents may be registered before
    their dependencies.

    Examples:
        .. code-block:: python

            registry = Registry()
            registry.register(Clock, SystemClock).as_singleton()
            clock = registry.resolve(Clock)

    """

    def __init__(self, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        """Initialize an empty registry.

        Args:
            lock_mode: Default locking used by ``Registration.as_singleton``.
                ``LockMode.THREAD`` guarantees a singleton factory runs at most
                once; ``LockMode.NONE`` skips locking.

        """
        self._lock_mode = lock_mode
        self._lock = threading.RLock()
        self._providers: dict[str, Provider] = {}
        self._aliases: dict[Any, str] = {}
        self._validator = RegistrationValidator()
        self._inspector = ConstructorInspector(registry_type=Registry)

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    def register(
        self,
        capability: Any,
        concrete_type: type[Any],
        name: str | None = None,
    ) -> Registration:
        """Register ``concrete_type`` as the implementation of ``capability``.

        A constructor provider is installed under ``name`` immediately,
        replacing any provider already stored under that name.

        Args:
            capability: The abstract type callers resolve.
            concrete_type: Class to build when the capability is resolved.
            name: Registration name. Defaults to the capability's fully
                qualified name.

        Returns:
            A ``Registration`` for fluent configuration.

        Raises:
            DIRegistryInvalidRegistrationError: If ``concrete_type`` is not a
                class, does not subclass a class capability, or ``name`` is
                empty.

        """
        if name is None:
            name = default_registration_name(capability)
        self._validator.validate_registration(capability, concrete_type, name)

        with self._lock:
            registration = Registration(self, name, concrete_type)
            if capability not in self._aliases:
                self._aliases[capability] = name
                logger.debug("Aliased %s to registration %r", qualified_name(capability), name)
        return registration

    @overload
    def resolve(self, capability: type[T], name: str | None = None) -> T: ...

    @overload
    def resolve(self, capability: Any, name: str | None = None) -> Any: ...

    def resolve(self, capability: Any, name: str | None = None) -> Any:
        """Resolve ``capability`` by its default registration or by ``name``.

        Raises:
            DIRegistryRegistrationMissingError: If no alias or provider exists.

        """
        if name is not None:
            return self.resolve_by_name(name)
        return self.resolve_by_type(capability)

    def resolve_by_name(self, name: str) -> Any:
        """Invoke the provider stored under ``name`` and return its result.

        Raises:
            DIRegistryRegistrationMissingError: If ``name`` has no provider.

        """
        provider = self._get_provider(name)
        if provider is None:
            msg = f"Registration '{name}' is not registered, cannot resolve."
            raise DIRegistryRegistrationMissingError(
                msg,
                reason=MissingReason.NO_PROVIDER,
                name=name,
            )
        return provider()

    def resolve_by_type(self, capability: Any) -> Any:
        """Resolve the default registration of ``capability``.

        Raises:
            DIRegistryRegistrationMissingError: If ``capability`` was never
                registered, or its default registration has no provider.

        """
        with self._lock:
            name = self._aliases.get(capability)
            provider = self._providers.get(name) if name is not None else None
        if name is None:
            msg = f"Interface {qualified_name(capability)} not registered, cannot resolve."
            raise DIRegistryRegistrationMissingError(
                msg,
                reason=MissingReason.NO_ALIAS,
                dependency=capability,
            )
        if provider is None:
            msg = (
                f"Interface {qualified_name(capability)} is aliased to registration "
                f"'{name}', which has no provider."
            )
            raise DIRegistryRegistrationMissingError(
                msg,
                reason=MissingReason.NO_PROVIDER,
                dependency=capability,
                name=name,
            )
        return provider()

    def clear_registrations(self) -> None:
        """Remove every provider and alias."""
        with self._lock:
            self._providers = {}
            self._aliases = {}
        logger.debug("Cleared all registrations")

    def _install_provider(self, name: str, provider: Provider) -> None:
        with self._lock:
            self._providers[name] = provider
        logger.debug("Installed %s for registration %r", type(provider).__name__, name)

    def _get_provider(self, name: str) -> Provider | None:
        with self._lock:
            return self._providers.get(name)

    def _alias_for(self, capability: Any) -> str | None:
        with self._lock:
            return self._aliases.get(capability)


__all__ = ["Registry", "default_registration_name"]
