from diregistry.constructors import constructor
from diregistry.exceptions import (
    DIRegistryError,
    DIRegistryInvalidRegistrationError,
    DIRegistryRegistrationMissingError,
    MissingReason,
)
from diregistry.lock_mode import LockMode
from diregistry.registration import Registration
from diregistry.registry import Registry, default_registration_name

__all__ = [
    "DIRegistryError",
    "DIRegistryInvalidRegistrationError",
    "DIRegistryRegistrationMissingError",
    "LockMode",
    "MissingReason",
    "Registration",
    "Registry",
    "constructor",
    "default_registration_name",
]
