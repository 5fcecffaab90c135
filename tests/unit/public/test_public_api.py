import inspect

import diregistry
from diregistry import Registration, Registry


def test_all_exports_are_importable() -> None:
    for name in diregistry.__all__:
        assert hasattr(diregistry, name), name


def test_registry_public_methods() -> None:
    public = {name for name, _ in inspect.getmembers(Registry) if not name.startswith("_")}

    assert {
        "register",
        "resolve",
        "resolve_by_name",
        "resolve_by_type",
        "clear_registrations",
        "lock_mode",
    } <= public


def test_registration_public_methods() -> None:
    public = {name for name, _ in inspect.getmembers(Registration) if not name.startswith("_")}

    assert {
        "as_instance",
        "as_singleton",
        "with_dependency",
        "with_constructor",
        "name",
        "concrete_type",
        "constructor",
    } <= public


def test_registry_options_are_keyword_only() -> None:
    parameters = inspect.signature(Registry).parameters

    assert parameters["lock_mode"].kind is inspect.Parameter.KEYWORD_ONLY
    assert parameters["lock_mode"].default is diregistry.LockMode.THREAD
