"""Errors: missing registrations surface when something is resolved.

Every lookup failure raises ``DIRegistryRegistrationMissingError`` with a
``reason`` describing which table had no entry.
"""

from __future__ import annotations

from diregistry import DIRegistryRegistrationMissingError, Registry


class Mailer:
    pass


class Notifier:
    def __init__(self, mailer: Mailer) -> None:
        self.mailer = mailer


def main() -> None:
    registry = Registry()
    registry.register(Notifier, Notifier)

    try:
        registry.resolve(Notifier)
    except DIRegistryRegistrationMissingError as error:
        print(f"reason={error.reason.value}")  # => reason=no_alias
        print(f"missing={error.dependency.__name__}")  # => missing=Mailer

    registry.register(Mailer, Mailer)
    print(f"resolved={type(registry.resolve(Notifier).mailer).__name__}")  # => resolved=Mailer

    registry.clear_registrations()
    try:
        registry.resolve_by_name("__main__.Notifier")
    except DIRegistryRegistrationMissingError as error:
        print(f"after_clear={error.reason.value}")  # => after_clear=no_provider


if __name__ == "__main__":
    main()
