"""Singletons and fixed instances.

``as_singleton()`` memoizes the first resolved object. ``as_instance()``
always returns the object you pass in, so later changes to it are visible to
every consumer.
"""

from __future__ import annotations

from diregistry import Registry


class Settings:
    def __init__(self) -> None:
        self.debug = False


class Counter:
    def __init__(self) -> None:
        self.count = 0


def main() -> None:
    registry = Registry()
    registry.register(Counter, Counter).as_singleton()

    registry.resolve(Counter).count += 1
    registry.resolve(Counter).count += 1
    print(f"singleton_count={registry.resolve(Counter).count}")  # => singleton_count=2

    settings = Settings()
    registry.register(Settings, Settings).as_instance(settings)
    settings.debug = True

    print(f"same_instance={registry.resolve(Settings) is settings}")  # => same_instance=True
    print(f"debug={registry.resolve(Settings).debug}")  # => debug=True

    registry.register(Counter, Counter, "transient")
    first = registry.resolve(Counter, "transient")
    second = registry.resolve(Counter, "transient")
    print(f"transient_shared={first is second}")  # => transient_shared=False


if __name__ == "__main__":
    main()
