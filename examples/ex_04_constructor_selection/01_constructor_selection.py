"""Constructor selection with alternate constructors.

``__init__`` and classmethods marked with ``@constructor`` are the
constructors of a class. The registry prefers one that takes only the
registry, then one with no parameters, then the first declared.
``with_constructor([types], [values])`` picks one by exact signature.
"""

from __future__ import annotations

from diregistry import Registry, constructor


class Endpoint:
    def __init__(self, host: str, port: int) -> None:
        self.url = f"{host}:{port}"

    @constructor
    def local(cls) -> Endpoint:
        return cls("127.0.0.1", 8080)

    @constructor
    def from_port(cls, port: int) -> Endpoint:
        return cls("0.0.0.0", port)


class Plugin:
    def __init__(self) -> None:
        self.source = "default"

    @constructor
    def from_registry(cls, registry: Registry) -> Plugin:
        plugin = cls()
        plugin.source = f"registry({type(registry).__name__})"
        return plugin


def main() -> None:
    registry = Registry()
    registry.register(Endpoint, Endpoint)
    print(f"default={registry.resolve(Endpoint).url}")  # => default=127.0.0.1:8080

    registry.register(Endpoint, Endpoint, "public").with_constructor([int], [443])
    print(f"public={registry.resolve(Endpoint, 'public').url}")  # => public=0.0.0.0:443

    registry.register(Plugin, Plugin)
    print(f"plugin={registry.resolve(Plugin).source}")  # => plugin=registry(Registry)


if __name__ == "__main__":
    main()
