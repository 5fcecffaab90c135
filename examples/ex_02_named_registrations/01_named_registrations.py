"""Named registrations: several implementations of one capability.

The first registration of a capability becomes its default. Further
registrations under other names stay reachable by name, and
``with_dependency`` wires a specific name into a constructor parameter, even
when that name is registered later.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from diregistry import Registry


class Operand(ABC):
    @abstractmethod
    def value(self) -> int: ...


class Constant(Operand):
    def __init__(self, number: int) -> None:
        self.number = number

    def value(self) -> int:
        return self.number


class Add(Operand):
    def __init__(self, left: Operand, right: Operand) -> None:
        self.left = left
        self.right = right

    def value(self) -> int:
        return self.left.value() + self.right.value()


def main() -> None:
    registry = Registry()
    registry.register(Operand, Add, "add").with_dependency("left", "five").with_dependency(
        "right",
        "six",
    )
    registry.register(Operand, Constant, "five").with_constructor("number", 5)
    registry.register(Operand, Constant, "six").with_constructor("number", 6)

    print(f"add={registry.resolve(Operand, 'add').value()}")  # => add=11
    print(f"default={type(registry.resolve(Operand)).__name__}")  # => default=Add


if __name__ == "__main__":
    main()
