"""Quickstart: register capabilities and let the registry wire constructors.

Register each abstract capability against a concrete class, resolve only the
top-level capability, and the registry builds its dependencies from the
constructor's type hints.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from diregistry import Registry


class Database(ABC):
    @abstractmethod
    def host(self) -> str: ...


class LocalDatabase(Database):
    def host(self) -> str:
        return "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    registry = Registry()
    registry.register(UserService, UserService)
    registry.register(Database, LocalDatabase)
    registry.register(UserRepository, UserRepository)

    service = registry.resolve(UserService)

    print(f"db_host={service.repository.database.host()}")  # => db_host=localhost

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>LocalDatabase


if __name__ == "__main__":
    main()
