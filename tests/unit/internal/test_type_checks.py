from __future__ import annotations

from typing import Optional, Protocol, Union

from diregistry._internal.type_checks import (
    is_protocol_class,
    is_runtime_class,
    optional_member,
    qualified_name,
)


class _Proto(Protocol):
    def run(self) -> None: ...


class _Impl(_Proto):
    def run(self) -> None:
        pass


def test_is_runtime_class() -> None:
    assert is_runtime_class(int)
    assert not is_runtime_class(list[int])
    assert not is_runtime_class(1)


def test_is_protocol_class() -> None:
    assert is_protocol_class(_Proto)
    assert not is_protocol_class(_Impl)
    assert not is_protocol_class(int)


def test_qualified_name() -> None:
    assert qualified_name(_Proto) == f"{__name__}._Proto"
    assert qualified_name(_Impl()).startswith("<")


def test_optional_member() -> None:
    assert optional_member(Optional[_Impl]) is _Impl  # noqa: UP007
    assert optional_member(_Impl | None) is _Impl
    assert optional_member(_Impl) is None
    assert optional_member(int | str | None) is None
    assert optional_member(Union[int, str]) is None  # noqa: UP007
