from __future__ import annotations

import types
from typing import Any, TypeGuard, Union, get_args, get_origin

_UNION_ORIGINS = (Union, types.UnionType)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` class."""
    return is_runtime_class(candidate) and bool(getattr(candidate, "_is_protocol", False))


def optional_member(annotation: Any) -> Any | None:
    """Return ``X`` for ``X | None`` or ``Optional[X]``, otherwise ``None``.

    Unions with more than one non-``None`` member are not unwrapped.
    """
    if get_origin(annotation) not in _UNION_ORIGINS:
        return None
    members = [member for member in get_args(annotation) if member is not type(None)]
    if len(members) != 1:
        return None
    return members[0]


def qualified_name(candidate: Any) -> str:
    """Return ``module.QualName`` for classes and ``repr`` for anything else."""
    module = getattr(candidate, "__module__", None)
    qualname = getattr(candidate, "__qualname__", None)
    if module is None or qualname is None:
        return repr(candidate)
    return f"{module}.{qualname}"


__all__ = ["is_protocol_class", "is_runtime_class", "optional_member", "qualified_name"]
