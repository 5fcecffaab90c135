from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass, is_dataclass
from inspect import Parameter
from typing import Any, TypeVar, get_type_hints

from diregistry._internal.type_checks import is_runtime_class

F = TypeVar("F", bound=Callable[..., Any])

MISSING_ANNOTATION: Any = object()
"""Annotation placeholder for constructor parameters without a usable type hint."""

_CONSTRUCTOR_MARKER_ATTR = "__diregistry_constructor__"
_IMPLICIT_FIRST_PARAMETER_NAMES = {"self", "cls"}
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


def constructor(func: F) -> classmethod[Any, Any, Any]:
    """Mark a function as an alternate constructor of its class.

    The function is wrapped in ``classmethod``. The registry treats
    ``__init__`` plus every marked classmethod as the constructors of a
    concrete type, in class body declaration order.

    Examples:
        .. code-block:: python

            class Clock:
                def __init__(self, offset: int) -> None:
                    self.offset = offset

                @constructor
                def utc(cls) -> Clock:
                    return cls(0)

    """
    setattr(func, _CONSTRUCTOR_MARKER_ATTR, True)
    return classmethod(func)


@dataclass(frozen=True, slots=True)
class ConstructorParameter:
    """A single injectable parameter of a constructor."""

    name: str
    annotation: Any
    kind: inspect._ParameterKind
    default: Any = Parameter.empty

    @property
    def is_required(self) -> bool:
        return self.default is Parameter.empty

    @property
    def is_annotated(self) -> bool:
        return self.annotation is not MISSING_ANNOTATION


@dataclass(frozen=True, slots=True)
class ConstructorSpec:
    """A callable that builds an instance of a concrete type, with its parameters."""

    name: str
    """``__init__`` or the name of the alternate constructor classmethod."""
    factory: Callable[..., Any]
    """The class itself for ``__init__``, otherwise the bound classmethod."""
    parameters: tuple[ConstructorParameter, ...]

    @property
    def parameter_types(self) -> tuple[Any, ...]:
        return tuple(parameter.annotation for parameter in self.parameters)

    def parameter(self, name: str) -> ConstructorParameter | None:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        return None

    def invoke(self, arguments: Sequence[tuple[ConstructorParameter, Any]]) -> Any:
        """Call the constructor, passing positional-only parameters positionally."""
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for parameter, value in arguments:
            if parameter.kind is Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[parameter.name] = value
        return self.factory(*args, **kwargs)


class ConstructorInspector:
    """Enumerates and selects the constructors of concrete types."""

    def __init__(self, registry_type: type[Any]) -> None:
        self._registry_type = registry_type

    def constructors(self, concrete_type: type[Any]) -> list[ConstructorSpec]:
        """Return ``__init__`` followed by marked classmethods in declaration order."""
        specs = [
            ConstructorSpec(
                name="__init__",
                factory=concrete_type,
                parameters=self._parameters(
                    concrete_type.__init__,
                    owner=concrete_type,
                    skip_first_parameter=True,
                ),
            ),
        ]
        seen: set[str] = set()
        for klass in concrete_type.__mro__:
            for attr_name, attr in vars(klass).items():
                if attr_name in seen:
                    continue
                seen.add(attr_name)
                if not isinstance(attr, classmethod):
                    continue
                func = attr.__func__
                if not getattr(func, _CONSTRUCTOR_MARKER_ATTR, False):
                    continue
                specs.append(
                    ConstructorSpec(
                        name=attr_name,
                        factory=getattr(concrete_type, attr_name),
                        parameters=self._parameters(
                            func,
                            owner=concrete_type,
                            skip_first_parameter=True,
                        ),
                    ),
                )
        return specs

    def select_default(self, concrete_type: type[Any]) -> ConstructorSpec:
        """Pick the registry-aware constructor, else the zero-argument one, else the first."""
        specs = self.constructors(concrete_type)
        for spec in specs:
            if len(spec.parameters) == 1 and self.is_registry_parameter(spec.parameters[0]):
                return spec
        for spec in specs:
            if not spec.parameters:
                return spec
        return specs[0]

    def find_by_signature(
        self,
        concrete_type: type[Any],
        parameter_types: Sequence[Any],
    ) -> ConstructorSpec | None:
        """Return the first constructor whose parameter annotations equal ``parameter_types``."""
        expected = tuple(parameter_types)
        for spec in self.constructors(concrete_type):
            if spec.parameter_types == expected:
                return spec
        return None

    def is_registry_parameter(self, parameter: ConstructorParameter) -> bool:
        annotation = parameter.annotation
        return is_runtime_class(annotation) and issubclass(annotation, self._registry_type)

    def _parameters(
        self,
        func: Callable[..., Any],
        *,
        owner: type[Any],
        skip_first_parameter: bool,
    ) -> tuple[ConstructorParameter, ...]:
        if func is object.__init__:
            return ()
        parameters = list(inspect.signature(func).parameters.values())
        if (
            skip_first_parameter
            and parameters
            and parameters[0].name in _IMPLICIT_FIRST_PARAMETER_NAMES
        ):
            parameters = parameters[1:]
        hints = self._resolved_type_hints(func, owner=owner)
        return tuple(
            ConstructorParameter(
                name=parameter.name,
                annotation=self._annotation(parameter, hints),
                kind=parameter.kind,
                default=parameter.default,
            )
            for parameter in parameters
            if parameter.kind not in _VARIADIC_KINDS
        )

    def _annotation(self, parameter: Parameter, hints: dict[str, Any]) -> Any:
        annotation = hints.get(parameter.name, MISSING_ANNOTATION)
        if annotation is not MISSING_ANNOTATION:
            return annotation
        raw_annotation = parameter.annotation
        if raw_annotation is not Parameter.empty and not isinstance(raw_annotation, str):
            return raw_annotation
        return MISSING_ANNOTATION

    def _resolved_type_hints(self, func: Callable[..., Any], *, owner: type[Any]) -> dict[str, Any]:
        try:
            return get_type_hints(func)
        except (AttributeError, NameError, TypeError):
            if not _has_generated_init(owner, func):
                return {}
        # Generated ``__init__`` parameters share names with the class fields.
        try:
            return get_type_hints(owner)
        except (AttributeError, NameError, TypeError):
            return {}


def _has_generated_init(owner: type[Any], func: Callable[..., Any]) -> bool:
    if func is not vars(owner).get("__init__"):
        return False
    return is_dataclass(owner) or hasattr(owner, "__attrs_attrs__")


__all__ = [
    "MISSING_ANNOTATION",
    "ConstructorInspector",
    "ConstructorParameter",
    "ConstructorSpec",
    "constructor",
]
