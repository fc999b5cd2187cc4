"""Declarations that opt fields and classes in to dependency resolution.

Fields are marked with ``Annotated`` metadata, the same way qualifiers are
attached to dependencies elsewhere in the framework::

    class UserServiceImpl:
        storage: Annotated[Storage, Inject]
        config: Injected[ConfigService]          # shorthand for the above
        delegate: Annotated[Storage, Inject, Embedded]

A field marked ``Embedded`` holds a capability that the owning class passes
through rather than implements, so the owner is never offered as an
implementation of that exact type. Classes can declare the same thing
without a field using :func:`consumes`.
"""

from typing import Annotated, Any, Callable, TypeVar

__all__ = ["Inject", "Embedded", "Injected", "consumes", "consumed_capabilities"]

T = TypeVar("T")


class Inject:
    """Marks an annotated field for injection. Usable bare or instantiated."""

    def __repr__(self):
        return "Inject()"


class Embedded:
    """Marks an annotated field as a pass-through capability of its owner."""

    def __repr__(self):
        return "Embedded()"


Injected = Annotated[T, Inject]
"""Generic alias: ``Injected[Storage]`` is ``Annotated[Storage, Inject]``."""


def is_marker(metadata: Any, marker: type) -> bool:
    return metadata is marker or isinstance(metadata, marker)


def consumes(*capabilities: type) -> Callable:
    """Declare interfaces a class consumes and must not be matched against.

    Example:
        >>> @consumes(Storage)
        ... class CachingStorage:
        ...     def load(self, key): ...
        ...     def store(self, key, value): ...
    """

    def decorator(target: type) -> type:
        declared = tuple(target.__dict__.get("__consumed_capabilities__", ()))
        target.__consumed_capabilities__ = declared + capabilities
        return target

    return decorator


def consumed_capabilities(cls: type) -> tuple[type, ...]:
    """Capabilities declared with :func:`consumes` on ``cls`` or its bases."""
    return tuple(
        capability
        for klass in reversed(cls.__mro__)
        for capability in klass.__dict__.get("__consumed_capabilities__", ())
    )
