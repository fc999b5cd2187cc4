"""Domain models used throughout the framework."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RequirementKind(Enum):
    """How a field's required type is matched against scanned beans."""

    REFERENCE = "reference"
    """Matched by exact concrete type."""

    INTERFACE = "interface"
    """Matched by the unique bean implementing the interface."""


def type_name(declared_type: type) -> str:
    """Fully-qualified name used to index beans, e.g. ``"app.services.UserService"``."""
    return f"{declared_type.__module__}.{declared_type.__qualname__}"


@dataclass(frozen=True)
class FieldDescriptor:
    """An injectable field of a class.

    Attributes:
        owner: The class declaring the field.
        position: Index of the field among the owner's annotations.
        name: Attribute name the resolved bean is written to.
        required_type: The type the field depends on.
        kind: Whether ``required_type`` is matched exactly or by implementation.
    """

    owner: type
    position: int
    name: str
    required_type: type
    kind: RequirementKind

    def __str__(self):
        return f"{self.owner.__name__}.{self.name}"


@dataclass(frozen=True)
class BeanDefinition:
    """
    Inspected description of a concrete type.

    Attributes:
        type: The concrete class.
        fields: Injectable fields, in declaration order.
        opaque_types: Interfaces this type holds and delegates to; the type is
            never offered as an implementation of one of these.
    """

    type: type
    fields: tuple[FieldDescriptor, ...]
    opaque_types: frozenset[type]

    def implements(self, interface: type) -> bool:
        if interface in self.opaque_types:
            return False
        return issubclass(self.type, interface)


@dataclass(frozen=True, eq=False)
class Bean:
    """A scanned object paired with its definition."""

    obj: Any
    definition: BeanDefinition

    @property
    def type(self) -> type:
        return self.definition.type


@dataclass(frozen=True)
class Injection:
    """A field of a particular object that is to receive a bean."""

    target: Any
    field: FieldDescriptor

    def __str__(self):
        return str(self.field)
