"""Introspection of classes into bean definitions."""

import inspect
import threading
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from beancontext.domain import BeanDefinition, FieldDescriptor, RequirementKind
from beancontext.errors import UnsupportedFieldKind
from beancontext.markers import Embedded, Inject, consumed_capabilities, is_marker

__all__ = ["inspect_type", "requirement_kind", "InspectionCache"]

_VALUE_TYPES = (int, float, complex, bool, str, bytes, tuple, frozenset, type(None))


def inspect_type(cls: type) -> BeanDefinition:
    """Build the :class:`BeanDefinition` for a concrete class.

    Every annotation of ``cls`` (including inherited ones, base classes first) is
    examined. Those carrying the :class:`~beancontext.markers.Inject` marker become
    field descriptors; those carrying :class:`~beancontext.markers.Embedded`
    contribute to the opaque set, together with types declared via
    :func:`~beancontext.markers.consumes`.

    Args:
        cls: The class to inspect.

    Returns:
        The definition of ``cls``.

    Raises:
        UnsupportedFieldKind: If a marked field's type is neither a reference type
            nor an interface, or the annotations of ``cls`` cannot be resolved.

    Example:
        >>> class ConfigServiceImpl:
        ...     storage: Annotated[Storage, Inject, Embedded]
        ...     label: str = "config"
        >>> definition = inspect_type(ConfigServiceImpl)
        >>> # definition.fields == (FieldDescriptor(ConfigServiceImpl, 0, "storage",
        >>> #                                       Storage, RequirementKind.INTERFACE),)
        >>> # definition.opaque_types == frozenset({Storage})
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise UnsupportedFieldKind(f"Can not resolve annotations of {cls.__name__}: {e}") from e

    fields = []
    opaque_types = set(consumed_capabilities(cls))
    for position, (name, annotation) in enumerate(hints.items()):
        declared_type, metadata = _split_annotation(annotation)
        if any(is_marker(m, Embedded) for m in metadata) and inspect.isclass(declared_type):
            opaque_types.add(declared_type)
        if any(is_marker(m, Inject) for m in metadata):
            kind = requirement_kind(declared_type)
            if kind is None:
                raise UnsupportedFieldKind(
                    f"Not a reference or interface field type '{declared_type!r}' "
                    f"on position {position} in {cls.__name__}.{name}"
                )
            fields.append(FieldDescriptor(cls, position, name, declared_type, kind))

    return BeanDefinition(cls, tuple(fields), frozenset(opaque_types))


def requirement_kind(declared_type: Any):
    """Classify a type as reference or interface kind, or ``None`` if neither."""
    if not inspect.isclass(declared_type) or get_origin(declared_type) is not None:
        return None
    if declared_type is Any or declared_type in _VALUE_TYPES:
        return None
    if getattr(declared_type, "_is_protocol", False):
        return RequirementKind.INTERFACE if _supports_issubclass(declared_type) else None
    if inspect.isabstract(declared_type):
        return RequirementKind.INTERFACE
    return RequirementKind.REFERENCE


def _supports_issubclass(protocol: type) -> bool:
    # Protocols that are not runtime checkable, or that declare data members,
    # refuse issubclass().
    try:
        issubclass(object, protocol)
    except TypeError:
        return False
    return True


def _split_annotation(annotation) -> tuple[Any, tuple]:
    if get_origin(annotation) is Annotated:
        base_type, *metadata = get_args(annotation)
        return base_type, tuple(metadata)
    return annotation, ()


class InspectionCache:
    """Thread-safe memo of :func:`inspect_type` results keyed by class.

    Inspection is side-effect free, so two threads racing on the same class may
    both inspect it; only the first stored definition is ever returned.
    """

    def __init__(self):
        self._definitions: dict[type, BeanDefinition] = {}
        self._lock = threading.Lock()

    def definition_of(self, cls: type) -> BeanDefinition:
        definition = self._definitions.get(cls)
        if definition is not None:
            return definition
        definition = inspect_type(cls)
        with self._lock:
            return self._definitions.setdefault(cls, definition)

    def __len__(self):
        return len(self._definitions)
