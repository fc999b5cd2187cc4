"""Scanning of instances into beans and grouping of their requirements.

This module validates the objects handed to a context, inspects each into a
:class:`~beancontext.domain.Bean`, and collects every injectable field by the
type it requires, split into exact-type and by-interface requirements. The
resulting RequirementSet is the input to wiring plan resolution.
"""

import logging
from dataclasses import dataclass
from typing import Any

from beancontext.domain import Bean, Injection, RequirementKind
from beancontext.errors import DuplicateInstance, InvalidArgument
from beancontext.inspector import InspectionCache

__all__ = ["RequirementSet", "make_requirement_set", "check_instance"]

logger = logging.getLogger(__name__)

_IMMUTABLE_VALUES = (int, float, complex, bool, str, bytes, tuple, frozenset)


@dataclass(frozen=True)
class RequirementSet:
    """
    Scanned beans together with what their fields require.

    Attributes:
        beans: Beans in scan order.
        by_reference: Injections grouped by the concrete type they require,
            in order of first appearance.
        by_interface: Injections grouped by the interface they require,
            in order of first appearance.
    """

    beans: list[Bean]
    by_reference: dict[type, list[Injection]]
    by_interface: dict[type, list[Injection]]


def check_instance(obj: Any, position: int = None) -> None:
    """Reject objects that can not have fields written to them.

    Raises:
        InvalidArgument: If ``obj`` is ``None``, a class, or an immutable value.
    """
    where = f" on position {position}" if position is not None else ""
    if obj is None:
        raise InvalidArgument(f"None is not allowed{where}")
    if isinstance(obj, type):
        raise InvalidArgument(
            f"Class {obj.__name__} is not an instance{where}"
        )
    if isinstance(obj, _IMMUTABLE_VALUES):
        raise InvalidArgument(
            f"Immutable value of type '{type(obj).__name__}' is not allowed{where}"
        )


def make_requirement_set(
    scan: tuple[Any, ...], cache: InspectionCache, verbose: bool = False
) -> RequirementSet:
    """
    Inspect scanned objects and group their injectable fields by required type.

    Validates that:
      - Each object is a mutable instance.
      - Each concrete type is scanned at most once.

    Args:
        scan: The objects to scan, in order.
        cache: Inspection cache used to build bean definitions.
        verbose: Log scanned instances and fields at INFO instead of DEBUG.

    Returns:
        The RequirementSet for the scan.

    Raises:
        InvalidArgument: If an object can not be scanned.
        DuplicateInstance: If two objects share a concrete type.
        UnsupportedFieldKind: If a marked field can not be injected.
    """
    level = logging.INFO if verbose else logging.DEBUG
    beans: list[Bean] = []
    seen: dict[type, int] = {}
    by_reference: dict[type, list[Injection]] = {}
    by_interface: dict[type, list[Injection]] = {}

    for position, obj in enumerate(scan):
        check_instance(obj, position)
        concrete_type = type(obj)
        logger.log(level, "Instance %s", concrete_type.__name__)
        if concrete_type in seen:
            raise DuplicateInstance(
                f"Repeated instance on position {position} of type "
                f"'{concrete_type.__name__}' already scanned on position {seen[concrete_type]}"
            )
        seen[concrete_type] = position

        bean = Bean(obj, cache.definition_of(concrete_type))
        for field in bean.definition.fields:
            logger.log(level, "\tField %s: %s", field.name, field.required_type.__name__)
            grouped = by_reference if field.kind is RequirementKind.REFERENCE else by_interface
            grouped.setdefault(field.required_type, []).append(Injection(obj, field))
        beans.append(bean)

    return RequirementSet(beans, by_reference, by_interface)
