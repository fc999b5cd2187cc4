"""High level entry point for constructing contexts."""

import logging
from typing import Any

from beancontext.context import Context
from beancontext.errors import InitializationFailure
from beancontext.field_writer import FieldWriter
from beancontext.inspector import InspectionCache
from beancontext.lifecycle import InitializingBean
from beancontext.registry import BeanRegistry
from beancontext.requirement_set import make_requirement_set
from beancontext.wiring_plan import WiringPlanBuilder

__all__ = ["make_context"]

logger = logging.getLogger(__name__)


def make_context(*scan: Any, verbose: bool = False) -> Context:
    """Construct and return a fully wired :class:`Context`.

    The scanned objects are inspected, every marked field is resolved against the
    scan set, the fields are written, and ``post_construct()`` is called on each
    bean that defines it, in scan order. Construction is all-or-nothing: if any
    step fails, every field written so far is restored and no context is returned.

    Args:
        scan: The objects making up the core, in order. Each concrete type may
            appear only once.
        verbose: Log scanned instances, fields and injections at INFO rather
            than DEBUG.

    Returns:
        The wired :class:`Context`.

    Raises:
        InvalidArgument: If a scanned object is ``None``, a class, or an immutable value.
        DuplicateInstance: If a concrete type is scanned twice.
        UnsupportedFieldKind: If a marked field is neither a reference nor an interface.
        UnsatisfiedDependency: If required concrete types are missing from the scan.
        MissingImplementation: If no bean implements a required interface.
        AmbiguousImplementation: If several beans implement a required interface.
        NotSettable: If a field rejects assignment.
        InitializationFailure: If a ``post_construct()`` hook raises.

    Example:
        >>> ctx = make_context(StorageImpl(), ConfigServiceImpl(), UserServiceImpl())
        >>> ctx.must_bean(UserService).save_user("alex", "admin")
    """
    cache = InspectionCache()
    requirement_set = make_requirement_set(scan, cache, verbose)
    plan = WiringPlanBuilder(verbose).build(requirement_set)

    writer = FieldWriter()
    writer.apply(plan.writes)
    try:
        _post_construct(plan.core)
    except InitializationFailure:
        writer.rollback()
        raise

    registry = BeanRegistry()
    for resolved_type, bean in plan.resolved_types.items():
        registry.add_bean(resolved_type, bean)

    logger.log(
        logging.INFO if verbose else logging.DEBUG,
        "Context created with %d beans, %d resolved types",
        len(plan.core),
        len(plan.resolved_types),
    )
    return Context(plan.core, registry, cache)


def _post_construct(core) -> None:
    for bean in core:
        if isinstance(bean.obj, InitializingBean):
            try:
                bean.obj.post_construct()
            except Exception as e:
                raise InitializationFailure(
                    f"post_construct failed for {bean.type.__name__}: {e}"
                ) from e
