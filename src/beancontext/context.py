"""
The public surface of a wired set of beans.

A Context holds the frozen core created by
:func:`~beancontext.builders.make_context` and answers lookups against it.
Types that were not required by any scanned field are resolved on first
request, by exact type or by unique implementation, and cached in the
registry. Failed lookups are not cached.

Objects outside the core can be wired on demand with :meth:`Context.inject`.
They are never added to the core and never satisfy other beans' dependencies.
"""

import logging
import threading
from typing import Any, Optional

from beancontext.core import BeanCore
from beancontext.domain import Bean, Injection, RequirementKind
from beancontext.errors import (
    AggregateCloseFailure,
    BeanNotFound,
    DependencyError,
    UnsatisfiedDependency,
    UnsupportedFieldKind,
)
from beancontext.field_writer import FieldWriter
from beancontext.inspector import InspectionCache, requirement_kind
from beancontext.lifecycle import Closable, DisposableBean
from beancontext.registry import BeanRegistry
from beancontext.requirement_set import check_instance
from beancontext.wiring_plan import PlannedWrite

__all__ = ["Context"]

logger = logging.getLogger(__name__)


class Context:
    """
    A container of wired beans, created once from a fixed scan set.

    Beans are looked up by type with :meth:`bean`, by fully-qualified type name
    with :meth:`lookup`, or with ``context[SomeType]``, which raises
    :class:`~beancontext.errors.BeanNotFound` like :meth:`must_bean`.

    Example:
        >>> with make_context(StorageImpl(), ConfigServiceImpl()) as ctx:
        ...     config = ctx[ConfigService]
    """

    def __init__(self, core: BeanCore, registry: BeanRegistry, cache: InspectionCache):
        self._core = core
        self._registry = registry
        self._cache = cache
        self._closed = False
        self._close_lock = threading.Lock()

    def core(self) -> tuple[type, ...]:
        """Concrete types of the scanned beans, in scan order."""
        return self._core.types

    def bean(self, declared_type: type) -> Optional[Any]:
        """Get the bean for a concrete type or interface.

        Returns:
            The bean, or ``None`` if no unique bean can be resolved.
        """
        try:
            return self._resolve(declared_type).obj
        except DependencyError as e:
            logger.debug("No bean for %r: %s", declared_type, e)
            return None

    def must_bean(self, declared_type: type) -> Any:
        """Get the bean for a type that is known to be resolvable.

        Raises:
            BeanNotFound: If no unique bean can be resolved.
        """
        try:
            return self._resolve(declared_type).obj
        except DependencyError as e:
            raise BeanNotFound(f"Bean not found {declared_type!r}") from e

    def __getitem__(self, declared_type: type) -> Any:
        return self.must_bean(declared_type)

    def lookup(self, name: str) -> list[Any]:
        """All beans registered under a fully-qualified type name.

        Only types that have been resolved, while wiring the core or by a later
        lookup by type, are registered. A type that nothing has asked for yields
        an empty list even if a core bean implements it.
        """
        return self._registry.find_by_name(name)

    def inject(self, obj: Any) -> None:
        """Wire the marked fields of an object that is not part of the core.

        Every field is resolved before any is written.

        Raises:
            InvalidArgument: If ``obj`` can not be wired.
            UnsupportedFieldKind: If a marked field can not be injected.
            UnsatisfiedDependency: If a required concrete type is not in the core.
            MissingImplementation: If no core bean implements a required interface.
            AmbiguousImplementation: If several core beans implement it.
            NotSettable: If a field rejects assignment.
        """
        check_instance(obj)
        definition = self._cache.definition_of(type(obj))
        writes = []
        for field in definition.fields:
            injection = Injection(obj, field)
            writes.append(PlannedWrite(injection, self._resolve(field.required_type, [str(injection)])))
        FieldWriter().apply(writes)

    def close(self) -> None:
        """Release every core bean, in scan order.

        Each bean's ``destroy()`` and then ``close()`` are called if present.
        Every bean is attempted even if an earlier one fails. Closing an already
        closed context does nothing.

        Raises:
            Exception: The failure, if exactly one bean failed.
            AggregateCloseFailure: If two or more beans failed.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        errors = []
        for bean in self._core:
            for release in _release_hooks(bean.obj):
                try:
                    release()
                except Exception as e:
                    logger.warning("Failed to close %s: %s", bean.type.__name__, e)
                    errors.append(e)

        if len(errors) == 1:
            raise errors[0]
        if len(errors) > 1:
            raise AggregateCloseFailure(errors)

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _resolve(self, declared_type: type, requesters: Optional[list[str]] = None) -> Bean:
        bean = self._registry.find_by_type(declared_type)
        if bean is not None:
            return bean

        bean = self._core.get(declared_type)
        if bean is None:
            kind = requirement_kind(declared_type)
            if kind is RequirementKind.INTERFACE:
                bean = self._core.implementation_of(declared_type, requesters)
            elif kind is RequirementKind.REFERENCE:
                raise UnsatisfiedDependency({declared_type: requesters or []})
            else:
                raise UnsupportedFieldKind(f"{declared_type!r} is not a class or interface")

        return self._registry.add_bean(declared_type, bean)


def _release_hooks(obj: Any) -> list:
    hooks = []
    if isinstance(obj, DisposableBean):
        hooks.append(obj.destroy)
    if isinstance(obj, Closable):
        hooks.append(obj.close)
    return hooks
