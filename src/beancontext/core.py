"""The frozen set of beans scanned when a context is created.

The core maps each concrete type to its bean and preserves scan order. It is
never modified after construction, so it is safe to read from any thread
without synchronisation.
"""

from types import MappingProxyType
from typing import Iterator, Optional

from beancontext.domain import Bean
from beancontext.errors import AmbiguousImplementation, MissingImplementation


class BeanCore:
    """Immutable, scan-ordered collection of beans keyed by concrete type.

    Example:
        >>> core = BeanCore([storage_bean, config_bean])
        >>> core[StorageImpl] is storage_bean
        True
        >>> core.implementation_of(Storage) is storage_bean
        True
    """

    def __init__(self, beans: list[Bean]):
        self._beans = tuple(beans)
        self._beans_by_type = MappingProxyType({bean.type: bean for bean in self._beans})

    @property
    def types(self) -> tuple[type, ...]:
        return tuple(bean.type for bean in self._beans)

    def get(self, concrete_type: type) -> Optional[Bean]:
        return self._beans_by_type.get(concrete_type)

    def candidates_for(self, interface: type) -> list[Bean]:
        """Beans whose type implements ``interface`` and does not merely embed it."""
        return [bean for bean in self._beans if bean.definition.implements(interface)]

    def implementation_of(self, interface: type, requesters: Optional[list[str]] = None) -> Bean:
        """Find the unique bean implementing ``interface``.

        Args:
            interface: The interface type to search for.
            requesters: Fields requiring the interface, reported in errors.

        Returns:
            The single implementing bean.

        Raises:
            MissingImplementation: If no bean implements the interface.
            AmbiguousImplementation: If more than one bean does.
        """
        candidates = self.candidates_for(interface)
        if len(candidates) == 0:
            raise MissingImplementation(interface, requesters or [])
        if len(candidates) > 1:
            raise AmbiguousImplementation(
                interface, [c.type for c in candidates], requesters or []
            )
        return candidates[0]

    def __getitem__(self, concrete_type: type) -> Bean:
        return self._beans_by_type[concrete_type]

    def __contains__(self, concrete_type: type) -> bool:
        return concrete_type in self._beans_by_type

    def __iter__(self) -> Iterator[Bean]:
        return iter(self._beans)

    def __len__(self) -> int:
        return len(self._beans)
