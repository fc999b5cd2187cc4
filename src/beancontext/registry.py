"""Thread-safe index of resolved beans by type and by fully-qualified name."""

import logging
import threading
from typing import Any, Optional

from beancontext.domain import Bean, type_name

__all__ = ["BeanRegistry"]

logger = logging.getLogger(__name__)


class BeanRegistry:
    """Registry of beans resolved for a type, either at construction or lazily.

    ``find_by_type`` and ``find_by_name`` read without locking and may run
    concurrently with ``add_bean``. Writers serialize on a lock and replace each
    name entry with a new tuple, so readers always see a complete snapshot.
    Adding a type that is already registered keeps the first bean and leaves the
    name index untouched, so threads racing to resolve the same type never
    duplicate an entry.
    """

    def __init__(self):
        self._beans_by_type: dict[type, Bean] = {}
        self._beans_by_name: dict[str, tuple[Bean, ...]] = {}
        self._lock = threading.Lock()

    def find_by_type(self, declared_type: type) -> Optional[Bean]:
        return self._beans_by_type.get(declared_type)

    def find_by_name(self, name: str) -> list[Any]:
        return [bean.obj for bean in self._beans_by_name.get(name, ())]

    def add_bean(self, declared_type: type, bean: Bean) -> Bean:
        """Register ``bean`` under ``declared_type`` and its name.

        Returns:
            The bean registered for ``declared_type``, which is the existing
            one if the type was already present.
        """
        with self._lock:
            existing = self._beans_by_type.get(declared_type)
            if existing is not None:
                return existing
            name = type_name(declared_type)
            self._beans_by_name[name] = self._beans_by_name.get(name, ()) + (bean,)
            self._beans_by_type[declared_type] = bean
            logger.debug("Registered %s as %s", bean.type.__name__, name)
            return bean

    def __contains__(self, declared_type: type) -> bool:
        return declared_type in self._beans_by_type

    def __len__(self) -> int:
        return len(self._beans_by_type)
