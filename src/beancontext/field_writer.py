"""Writing resolved beans into fields.

FieldWriter applies a batch of planned writes. If any write fails, every write
already applied in the batch is undone before the error is raised, so callers
observe either all of the batch or none of it.
"""

from typing import Any

from beancontext.errors import NotSettable
from beancontext.wiring_plan import PlannedWrite

_UNSET = object()


class FieldWriter:
    """Apply :class:`PlannedWrite` batches and undo them on request."""

    def __init__(self):
        self._applied: list[tuple[Any, str, Any]] = []

    def apply(self, writes: list[PlannedWrite]) -> None:
        """Write every planned bean into its field.

        Args:
            writes: The writes to perform, in order.

        Raises:
            NotSettable: If a field rejects assignment. Writes made before the
                failing one are rolled back.
        """
        for write in writes:
            target = write.injection.target
            name = write.injection.field.name
            previous = _current_value(target, name)
            try:
                setattr(target, name, write.bean.obj)
            except Exception as e:
                self.rollback()
                raise NotSettable(
                    f"Field '{name}' in class '{type(target).__name__}' is not settable"
                ) from e
            self._applied.append((target, name, previous))

    def rollback(self) -> None:
        """Restore every field written by this writer, most recent first."""
        while self._applied:
            target, name, previous = self._applied.pop()
            if previous is _UNSET:
                delattr(target, name)
            else:
                setattr(target, name, previous)


def _current_value(target: Any, name: str) -> Any:
    try:
        return vars(target).get(name, _UNSET)
    except TypeError:
        # no __dict__, e.g. __slots__ classes
        return getattr(target, name, _UNSET)
