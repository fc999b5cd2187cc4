"""Optional capabilities a bean can expose to take part in the context lifecycle."""

from typing import Protocol, runtime_checkable

__all__ = ["InitializingBean", "DisposableBean", "Closable"]


@runtime_checkable
class InitializingBean(Protocol):
    def post_construct(self) -> None:
        """Runs once, after every core bean has been wired."""


@runtime_checkable
class DisposableBean(Protocol):
    def destroy(self) -> None:
        """Releases resources when the context is closed."""


@runtime_checkable
class Closable(Protocol):
    def close(self) -> None:
        ...
