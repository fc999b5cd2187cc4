"""Exceptions raised while building and using a bean context."""

__all__ = [
    "DependencyError",
    "InvalidArgument",
    "DuplicateInstance",
    "UnsupportedFieldKind",
    "UnsatisfiedDependency",
    "AmbiguousImplementation",
    "MissingImplementation",
    "NotSettable",
    "InitializationFailure",
    "BeanNotFound",
    "AggregateCloseFailure",
]


class DependencyError(Exception):
    """Raised when a bean's dependency cannot be resolved or is misdeclared."""

    pass


class InvalidArgument(DependencyError):
    """A scanned or injected object is ``None``, a class, or an immutable value."""

    pass


class DuplicateInstance(DependencyError):
    """The same concrete type was scanned more than once."""

    pass


class UnsupportedFieldKind(DependencyError):
    """A marked field is neither a reference type nor an interface type."""

    pass


class UnsatisfiedDependency(DependencyError):
    """One or more required concrete types are not present in the scan set.

    Attributes:
        missing: Mapping from each missing type to the fields that required it,
            formatted as ``"Owner.field"``.
    """

    def __init__(self, missing: dict[type, list[str]]):
        self.missing = missing
        listing = "; ".join(
            f"'{required_type.__name__}' required by {', '.join(fields)}"
            for required_type, fields in missing.items()
        )
        super().__init__(f"Can not find candidates for those types: [{listing}]")


class AmbiguousImplementation(DependencyError):
    """Two or more beans implement a required interface."""

    def __init__(self, interface: type, candidates: list[type], requesters: list[str]):
        self.interface = interface
        self.candidates = candidates
        self.requesters = requesters
        super().__init__(
            f"Found two or more beans implementing '{interface.__name__}', "
            f"candidates={[c.__name__ for c in candidates]}, "
            f"required by {requesters}"
        )


class MissingImplementation(DependencyError):
    """No bean implements a required interface."""

    def __init__(self, interface: type, requesters: list[str]):
        self.interface = interface
        self.requesters = requesters
        super().__init__(
            f"Can not find implementations for '{interface.__name__}' interface, "
            f"required by {requesters}"
        )


class NotSettable(DependencyError):
    """A resolved bean could not be written into its field."""

    pass


class InitializationFailure(DependencyError):
    """A bean's ``post_construct`` hook raised during context construction."""

    pass


class BeanNotFound(DependencyError, KeyError):
    """Raised by ``must_bean`` when no bean can be resolved for a type."""

    def __str__(self):
        return Exception.__str__(self)


class AggregateCloseFailure(DependencyError):
    """Two or more beans failed while the context was closing.

    Attributes:
        errors: The collected exceptions, in scan order.
    """

    def __init__(self, errors: list[BaseException]):
        self.errors = errors
        super().__init__(f"Multiple errors on close: {[repr(e) for e in errors]}")
