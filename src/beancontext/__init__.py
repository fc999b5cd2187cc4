"""Beancontext: a dependency-resolution container for pre-built objects.

Beancontext wires a fixed set of component instances together. Each component
declares its collaborators as annotated fields rather than constructing them;
the container fills every marked field with the unique compatible instance from
the set, matching concrete types exactly and interfaces by their single
implementation. No proxies are created and no objects are instantiated.

Key Features:
    - Explicit field markers using standard ``Annotated`` type hints
    - Exact-type matching, then unique interface-implementation matching
    - All-or-nothing construction with aggregated error reporting
    - Thread-safe lazy lookups by type and by fully-qualified name
    - One-shot wiring of request-scoped objects outside the core
    - Ordered teardown of closable beans

Basic Usage:
    >>> from typing import Annotated
    >>> from beancontext.builders import make_context
    >>> from beancontext.markers import Inject
    >>>
    >>> class UserServiceImpl:
    ...     storage: Annotated[Storage, Inject]
    >>>
    >>> ctx = make_context(StorageImpl(), UserServiceImpl())
    >>> storage = ctx[Storage]

The framework consists of several core modules:
    - markers: Field and class declarations (Inject, Embedded, consumes)
    - inspector: Introspection of classes into bean definitions
    - requirement_set: Scanning and grouping of requirements
    - wiring_plan: Two-phase resolution of requirements
    - registry: Thread-safe index of resolved beans
    - context: The public Context surface
    - builders: The make_context entry point
    - errors: Framework-specific exceptions
"""
