"""Two-phase resolution of scanned requirements into a wiring plan.

This module contains the matching logic of the framework. Required concrete
types are matched exactly against the scanned beans first; every missing type
is reported together in a single error. Required interfaces are then matched
against the unique bean implementing them, skipping beans that only embed the
interface.

The WiringPlan describes every field write needed to wire the core, and which
bean each required type resolved to. Nothing is written while the plan is
being built, so a failed resolution leaves every scanned object untouched.
"""

import logging
from dataclasses import dataclass

from beancontext.core import BeanCore
from beancontext.domain import Bean, Injection
from beancontext.errors import UnsatisfiedDependency
from beancontext.requirement_set import RequirementSet

__all__ = ["PlannedWrite", "WiringPlan", "WiringPlanBuilder"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedWrite:
    injection: Injection
    bean: Bean


@dataclass(frozen=True)
class WiringPlan:
    """Description of how to wire a set of scanned beans."""

    core: BeanCore
    """The scanned beans, keyed by concrete type."""

    resolved_types: dict[type, Bean]
    """Bean chosen for each required type, exact matches first."""

    writes: list[PlannedWrite]
    """Field writes to perform, grouped by required type."""


class WiringPlanBuilder:
    """Resolve a :class:`RequirementSet` into a :class:`WiringPlan`."""

    def __init__(self, verbose: bool = False):
        self._level = logging.INFO if verbose else logging.DEBUG

    def build(self, requirement_set: RequirementSet) -> WiringPlan:
        """Build a WiringPlan from scanned requirements.

        Args:
            requirement_set: The scanned beans and their grouped requirements.

        Returns:
            A WiringPlan in which every requirement resolved to exactly one bean.

        Raises:
            UnsatisfiedDependency: If any required concrete type was not scanned.
            MissingImplementation: If no bean implements a required interface.
            AmbiguousImplementation: If several beans implement a required interface.
        """
        core = BeanCore(requirement_set.beans)
        resolved_types: dict[type, Bean] = {}
        writes: list[PlannedWrite] = []

        self._resolve_by_reference(core, requirement_set.by_reference, resolved_types, writes)
        self._resolve_by_interface(core, requirement_set.by_interface, resolved_types, writes)

        return WiringPlan(core, resolved_types, writes)

    def _resolve_by_reference(self, core, by_reference, resolved_types, writes):
        missing: dict[type, list[str]] = {}
        for required_type, injections in by_reference.items():
            direct = core.get(required_type)
            if direct is None:
                missing[required_type] = [str(injection) for injection in injections]
                continue

            logger.log(
                self._level,
                "Inject '%s' by reference into %s",
                required_type.__name__,
                [str(injection) for injection in injections],
            )
            resolved_types[required_type] = direct
            writes.extend(PlannedWrite(injection, direct) for injection in injections)

        if missing:
            raise UnsatisfiedDependency(missing)

    def _resolve_by_interface(self, core, by_interface, resolved_types, writes):
        for interface, injections in by_interface.items():
            requesters = [str(injection) for injection in injections]
            implementation = core.implementation_of(interface, requesters)

            logger.log(
                self._level,
                "Inject '%s' by implementation '%s' into %s",
                interface.__name__,
                implementation.type.__name__,
                requesters,
            )
            resolved_types[interface] = implementation
            writes.extend(PlannedWrite(injection, implementation) for injection in injections)
