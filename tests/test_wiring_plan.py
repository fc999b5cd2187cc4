import pytest

from beancontext.errors import UnsatisfiedDependency
from beancontext.inspector import InspectionCache
from beancontext.markers import Injected
from beancontext.requirement_set import make_requirement_set
from beancontext.wiring_plan import WiringPlanBuilder
from components import (
    Clock,
    ConfigService,
    ConfigServiceImpl,
    Journal,
    Storage,
    StorageImpl,
    UserService,
    UserServiceClient,
    UserServiceImpl,
)


def build_plan(*scan):
    requirement_set = make_requirement_set(scan, InspectionCache())
    return WiringPlanBuilder().build(requirement_set)


def test_requirements_grouped_by_kind():
    requirement_set = make_requirement_set(
        (Journal(), StorageImpl(), ConfigServiceImpl(), UserServiceImpl()), InspectionCache()
    )

    assert list(requirement_set.by_reference) == [Journal]
    assert list(requirement_set.by_interface) == [Storage, ConfigService]
    assert [str(i) for i in requirement_set.by_interface[Storage]] == [
        "ConfigServiceImpl.storage",
        "UserServiceImpl.storage",
    ]


def test_plan_resolves_exact_types_before_interfaces():
    journal, storage, config, user, client = (
        Journal(), StorageImpl(), ConfigServiceImpl(), UserServiceImpl(), UserServiceClient()
    )

    plan = build_plan(journal, storage, config, user, client)

    assert list(plan.resolved_types) == [Journal, Storage, ConfigService, UserService]
    assert [b.obj for b in plan.resolved_types.values()] == [journal, storage, config, user]
    assert [(str(w.injection), w.bean.obj) for w in plan.writes] == [
        ("StorageImpl.journal", journal),
        ("ConfigServiceImpl.storage", storage),
        ("UserServiceImpl.storage", storage),
        ("UserServiceImpl.config", config),
        ("UserServiceClient.user_service", user),
    ]


def test_planning_writes_nothing():
    storage = StorageImpl()

    build_plan(Journal(), storage)

    assert not hasattr(storage, "journal")


def test_missing_references_reported_before_interfaces():
    class NeedsClock:
        clock: Injected[Clock]
        user_service: Injected[UserService]

    with pytest.raises(UnsatisfiedDependency) as raised:
        build_plan(NeedsClock())

    assert list(raised.value.missing) == [Clock]
