import pytest

from beancontext.domain import Bean, BeanDefinition, type_name
from beancontext.registry import BeanRegistry
from components import Journal, Storage, StorageImpl


@pytest.fixture
def registry():
    return BeanRegistry()


def make_bean(obj):
    return Bean(obj, BeanDefinition(type(obj), (), frozenset()))


def test_empty_registry_finds_nothing(registry):
    assert registry.find_by_type(Storage) is None
    assert registry.find_by_name(type_name(Storage)) == []
    assert Storage not in registry


def test_beans_found_by_type_and_name(registry):
    storage = make_bean(StorageImpl())

    assert registry.add_bean(Storage, storage) is storage

    assert registry.find_by_type(Storage) is storage
    assert registry.find_by_name(type_name(Storage)) == [storage.obj]
    assert registry.find_by_name(type_name(StorageImpl)) == []


def test_adding_same_type_twice_keeps_first(registry):
    first = make_bean(StorageImpl())
    second = make_bean(StorageImpl())

    registry.add_bean(Storage, first)
    assert registry.add_bean(Storage, second) is first

    assert registry.find_by_type(Storage) is first
    assert registry.find_by_name(type_name(Storage)) == [first.obj]
    assert len(registry) == 1


def test_bean_registered_under_several_types(registry):
    storage = make_bean(StorageImpl())
    journal = make_bean(Journal())

    registry.add_bean(Storage, storage)
    registry.add_bean(StorageImpl, storage)
    registry.add_bean(Journal, journal)

    assert registry.find_by_name(type_name(Storage)) == [storage.obj]
    assert registry.find_by_name(type_name(StorageImpl)) == [storage.obj]
    assert registry.find_by_name(type_name(Journal)) == [journal.obj]
    assert len(registry) == 3


def test_type_name_is_module_qualified():
    assert type_name(Storage) == f"{Storage.__module__}.Storage"


def test_name_lookup_is_a_snapshot(registry):
    storage = make_bean(StorageImpl())
    registry.add_bean(Storage, storage)

    found = registry.find_by_name(type_name(Storage))
    found.append("extra")

    assert registry.find_by_name(type_name(Storage)) == [storage.obj]
