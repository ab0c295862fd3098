"""Unit tests for the backend registry."""

import pytest

from folio.application.interfaces import ContentPrinter, ContentReader
from folio.application.registry import PRINTER, READER, BackendRegistry, backend_key
from folio.application.repository import ContentRepository
from folio.domain.entities import ContentKind
from folio.domain.exceptions import (
    BackendNotRegisteredError,
    ErrorStatus,
    InvalidBackendError,
    RegistryFrozenError,
)
from tests.fakes import InMemoryContentBackend


@pytest.fixture
def registry() -> BackendRegistry:
    return BackendRegistry()


def test_backend_key_convention():
    assert backend_key("folio:apps", "article", READER) == "folio:apps:article-reader"
    assert backend_key("folio:apps", "chapter", PRINTER) == "folio:apps:chapter-printer"


def test_open_returns_registered_instance(registry: BackendRegistry):
    backend = InMemoryContentBackend()
    registry.register("ns:article-reader", backend)
    assert registry.open("ns:article-reader") is backend


def test_open_unregistered_key_fails(registry: BackendRegistry):
    with pytest.raises(BackendNotRegisteredError) as excinfo:
        registry.open("ns:article-reader")
    assert excinfo.value.status is ErrorStatus.NOT_REGISTERED


def test_last_registration_wins(registry: BackendRegistry):
    first, second = InMemoryContentBackend(), InMemoryContentBackend()
    registry.register("ns:article-reader", first)
    registry.register("ns:article-reader", second)
    assert registry.open("ns:article-reader") is second


def test_open_does_not_check_capability(registry: BackendRegistry):
    registry.register("ns:article-reader", object())
    assert registry.open("ns:article-reader") is not None


def test_resolve_checks_capability(registry: BackendRegistry):
    backend = InMemoryContentBackend()
    registry.register("ns:article-printer", backend)
    registry.register("ns:bogus-printer", "not a backend")

    assert registry.resolve("ns:article-printer", ContentPrinter) is backend
    with pytest.raises(InvalidBackendError) as excinfo:
        registry.resolve("ns:bogus-printer", ContentPrinter)
    assert excinfo.value.status is ErrorStatus.INVALID_BACKEND


def test_freeze_blocks_registration_but_keeps_lookups(registry: BackendRegistry):
    backend = InMemoryContentBackend()
    registry.register("ns:article-reader", backend)
    registry.freeze()

    assert registry.frozen
    assert registry.open("ns:article-reader") is backend
    assert registry.keys() == ["ns:article-reader"]
    with pytest.raises(RegistryFrozenError):
        registry.register("ns:article-printer", backend)


def test_repository_new_resolves_reader(registry: BackendRegistry):
    backend = InMemoryContentBackend()
    registry.register(backend_key("ns", "chapter", READER), backend)

    repository = ContentRepository.new(registry, "ns", ContentKind.CHAPTER)

    assert repository.kind is ContentKind.CHAPTER
    assert isinstance(backend, ContentReader)


def test_repository_new_fails_without_reader(registry: BackendRegistry):
    with pytest.raises(BackendNotRegisteredError):
        ContentRepository.new(registry, "ns")


def test_repository_new_fails_with_invalid_reader(registry: BackendRegistry):
    registry.register(backend_key("ns", "article", READER), object())
    with pytest.raises(InvalidBackendError):
        ContentRepository.new(registry, "ns")
