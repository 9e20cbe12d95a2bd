# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading

import pytest

from extpolicy.core.manifest import ExtensionManifest
from extpolicy.core.types import LocalityClass
from extpolicy.runtime.cache import PolicyCaches, reset_caches
from extpolicy.sources.registry import ExtensionPoint, ExtensionPointsRegistry
from extpolicy.sources.static import ProductMetadata, StaticConfiguration, StaticWorkspaceTrust


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def caches():
    """A private cache owner so tests never share snapshots."""
    return PolicyCaches()


@pytest.fixture
def registry():
    """
    A registry with two UI-capable points (one explicit, one without a
    default) and two workspace-default points.
    """
    return ExtensionPointsRegistry(
        [
            ExtensionPoint("themes", LocalityClass.UI),
            ExtensionPoint("keybindings", None),
            ExtensionPoint("debuggers", LocalityClass.WORKSPACE),
            ExtensionPoint("taskDefinitions", LocalityClass.WORKSPACE),
        ]
    )


@pytest.fixture
def empty_configuration():
    return StaticConfiguration()


@pytest.fixture
def empty_product():
    return ProductMetadata()


@pytest.fixture
def trust_enabled():
    return StaticWorkspaceTrust(enabled=True)


@pytest.fixture
def trust_disabled():
    return StaticWorkspaceTrust(enabled=False)


@pytest.fixture
def manifest_factory():
    """Returns a factory building manifests for publisher `pub`."""

    def _factory(name="ext", **kwargs):
        return ExtensionManifest(publisher=kwargs.pop("publisher", "pub"), name=name, **kwargs)

    return _factory


@pytest.fixture
def bare_manifest(manifest_factory):
    """A manifest with no entry points, dependencies or contributions."""
    return manifest_factory()


@pytest.fixture
def native_manifest(manifest_factory):
    """A manifest with only a native entry point."""
    return manifest_factory(main="./out/extension.js")


@pytest.fixture(autouse=True)
def clean_default_caches():
    # Module-level functions fall back to the process-wide caches
    reset_caches()
    yield
    reset_caches()


@pytest.fixture(autouse=True)
def cleanup_threads():
    yield
    for thread in threading.enumerate():
        if thread != threading.current_thread() and thread.is_alive():
            thread.join(timeout=1.0)
