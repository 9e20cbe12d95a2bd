# tests/unit/core/test_locality.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest
from hypothesis import given
from hypothesis import strategies as st

from extpolicy.config import ResolverSettings
from extpolicy.core.locality import ExtensionKindController, deduce_extension_kind, is_ui_extension_point
from extpolicy.core.manifest import ExtensionManifest
from extpolicy.core.types import LocalityClass, LocalityList
from extpolicy.runtime.cache import PolicyCaches, default_caches
from extpolicy.sources.registry import ExtensionPoint, ExtensionPointsRegistry, extension_points_registry
from extpolicy.sources.static import ProductMetadata, StaticConfiguration

_localities = st.sampled_from(["ui", "workspace", "web"])
_declared_kinds = st.one_of(_localities, st.lists(_localities, min_size=1, max_size=3, unique=True))


@pytest.fixture
def controller_factory(caches, registry):
    """Returns a factory creating controllers over private caches."""

    def _factory(configured=None, product=None, settings=None):
        configuration = StaticConfiguration({"remote.extensionKind": configured} if configured is not None else {})
        metadata = ProductMetadata(extension_kind=product)
        kwargs = {"settings": settings} if settings is not None else {}
        return ExtensionKindController(metadata, configuration, registry, caches, **kwargs)

    return _factory


# -----------------------------------------------------------------------------
# DEDUCTION
# -----------------------------------------------------------------------------


def test_deduce_main_only(native_manifest, registry, caches):
    assert deduce_extension_kind(native_manifest, registry, caches) == ["workspace"]


def test_deduce_main_and_browser(manifest_factory, registry, caches):
    manifest = manifest_factory(main="./main.js", browser="./web.js")
    assert deduce_extension_kind(manifest, registry, caches) == ["workspace", "web"]


def test_deduce_main_and_browser_ignores_dependencies_and_contributions(manifest_factory, registry, caches):
    """Entry points short-circuit before dependencies and contributions are inspected."""
    manifest = manifest_factory(
        main="./main.js",
        browser="./web.js",
        extension_dependencies=["a.b"],
        contributes={"debuggers": [], "themes": []},
    )
    assert deduce_extension_kind(manifest, registry, caches) == ["workspace", "web"]
    assert caches.build_counts()["ui_extension_points"] == 0


def test_deduce_browser_only(manifest_factory, registry, caches):
    manifest = manifest_factory(browser="./web.js", extension_pack=["a.b"])
    assert deduce_extension_kind(manifest, registry, caches) == ["web"]


@pytest.mark.parametrize(
    "field",
    ["extension_dependencies", "extension_pack"],
)
def test_deduce_dependencies_or_pack(manifest_factory, registry, caches, field):
    manifest = manifest_factory(**{field: ["other.ext"]}, contributes={"themes": []})
    assert deduce_extension_kind(manifest, registry, caches) == ["workspace"]


def test_deduce_empty_dependencies_are_ignored(manifest_factory, registry, caches):
    manifest = manifest_factory(extension_dependencies=[], extension_pack=[])
    assert deduce_extension_kind(manifest, registry, caches) == ["ui", "workspace", "web"]


def test_deduce_bare_manifest(bare_manifest, registry, caches):
    assert deduce_extension_kind(bare_manifest, registry, caches) == ["ui", "workspace", "web"]


def test_deduce_ui_contributions_only(manifest_factory, registry, caches):
    manifest = manifest_factory(contributes={"themes": [], "keybindings": []})
    assert deduce_extension_kind(manifest, registry, caches) == ["ui", "workspace", "web"]


def test_deduce_one_workspace_contribution_flips(manifest_factory, registry, caches):
    manifest = manifest_factory(contributes={"themes": [], "keybindings": [], "debuggers": []})
    assert deduce_extension_kind(manifest, registry, caches) == ["workspace"]


def test_deduce_unregistered_contribution_is_workspace(manifest_factory, registry, caches):
    manifest = manifest_factory(contributes={"somethingNew": {}})
    assert deduce_extension_kind(manifest, registry, caches) == ["workspace"]


def test_deduce_empty_contributes(manifest_factory, registry, caches):
    manifest = manifest_factory(contributes={})
    assert deduce_extension_kind(manifest, registry, caches) == ["ui", "workspace", "web"]


def test_deduce_uses_settings_fallback(bare_manifest, registry, caches):
    settings = ResolverSettings(fallback_kind=["workspace", "ui"])
    assert deduce_extension_kind(bare_manifest, registry, caches, settings) == ["workspace", "ui"]


def test_deduce_defaults_to_process_wide_registry(manifest_factory):
    point = extension_points_registry.register(ExtensionPoint("testOnlyUiPoint", LocalityClass.UI))
    try:
        manifest = manifest_factory(contributes={"testOnlyUiPoint": []})
        assert deduce_extension_kind(manifest) == ["ui", "workspace", "web"]
    finally:
        extension_points_registry._points.remove(point)


# -----------------------------------------------------------------------------
# UI EXTENSION POINTS
# -----------------------------------------------------------------------------


def test_is_ui_extension_point(registry, caches):
    assert is_ui_extension_point("themes", registry, caches)
    assert is_ui_extension_point("keybindings", registry, caches)
    assert not is_ui_extension_point("debuggers", registry, caches)
    assert not is_ui_extension_point("unknown", registry, caches)


def test_is_ui_extension_point_snapshot(registry, caches):
    """Points registered after the first lookup are not seen."""
    assert not is_ui_extension_point("late", registry, caches)
    registry.register_extension_point("late", "ui")
    assert not is_ui_extension_point("late", registry, caches)
    caches.reset()
    assert is_ui_extension_point("late", registry, caches)


def test_is_ui_extension_point_uses_default_caches(registry):
    before = default_caches.build_counts()["ui_extension_points"]
    assert is_ui_extension_point("themes", registry)
    assert is_ui_extension_point("keybindings", registry)
    assert default_caches.build_counts()["ui_extension_points"] == before + 1


# -----------------------------------------------------------------------------
# PRECEDENCE
# -----------------------------------------------------------------------------


def test_configured_override_wins(controller_factory, manifest_factory):
    controller = controller_factory(configured={"pub.ext": "web"}, product={"pub.ext": ["ui"]})
    manifest = manifest_factory(main="./main.js", extension_kind=["workspace"])
    assert controller.get_extension_kind(manifest) == ["web"]


def test_configured_override_is_normalized(controller_factory, bare_manifest):
    controller = controller_factory(configured={"pub.ext": "ui"})
    result = controller.get_extension_kind(bare_manifest)
    assert isinstance(result, LocalityList)
    assert result == ["ui", "workspace"]


def test_configured_override_is_case_insensitive(controller_factory, manifest_factory):
    controller = controller_factory(configured={"PUB.Ext": ["web"]})
    assert controller.get_extension_kind(manifest_factory(publisher="Pub", name="EXT")) == ["web"]


def test_product_default_beats_manifest(controller_factory, manifest_factory):
    controller = controller_factory(product={"pub.ext": ["ui"]})
    manifest = manifest_factory(extension_kind=["workspace"])
    assert controller.get_extension_kind(manifest) == ["ui"]


def test_product_list_is_not_expanded(controller_factory, bare_manifest):
    controller = controller_factory(product={"pub.ext": ["ui"]})
    assert controller.get_extension_kind(bare_manifest) == ["ui"]


def test_manifest_declaration_beats_deduction(controller_factory, manifest_factory):
    controller = controller_factory()
    manifest = manifest_factory(main="./main.js", extension_kind="ui")
    assert controller.get_extension_kind(manifest) == ["ui", "workspace"]


def test_deduction_is_last_resort(controller_factory, native_manifest):
    controller = controller_factory(configured={"other.ext": "ui"}, product={"other.ext": ["web"]})
    assert controller.get_extension_kind(native_manifest) == ["workspace"]


def test_malformed_configured_entry_falls_through(controller_factory, manifest_factory):
    controller = controller_factory(configured={"pub.ext": ["desktop"]}, product={"pub.ext": ["web"]})
    assert controller.get_extension_kind(manifest_factory()) == ["web"]


def test_settings_configuration_key(caches, registry, bare_manifest):
    configuration = StaticConfiguration({"host": {"extensionKind": {"pub.ext": "web"}}})
    controller = ExtensionKindController(
        ProductMetadata(), configuration, registry, caches, ResolverSettings(configuration_key="host.extensionKind")
    )
    assert controller.get_extension_kind(bare_manifest) == ["web"]


def test_controller_defaults_to_process_wide_caches(empty_product, empty_configuration):
    controller = ExtensionKindController(empty_product, empty_configuration)
    assert controller.caches is default_caches


@pytest.mark.property
@given(configured=_declared_kinds, product=st.lists(_localities, min_size=1, max_size=3, unique=True), declared=_declared_kinds)
def test_configured_override_always_wins(configured, product, declared):
    controller = ExtensionKindController(
        ProductMetadata(extension_kind={"pub.ext": product}),
        StaticConfiguration({"remote.extensionKind": {"pub.ext": configured}}),
        ExtensionPointsRegistry(),
        PolicyCaches(),
    )
    manifest = ExtensionManifest("pub", "ext", main="./main.js", extension_kind=declared)
    assert controller.get_extension_kind(manifest) == LocalityList.coerce(configured)


# -----------------------------------------------------------------------------
# PREDICATES
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "declared, prefers",
    [
        ("ui", LocalityClass.UI),
        ("workspace", LocalityClass.WORKSPACE),
        ("web", LocalityClass.WEB),
        (["web", "ui"], LocalityClass.WEB),
        (["workspace", "web", "ui"], LocalityClass.WORKSPACE),
    ],
)
def test_prefers_matches_first_element(controller_factory, manifest_factory, declared, prefers):
    controller = controller_factory()
    manifest = manifest_factory(extension_kind=declared)
    results = {
        LocalityClass.UI: controller.prefers_execute_on_ui(manifest),
        LocalityClass.WORKSPACE: controller.prefers_execute_on_workspace(manifest),
        LocalityClass.WEB: controller.prefers_execute_on_web(manifest),
    }
    assert results == {c: c is prefers for c in LocalityClass}


def test_can_is_membership(controller_factory, manifest_factory):
    controller = controller_factory()
    manifest = manifest_factory(extension_kind=["web", "workspace"])
    assert controller.can_execute_on_web(manifest)
    assert controller.can_execute_on_workspace(manifest)
    assert not controller.can_execute_on_ui(manifest)


def test_single_ui_can_run_on_workspace(controller_factory, manifest_factory):
    controller = controller_factory()
    manifest = manifest_factory(extension_kind="ui")
    assert controller.can_execute_on_ui(manifest)
    assert controller.can_execute_on_workspace(manifest)
    assert not controller.can_execute_on_web(manifest)


def test_deduced_everywhere_prefers_ui(controller_factory, bare_manifest):
    controller = controller_factory()
    assert controller.prefers_execute_on_ui(bare_manifest)
    assert controller.can_execute_on_ui(bare_manifest)
    assert controller.can_execute_on_workspace(bare_manifest)
    assert controller.can_execute_on_web(bare_manifest)


@pytest.mark.property
@given(declared=_declared_kinds)
def test_at_most_one_preference(declared):
    controller = ExtensionKindController(
        ProductMetadata(), StaticConfiguration(), ExtensionPointsRegistry(), PolicyCaches()
    )
    manifest = ExtensionManifest("pub", "ext", extension_kind=declared)
    kinds = controller.get_extension_kind(manifest)
    preferences = [
        controller.prefers_execute_on_ui(manifest),
        controller.prefers_execute_on_workspace(manifest),
        controller.prefers_execute_on_web(manifest),
    ]
    assert preferences.count(True) == 1
    assert preferences[list(LocalityClass).index(kinds.most_preferred())]
    assert controller.can_execute_on_ui(manifest) == (LocalityClass.UI in kinds)
    assert controller.can_execute_on_workspace(manifest) == (LocalityClass.WORKSPACE in kinds)
    assert controller.can_execute_on_web(manifest) == (LocalityClass.WEB in kinds)
