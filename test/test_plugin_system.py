"""
Content Plugin System Tests

Pure unit tests: no database is touched.

Test classes:
    TestPluginMeta      - PluginMeta dataclass
    TestContentPlugin   - ContentPlugin abstract base class
    TestPluginRegistry  - immutable registry lookups and ordering
    TestPluginLoader    - build_plugin_registry and the built-in plugin list
    TestPluginRoutes    - route registration and access control
"""

from __future__ import annotations

import dataclasses
import json
import logging

import pytest

# ══════════════════════════════════════════════════════════════════════════════
# Helpers
# ══════════════════════════════════════════════════════════════════════════════


def _make_plugin(system_name: str, content=None, version: str = "1.0.0"):
    from sitecms.plugins.base import ContentPlugin, PluginMeta

    meta = PluginMeta(system_name=system_name, display_name=system_name, description="stub", version=version)

    class StubPlugin(ContentPlugin):
        @property
        def meta(self) -> PluginMeta:
            return meta

        async def get_content(self, site_id, uow):
            return list(content or [])

    return StubPlugin()


# ══════════════════════════════════════════════════════════════════════════════
# 1. TestPluginMeta
# ══════════════════════════════════════════════════════════════════════════════


class TestPluginMeta:
    def test_pluginmeta_is_dataclass(self):
        from sitecms.plugins.base import PluginMeta

        assert dataclasses.is_dataclass(PluginMeta)

    def test_pluginmeta_defaults(self):
        from sitecms.plugins.base import PluginMeta

        m = PluginMeta(system_name="X", display_name="X", description="desc")
        assert m.version == "1.0.0"
        assert m.author == "CMS Core Team"

    def test_pluginmeta_is_frozen(self):
        from sitecms.plugins.base import PluginMeta

        m = PluginMeta(system_name="X", display_name="X", description="desc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.system_name = "Y"  # type: ignore[misc]


# ══════════════════════════════════════════════════════════════════════════════
# 2. TestContentPlugin
# ══════════════════════════════════════════════════════════════════════════════


class TestContentPlugin:
    def test_content_plugin_is_abstract(self):
        from sitecms.plugins.base import ContentPlugin

        with pytest.raises(TypeError):
            ContentPlugin()  # type: ignore[abstract]

    def test_subclass_without_get_content_cannot_instantiate(self):
        from sitecms.plugins.base import ContentPlugin, PluginMeta

        class Incomplete(ContentPlugin):
            @property
            def meta(self) -> PluginMeta:
                return PluginMeta(system_name="I", display_name="I", description="d")

        with pytest.raises(TypeError):
            Incomplete()  # type: ignore[abstract]

    def test_system_name_shortcut(self):
        assert _make_plugin("Shortcut").system_name == "Shortcut"

    @pytest.mark.asyncio
    async def test_generate_json_empty_content_is_empty_array(self):
        plugin = _make_plugin("Empty")
        assert await plugin.generate_json(1, uow=None) == "[]"

    @pytest.mark.asyncio
    async def test_generate_json_is_indented(self):
        plugin = _make_plugin("Items", content=[{"a": 1}])
        output = await plugin.generate_json(1, uow=None)
        assert json.loads(output) == [{"a": 1}]
        assert "\n  " in output

    @pytest.mark.asyncio
    async def test_default_validate_configuration_accepts_anything(self):
        plugin = _make_plugin("Lenient")
        assert await plugin.validate_configuration(None) is None
        assert await plugin.validate_configuration("not json at all") is None


# ══════════════════════════════════════════════════════════════════════════════
# 3. TestPluginRegistry
# ══════════════════════════════════════════════════════════════════════════════


class TestPluginRegistry:
    def test_empty_registry(self):
        from sitecms.plugins.registry import PluginRegistry

        registry = PluginRegistry()
        assert len(registry) == 0
        assert registry.all_plugins() == []
        assert registry.get("Anything") is None

    def test_get_returns_registered_instance(self):
        from sitecms.plugins.registry import PluginRegistry

        plugin = _make_plugin("Alpha")
        registry = PluginRegistry([plugin])
        assert registry.get("Alpha") is plugin
        assert registry.is_registered("Alpha")
        assert "Alpha" in registry

    def test_lookup_is_case_sensitive(self):
        from sitecms.plugins.registry import PluginRegistry

        registry = PluginRegistry([_make_plugin("Alpha")])
        assert registry.get("alpha") is None
        assert not registry.is_registered("ALPHA")

    def test_preserves_registration_order(self):
        from sitecms.plugins.registry import PluginRegistry

        registry = PluginRegistry([_make_plugin("C"), _make_plugin("A"), _make_plugin("B")])
        assert registry.system_names() == ["C", "A", "B"]
        assert [p.system_name for p in registry] == ["C", "A", "B"]

    def test_duplicate_system_name_rejected(self):
        from sitecms.plugins.registry import PluginRegistry

        with pytest.raises(ValueError, match="Duplicate plugin system name"):
            PluginRegistry([_make_plugin("Dup"), _make_plugin("Dup", version="2.0.0")])

    def test_registry_has_no_mutators(self):
        from sitecms.plugins.registry import PluginRegistry

        registry = PluginRegistry([_make_plugin("Alpha")])
        assert not hasattr(registry, "register")
        assert not hasattr(registry, "unregister")

    def test_all_plugins_returns_a_copy(self):
        from sitecms.plugins.registry import PluginRegistry

        registry = PluginRegistry([_make_plugin("Alpha")])
        registry.all_plugins().clear()
        assert len(registry) == 1


# ══════════════════════════════════════════════════════════════════════════════
# 4. TestPluginLoader
# ══════════════════════════════════════════════════════════════════════════════


class TestPluginLoader:
    def test_builtin_plugins_in_order(self):
        from sitecms.plugins.loader import build_plugin_registry

        registry = build_plugin_registry()
        assert registry.system_names() == ["PageManagement", "ProductManagement", "TravelManagement"]

    def test_builtin_plugin_identities(self):
        from sitecms.plugins.loader import build_plugin_registry

        registry = build_plugin_registry()
        page = registry.get("PageManagement").meta
        product = registry.get("ProductManagement").meta
        travel = registry.get("TravelManagement").meta

        assert page.display_name == "Page Management"
        assert page.description == "Manage website pages with content, images, and files"
        assert product.display_name == "Product Management"
        assert product.description == "Manage products with images and files"
        assert travel.display_name == "Travel Management"
        assert travel.description == "Manage destinations and tours"
        assert {page.version, product.version, travel.version} == {"1.0.0"}

    def test_each_build_returns_independent_registry(self):
        from sitecms.plugins.loader import build_plugin_registry

        first = build_plugin_registry()
        second = build_plugin_registry()
        assert first is not second
        assert first.get("PageManagement") is not second.get("PageManagement")

    def test_custom_plugin_list(self, caplog):
        from sitecms.plugins.loader import build_plugin_registry
        from sitecms.plugins.page_plugin import PageManagementPlugin

        with caplog.at_level(logging.INFO, logger="sitecms.plugins.loader"):
            registry = build_plugin_registry((PageManagementPlugin,))

        assert registry.system_names() == ["PageManagement"]
        assert "1 plugins loaded (PageManagement)" in caplog.text

    def test_app_carries_registry(self):
        from main import app

        assert app.state.plugin_registry.system_names() == [
            "PageManagement",
            "ProductManagement",
            "TravelManagement",
        ]


# ══════════════════════════════════════════════════════════════════════════════
# 5. TestPluginRoutes
# ══════════════════════════════════════════════════════════════════════════════


class TestPluginRoutes:
    def _get_all_paths(self):
        from main import app

        return set(app.openapi()["paths"])

    def test_plugin_paths_registered(self):
        paths = self._get_all_paths()
        for expected in (
            "/api/plugins",
            "/api/plugins/database",
            "/api/plugins/sync",
            "/api/plugins/{system_name}",
            "/api/plugins/site/{site_id}",
            "/api/plugins/site/{site_id}/enable/{plugin_id}",
            "/api/plugins/site/{site_id}/disable/{plugin_id}",
            "/api/plugins/site/{site_id}/plugin/{plugin_id}/config",
        ):
            assert expected in paths

    def test_content_paths_registered(self):
        paths = self._get_all_paths()
        assert "/api/content/site/{site_id}" in paths
        assert "/api/content/export/{site_id}" in paths
        assert "/api/content/site/{site_id}/plugin/{system_name}" in paths

    @pytest.mark.asyncio
    async def test_database_route_not_shadowed_by_system_name_route(self, client):
        response = await client.get("/api/plugins/database")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_sync_route_not_shadowed_by_system_name_route(self, client):
        # /{system_name} only answers GET, so a shadowed sync would be a 405
        response = await client.post("/api/plugins/sync")

        assert response.status_code == 401

    def test_router_has_plugins_tag(self):
        from sitecms.routes.plugins import router

        assert "Plugins" in router.tags

    def test_sync_response_schema_fields(self):
        from sitecms.routes.plugins import SyncResponse

        assert set(SyncResponse.model_fields) == {"message", "added", "updated", "total"}
