"""
Route tests for /api/content
"""

import pytest

from sitecms.models import EntityType
from utils.factories import (
    create_test_destination,
    create_test_image,
    create_test_page,
    create_test_page_content,
    create_test_plugin,
    create_test_product,
    create_test_site,
    create_test_site_plugin,
    create_test_tour,
)


async def _seed_site(test_db):
    """A site with one published page, one product and one destination."""
    site = await create_test_site(test_db, name="Travel Co", domain="travel.example.com")
    page = await create_test_page(test_db, site.id, "home", title="Home")
    await create_test_page_content(test_db, page.id, "hero", "<h1>Welcome</h1>", order=0)
    await create_test_product(test_db, site.id, "guide", name="Guide book", price="15.00", is_published=False)
    destination = await create_test_destination(test_db, site.id, "lisbon", name="Lisbon")
    await create_test_tour(test_db, destination.id, "walk", name="Walk")
    await create_test_image(test_db, EntityType.SITE, site.id, "logo", title="Logo")
    return site


class TestSiteContentRoute:
    @pytest.mark.asyncio
    async def test_requires_authentication(self, client, test_db):
        site = await create_test_site(test_db)

        response = await client.get(f"/api/content/site/{site.id}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_nothing_enabled_returns_empty_object(self, client, test_db, auth_headers):
        site = await _seed_site(test_db)

        response = await client.get(f"/api/content/site/{site.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.text == "{}"

    @pytest.mark.asyncio
    async def test_enabled_plugins_only(self, client, test_db, auth_headers):
        site = await _seed_site(test_db)
        pages = await create_test_plugin(test_db, "PageManagement")
        travel = await create_test_plugin(test_db, "TravelManagement")
        await create_test_site_plugin(test_db, site.id, pages.id)
        await create_test_site_plugin(test_db, site.id, travel.id, is_enabled=False)

        response = await client.get(f"/api/content/site/{site.id}", headers=auth_headers)

        body = response.json()
        assert list(body) == ["PageManagement"]
        assert body["PageManagement"][0]["contents"] == [{"content_id": "hero", "content": "<h1>Welcome</h1>"}]


class TestPluginContentRoute:
    @pytest.mark.asyncio
    async def test_single_plugin_content(self, client, test_db, auth_headers):
        site = await _seed_site(test_db)

        response = await client.get(f"/api/content/site/{site.id}/plugin/TravelManagement", headers=auth_headers)

        assert response.status_code == 200
        [destination] = response.json()
        assert destination["destination"] == "Lisbon"
        assert [t["tour_id"] for t in destination["tours"]] == ["walk"]

    @pytest.mark.asyncio
    async def test_unpublished_products_are_not_published(self, client, test_db, auth_headers):
        site = await _seed_site(test_db)

        response = await client.get(f"/api/content/site/{site.id}/plugin/ProductManagement", headers=auth_headers)

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_unknown_plugin_is_404(self, client, test_db, auth_headers):
        site = await create_test_site(test_db)

        response = await client.get(f"/api/content/site/{site.id}/plugin/Blog", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_PLUGIN_NOT_FOUND"


class TestExportRoute:
    @pytest.mark.asyncio
    async def test_missing_site_is_404(self, client, auth_headers):
        response = await client.get("/api/content/export/12345", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_SITE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_export_document(self, client, test_db, auth_headers):
        site = await _seed_site(test_db)

        response = await client.get(f"/api/content/export/{site.id}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["site_id"] == site.id
        assert body["domain"] == "travel.example.com"
        assert [p["slug"] for p in body["pages"]] == ["home"]
        assert body["pages"][0]["contents"] == [{"key": "hero", "value": "<h1>Welcome</h1>", "content_type": "HTML"}]
        # The unpublished product is part of the export
        assert [p["name"] for p in body["products"]] == ["Guide book"]
        assert body["products"][0]["price"] == 15.0
        assert body["destinations"][0]["location"] == "lisbon"
        assert [m["file_name"] for m in body["media"]] == ["Logo"]
        assert body["media"][0]["file_type"] == "Image"

    @pytest.mark.asyncio
    async def test_export_requires_authentication(self, client, test_db):
        site = await create_test_site(test_db)

        response = await client.get(f"/api/content/export/{site.id}")

        assert response.status_code == 401
