"""
Tests for the generic repository, the unit of work and the global
soft-delete filter.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from sitecms.models import Page, Site
from sitecms.repositories import Repository, UnitOfWork
from utils.factories import create_test_page, create_test_page_content, create_test_site, soft_delete


class TestUnitOfWork:
    def test_repository_is_cached_per_model(self, uow):
        assert uow.repository(Site) is uow.repository(Site)
        assert uow.repository(Site) is not uow.repository(Page)
        assert isinstance(uow.repository(Site), Repository)

    @pytest.mark.asyncio
    async def test_save_changes_commits(self, test_db, test_session_maker):
        uow = UnitOfWork(test_db)
        await uow.repository(Site).add(Site(name="Saved", domain="saved.example.com"))
        await uow.save_changes()

        async with test_session_maker() as other:
            result = await other.execute(select(Site.name))
            assert result.scalars().all() == ["Saved"]

    @pytest.mark.asyncio
    async def test_rollback_discards_pending_rows(self, uow):
        await uow.repository(Site).add(Site(name="Discarded", domain="discarded.example.com"))
        await uow.rollback()

        assert await uow.repository(Site).get_all() == []


class TestRepository:
    @pytest.mark.asyncio
    async def test_get_by_id(self, test_db, uow):
        site = await create_test_site(test_db)

        assert (await uow.repository(Site).get_by_id(site.id)).domain == "test.example.com"
        assert await uow.repository(Site).get_by_id(999) is None

    @pytest.mark.asyncio
    async def test_find_matches_all_criteria_in_id_order(self, test_db, uow):
        site = await create_test_site(test_db)
        await create_test_page(test_db, site.id, "b", is_published=True)
        await create_test_page(test_db, site.id, "a", is_published=False)
        await create_test_page(test_db, site.id, "c", is_published=True)

        pages = await uow.repository(Page).find(Page.site_id == site.id, Page.is_published.is_(True))

        assert [p.page_id for p in pages] == ["b", "c"]

    @pytest.mark.asyncio
    async def test_find_with_custom_order(self, test_db, uow):
        site = await create_test_site(test_db)
        await create_test_page(test_db, site.id, "b")
        await create_test_page(test_db, site.id, "a")

        pages = await uow.repository(Page).find(Page.site_id == site.id, order_by=Page.page_id)

        assert [p.page_id for p in pages] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_find_first(self, test_db, uow):
        site = await create_test_site(test_db)
        await create_test_page(test_db, site.id, "first")
        await create_test_page(test_db, site.id, "second")

        page = await uow.repository(Page).find_first(Page.site_id == site.id)

        assert page.page_id == "first"
        assert await uow.repository(Page).find_first(Page.site_id == 999) is None


class TestSoftDeleteFilter:
    @pytest.mark.asyncio
    async def test_deleted_rows_are_invisible(self, test_db, uow):
        site = await create_test_site(test_db)
        kept = await create_test_page(test_db, site.id, "kept")
        gone = await create_test_page(test_db, site.id, "gone")
        gone_id = gone.id
        await soft_delete(test_db, gone)

        repo = uow.repository(Page)
        assert [p.id for p in await repo.get_all()] == [kept.id]
        assert await repo.get_by_id(gone_id) is None
        assert await repo.find(Page.page_id == "gone") == []

    @pytest.mark.asyncio
    async def test_include_deleted_opt_out(self, test_db, uow):
        site = await create_test_site(test_db)
        gone = await create_test_page(test_db, site.id, "gone")
        await soft_delete(test_db, gone)

        pages = await uow.repository(Page).get_all(include_deleted=True)

        assert [(p.page_id, p.is_deleted) for p in pages] == [("gone", True)]

    @pytest.mark.asyncio
    async def test_filter_applies_to_plain_session_queries(self, test_db):
        site = await create_test_site(test_db)
        await soft_delete(test_db, site)

        result = await test_db.execute(select(Site))

        assert result.scalars().all() == []

    @pytest.mark.asyncio
    async def test_filter_applies_to_eager_loaded_collections(self, test_db, uow):
        site = await create_test_site(test_db)
        page = await create_test_page(test_db, site.id, "home")
        await create_test_page_content(test_db, page.id, "live", "x", order=0)
        dead = await create_test_page_content(test_db, page.id, "dead", "y", order=1)
        await soft_delete(test_db, dead)

        [loaded] = await uow.repository(Page).find(Page.id == page.id, options=[selectinload(Page.contents)])

        assert [c.content_id for c in loaded.contents] == ["live"]

    def test_mark_deleted_stamps_audit_fields(self):
        page = Page(site_id=1, page_id="p", title="t")

        page.mark_deleted("dave")

        assert page.is_deleted is True
        assert page.updated_by == "dave"
        assert page.updated_at is not None
