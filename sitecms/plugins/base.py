"""
Content Plugin Base Classes

PluginMeta: declarative identity of a plugin (system name, display name, ...).
ContentPlugin: abstract base class every content plugin subclasses.

A content plugin turns the published content of one site into a JSON-ready
payload. Plugins are stateless; the request's UnitOfWork is passed to every
call so a single instance can live in the registry for the process lifetime.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sitecms.models.media import EntityType, File, Image

if TYPE_CHECKING:
    from sitecms.repositories.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        system_name:  Stable, unique key, e.g. "PageManagement". Used as the
                      top-level key of the aggregated site JSON and to match
                      catalog rows in the database.
        display_name: Human-readable name shown in the admin UI.
        description:  Human-readable description shown in the admin UI.
        version:      Semver string, e.g. "1.0.0".
        author:       Plugin author (defaults to "CMS Core Team").
    """

    system_name: str
    display_name: str
    description: str
    version: str = "1.0.0"
    author: str = "CMS Core Team"


class ContentPlugin(ABC):
    """
    Abstract base class for all content plugins.

    Subclasses must implement `meta` and `get_content`. `generate_json` and
    `validate_configuration` have working defaults.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    @property
    def system_name(self) -> str:
        return self.meta.system_name

    @abstractmethod
    async def get_content(self, site_id: int, uow: UnitOfWork) -> list[dict[str, Any]]:
        """
        Return the publishable content of a site.

        Only rows belonging to `site_id` are read, unpublished and
        soft-deleted items are left out, and a site without content yields an
        empty list. Data-access errors propagate to the caller.
        """
        ...

    async def generate_json(self, site_id: int, uow: UnitOfWork) -> str:
        """Serialize get_content() as indented JSON ("[]" when there is nothing)."""
        content = await self.get_content(site_id, uow)
        return json.dumps(content, indent=2)

    async def validate_configuration(self, configuration: str | None) -> None:  # noqa: B027
        """
        Check a per-site configuration string before it is stored.

        Raise InvalidPluginConfigurationError to reject it. The default
        accepts anything, including None.
        """

    async def _load_attachments(
        self, uow: UnitOfWork, entity_type: EntityType, entity_id: int
    ) -> dict[str, list[dict[str, Any]]]:
        """Images and files whose polymorphic owner is (entity_type, entity_id)."""
        images = await uow.repository(Image).find(
            Image.entity_type == entity_type.value,
            Image.entity_id == entity_id,
        )
        files = await uow.repository(File).find(
            File.entity_type == entity_type.value,
            File.entity_id == entity_id,
        )
        return {
            "images": [{"image_id": image.image_id, "location": image.location} for image in images],
            "files": [{"file_id": file.file_id, "location": file.location} for file in files],
        }
