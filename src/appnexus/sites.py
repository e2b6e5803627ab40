"""
Site service. Sites belong to a publisher.
"""

from typing import Optional

from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.models.inventory import Site, SiteEnvelope
from appnexus.resource import ResourceService


class SitesAPI(ResourceService[Site, SiteEnvelope]):
    name = "site"
    plural = "sites"
    envelope = SiteEnvelope

    async def get(self, site_id: int, publisher_id: Optional[int] = None) -> Site:
        return await self._get(site_id, publisher_id=publisher_id)

    async def list(
        self, publisher_id: Optional[int] = None, options: Optional[ListOptions] = None,
    ) -> Page[Site]:
        return await self._list(options, publisher_id=publisher_id)

    async def add(self, site: Site, publisher_id: Optional[int] = None) -> Optional[Envelope]:
        return await self._add(site, publisher_id=publisher_id or site.publisher_id)

    async def update(self, site: Site, publisher_id: Optional[int] = None) -> Optional[Envelope]:
        return await self._update(site, publisher_id=publisher_id or site.publisher_id)

    async def delete(self, site_id: int, publisher_id: int) -> None:
        await self._delete(site_id, publisher_id=publisher_id)
