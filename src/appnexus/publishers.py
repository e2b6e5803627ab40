"""
Publisher service.
"""

from typing import Optional

from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.models.inventory import Publisher, PublisherEnvelope
from appnexus.resource import ResourceService


class PublishersAPI(ResourceService[Publisher, PublisherEnvelope]):
    name = "publisher"
    plural = "publishers"
    envelope = PublisherEnvelope

    async def get(self, publisher_id: int) -> Publisher:
        return await self._get(publisher_id)

    async def list(self, options: Optional[ListOptions] = None) -> Page[Publisher]:
        return await self._list(options)

    async def add(self, publisher: Publisher, create_default_placement: bool = False) -> Optional[Envelope]:
        """Create a publisher. By default no placement is created alongside it."""
        return await self._add(
            publisher, create_default_placement="true" if create_default_placement else "false",
        )

    async def update(self, publisher: Publisher) -> Optional[Envelope]:
        return await self._update(publisher)

    async def delete(self, publisher_id: int) -> None:
        await self._delete(publisher_id)
