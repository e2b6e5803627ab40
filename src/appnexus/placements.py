"""
Placement service. Placements are listed per publisher.
"""

from typing import Optional

from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.models.inventory import Placement, PlacementEnvelope
from appnexus.resource import ResourceService


class PlacementsAPI(ResourceService[Placement, PlacementEnvelope]):
    name = "placement"
    plural = "placements"
    envelope = PlacementEnvelope

    async def get(self, placement_id: int, publisher_id: Optional[int] = None) -> Placement:
        return await self._get(placement_id, publisher_id=publisher_id)

    async def list(self, publisher_id: int, options: Optional[ListOptions] = None) -> Page[Placement]:
        return await self._list(options, publisher_id=publisher_id)

    async def add(self, placement: Placement) -> Optional[Envelope]:
        return await self._add(placement, publisher_id=placement.publisher_id)

    async def update(self, placement: Placement) -> Optional[Envelope]:
        return await self._update(placement, publisher_id=placement.publisher_id)

    async def delete(self, placement_id: int, publisher_id: int) -> None:
        await self._delete(placement_id, publisher_id=publisher_id)
