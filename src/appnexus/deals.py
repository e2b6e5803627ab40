"""
Deal service: negotiated deals between a seller and a buyer.
"""

from typing import Optional

from appnexus.models.deal import Deal, DealEnvelope
from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.resource import ResourceService


class DealsAPI(ResourceService[Deal, DealEnvelope]):
    name = "deal"
    plural = "deals"
    envelope = DealEnvelope

    async def get(self, deal_id: int) -> Deal:
        return await self._get(deal_id)

    async def list(self, options: Optional[ListOptions] = None) -> Page[Deal]:
        return await self._list(options)

    async def add(self, deal: Deal) -> Optional[Envelope]:
        """Create a deal. The new id is written back onto `deal`."""
        return await self._add(deal)

    async def update(self, deal: Deal) -> Optional[Envelope]:
        return await self._update(deal)

    async def delete(self, deal_id: int) -> None:
        await self._delete(deal_id)
