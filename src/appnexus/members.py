"""
Member service. Members are provisioned by AppNexus, so there is no add or delete.
"""

from typing import Optional

from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.models.member import Member, MemberEnvelope
from appnexus.resource import ResourceService


class MembersAPI(ResourceService[Member, MemberEnvelope]):
    name = "member"
    plural = "members"
    envelope = MemberEnvelope

    async def get(self, member_id: int) -> Member:
        return await self._get(member_id)

    async def list(self, options: Optional[ListOptions] = None) -> Page[Member]:
        return await self._list(options)

    async def update(self, member: Member) -> Optional[Envelope]:
        return await self._update(member)
