"""
Segment service. Every call is scoped to a member; the client's member_id is
used when none is passed.
"""

from typing import Optional

from appnexus.errors import ResourceError
from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.models.member import Segment, SegmentEnvelope
from appnexus.resource import ResourceService


class SegmentsAPI(ResourceService[Segment, SegmentEnvelope]):
    name = "segment"
    plural = "segments"
    envelope = SegmentEnvelope

    def _member(self, member_id: Optional[int]) -> int:
        resolved = member_id or self._http.member_id
        if not resolved:
            raise ResourceError("Segment calls need a member_id (pass one or set it on the client)")
        return resolved

    async def get(self, segment_id: int, member_id: Optional[int] = None) -> Segment:
        return await self._get(segment_id, member_id=self._member(member_id))

    async def list(
        self, member_id: Optional[int] = None, options: Optional[ListOptions] = None,
    ) -> Page[Segment]:
        return await self._list(options, member_id=self._member(member_id))

    async def add(self, segment: Segment) -> Optional[Envelope]:
        return await self._add(segment, member_id=self._member(segment.member_id))

    async def update(self, segment: Segment) -> Optional[Envelope]:
        return await self._update(segment, member_id=self._member(segment.member_id))

    async def delete(self, segment_id: int, member_id: Optional[int] = None) -> None:
        await self._delete(segment_id, member_id=self._member(member_id))
