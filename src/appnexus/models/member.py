"""
Member and segment models. Segments are always scoped to a member.
"""

from typing import Optional
from pydantic import BaseModel


class Member(BaseModel):
    id: Optional[int] = None
    name: str = ""
    state: Optional[str] = None
    billing_name: Optional[str] = None
    default_currency: Optional[str] = None
    timezone: Optional[str] = None


class Segment(BaseModel):
    id: Optional[int] = None
    member_id: Optional[int] = None
    code: Optional[str] = None
    state: Optional[str] = None
    short_name: str = ""
    description: Optional[str] = None
    price: Optional[float] = None
    expire_minutes: Optional[int] = None
    enable_rm_piggyback: Optional[bool] = None
    last_modified: Optional[str] = None


class MemberBody(BaseModel):
    member: Optional[Member] = None
    members: list[Member] = []


class MemberEnvelope(BaseModel):
    response: MemberBody = MemberBody()


class SegmentBody(BaseModel):
    segment: Optional[Segment] = None
    segments: list[Segment] = []


class SegmentEnvelope(BaseModel):
    response: SegmentBody = SegmentBody()
