"""
Supply-side inventory models: publishers own sites, sites own placements.
"""

from typing import Optional
from pydantic import BaseModel


class Publisher(BaseModel):
    id: Optional[int] = None
    code: Optional[str] = None
    state: Optional[str] = None  # "active" | "inactive"
    name: str = ""
    is_oo: Optional[bool] = None
    reselling_exposure: Optional[str] = None  # "public" | "private"
    base_payment_rule_id: Optional[int] = None
    inventory_relationship: Optional[str] = None
    inventory_source: Optional[str] = None


class Site(BaseModel):
    id: Optional[int] = None
    publisher_id: int = 0
    code: Optional[str] = None
    state: Optional[str] = None
    name: str = ""
    url: str = ""
    supply_type: str = ""  # "web" | "mobile_web" | "mobile_app"


class Placement(BaseModel):
    id: Optional[int] = None
    publisher_id: int = 0
    site_id: Optional[int] = None
    code: str = ""
    state: Optional[str] = None
    name: str = ""


class PublisherBody(BaseModel):
    publisher: Optional[Publisher] = None
    publishers: list[Publisher] = []


class PublisherEnvelope(BaseModel):
    response: PublisherBody = PublisherBody()


class SiteBody(BaseModel):
    site: Optional[Site] = None
    sites: list[Site] = []


class SiteEnvelope(BaseModel):
    response: SiteBody = SiteBody()


class PlacementBody(BaseModel):
    placement: Optional[Placement] = None
    placements: list[Placement] = []


class PlacementEnvelope(BaseModel):
    response: PlacementBody = PlacementBody()
