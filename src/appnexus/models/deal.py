"""
Deal models.
"""

from typing import Optional
from pydantic import BaseModel


class DealType(BaseModel):
    id: Optional[int] = None


class AuctionType(BaseModel):
    id: Optional[int] = None


class Buyer(BaseModel):
    id: Optional[int] = None


class Deal(BaseModel):
    id: Optional[int] = None
    floor_price: Optional[float] = None
    code: str = ""
    name: str = ""
    active: bool = False
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    type: Optional[DealType] = None
    auction_type: Optional[AuctionType] = None
    buyer: Optional[Buyer] = None


class DealBody(BaseModel):
    deal: Optional[Deal] = None
    deals: list[Deal] = []


class DealEnvelope(BaseModel):
    response: DealBody = DealBody()
