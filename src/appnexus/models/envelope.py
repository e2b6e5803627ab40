"""
Response envelope. Every AppNexus reply is wrapped in {"response": {...}}.
"""

from typing import Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

ItemT = TypeVar("ItemT")


class RateSnapshot(BaseModel):
    """Server-reported usage, found under response.dbg_info."""
    reads: int = 0
    read_limit: int = 0
    read_limit_seconds: int = 0
    writes: int = 0
    write_limit: int = 0
    write_limit_seconds: int = 0


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)


class EnvelopeBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Optional[str] = None
    id: Optional[Union[int, str]] = None
    error_id: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None
    error_code: Optional[str] = None
    token: Optional[str] = None
    service: Optional[str] = None
    method: Optional[str] = None
    count: Optional[int] = None
    start_element: Optional[int] = None
    num_elements: Optional[int] = None
    rate: RateSnapshot = Field(default_factory=RateSnapshot, alias="dbg_info")

    @property
    def failed(self) -> bool:
        return bool(self.error_id) or bool(self.error)

    @property
    def new_id(self) -> Optional[int]:
        """The id the server assigned on Add, as an int when it parses as one."""
        try:
            return int(self.id) if self.id is not None else None
        except (TypeError, ValueError):
            return None


class Envelope(BaseModel):
    response: EnvelopeBody = Field(default_factory=EnvelopeBody)


class Page(BaseModel, Generic[ItemT]):
    """One List call's worth of items plus the envelope's pagination counters."""
    items: list[ItemT] = []
    count: Optional[int] = None
    start_element: Optional[int] = None
    num_elements: Optional[int] = None


class ListOptions(BaseModel):
    """Pagination options shared by the List calls."""
    start_element: Optional[int] = None
    num_elements: Optional[int] = None
    active: Optional[bool] = None

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.start_element:
            params["start_element"] = str(self.start_element)
        if self.num_elements:
            params["num_elements"] = str(self.num_elements)
        if self.active:
            params["active"] = "true"
        return params
