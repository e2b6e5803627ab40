"""
Shared CRUD plumbing for the resource services.

AppNexus addresses every resource the same way: a service name as the path,
ids and parent ids as query parameters, and the item wrapped under the
singular name in both request and response bodies.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from appnexus.errors import ResourceError
from appnexus.models.envelope import Envelope, ListOptions, Page
from appnexus.transport.http import HttpClient

ItemT = TypeVar("ItemT", bound=BaseModel)
EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


def _params(scope: dict[str, Any]) -> dict[str, str]:
    return {k: str(v) for k, v in scope.items() if v is not None}


class ResourceService(Generic[ItemT, EnvelopeT]):
    name: str = ""
    plural: str = ""
    envelope: type[EnvelopeT]

    def __init__(self, http: HttpClient):
        self._http = http

    async def _get(self, item_id: int, **scope: Any) -> ItemT:
        request = self._http.build_request("GET", self.name, params=_params({"id": item_id, **scope}))
        _, payload = await self._http.dispatch(request, into=self.envelope)
        item = getattr(payload.response, self.name, None) if payload else None
        if item is None:
            raise ResourceError(f"No {self.name} in response", {"id": item_id})
        return item

    async def _list(self, options: Optional[ListOptions] = None, **scope: Any) -> Page[ItemT]:
        params = _params(scope)
        if options is not None:
            params.update(options.to_params())
        request = self._http.build_request("GET", self.name, params=params)
        envelope, payload = await self._http.dispatch(request, into=self.envelope)
        items = getattr(payload.response, self.plural, []) if payload else []
        body = envelope.response if envelope else None
        return Page(
            items=items,
            count=body.count if body else None,
            start_element=body.start_element if body else None,
            num_elements=body.num_elements if body else None,
        )

    async def _add(self, item: ItemT, **scope: Any) -> Optional[Envelope]:
        request = self._http.build_request("POST", self.name, {self.name: item}, params=_params(scope))
        envelope, _ = await self._http.dispatch(request)
        if envelope is not None and envelope.response.new_id is not None:
            item.id = envelope.response.new_id  # type: ignore[attr-defined]
        return envelope

    async def _update(self, item: ItemT, **scope: Any) -> Optional[Envelope]:
        item_id = getattr(item, "id", None)
        if not item_id or item_id < 1:
            raise ResourceError(f"Update {self.name} requires the {self.name} to have an id already")
        params = _params({"id": item_id, **scope})
        request = self._http.build_request("PUT", self.name, {self.name: item}, params=params)
        envelope, _ = await self._http.dispatch(request)
        return envelope

    async def _delete(self, item_id: int, **scope: Any) -> None:
        request = self._http.build_request("DELETE", self.name, params=_params({"id": item_id, **scope}))
        await self._http.dispatch(request)
