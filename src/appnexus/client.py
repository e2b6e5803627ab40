"""
AppNexus / AsyncAppNexus — main SDK clients.
"""

import asyncio
import inspect
from typing import Any, Optional

import httpx

from appnexus.auth import Auth
from appnexus.deals import DealsAPI
from appnexus.members import MembersAPI
from appnexus.placements import PlacementsAPI
from appnexus.publishers import PublishersAPI
from appnexus.segments import SegmentsAPI
from appnexus.sites import SitesAPI
from appnexus.models.envelope import RateSnapshot
from appnexus.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HttpClient
from appnexus.transport.ratelimit import Sleep


class AsyncAppNexus:
    """Async AppNexus client (primary)."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        member_id: Optional[int] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Sleep] = None,
    ):
        self.http = HttpClient(
            base_url=base_url,
            token=token,
            member_id=member_id,
            timeout=timeout,
            transport=transport,
            sleep=sleep,
        )
        self.auth = Auth(self.http)
        self.members = MembersAPI(self.http)
        self.segments = SegmentsAPI(self.http)
        self.publishers = PublishersAPI(self.http)
        self.sites = SitesAPI(self.http)
        self.placements = PlacementsAPI(self.http)
        self.deals = DealsAPI(self.http)

    @property
    def rate(self) -> RateSnapshot:
        return self.http.rate

    async def login(self, username: str, password: str) -> str:
        return await self.auth.login(username, password)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncAppNexus":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


class _SyncService:
    """Runs every coroutine method of an async service on the owner's loop."""

    def __init__(self, service: Any, run: Any):
        self._service = service
        self._run = run

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._service, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        def call(*args: Any, **kwargs: Any) -> Any:
            return self._run(attr(*args, **kwargs))
        return call


class AppNexus:
    """Sync wrapper around AsyncAppNexus. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncAppNexus(**kwargs)
        self._loop = asyncio.new_event_loop()
        self.auth = _SyncService(self._async.auth, self._run)
        self.members = _SyncService(self._async.members, self._run)
        self.segments = _SyncService(self._async.segments, self._run)
        self.publishers = _SyncService(self._async.publishers, self._run)
        self.sites = _SyncService(self._async.sites, self._run)
        self.placements = _SyncService(self._async.placements, self._run)
        self.deals = _SyncService(self._async.deals, self._run)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def http(self) -> HttpClient:
        return self._async.http

    @property
    def rate(self) -> RateSnapshot:
        return self._async.rate

    def login(self, username: str, password: str) -> str:
        return self._run(self._async.login(username, password))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "AppNexus":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
