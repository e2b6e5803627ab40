"""
appnexus — AppNexus console API client for Python.

Members, segments, publishers, sites, placements and deals over the
AppNexus REST API, with login, self-throttling and silent re-login.
"""

from appnexus.client import AppNexus, AsyncAppNexus
from appnexus.auth import Auth
from appnexus.errors import (
    AppNexusError,
    ApiError,
    AuthError,
    DecodeError,
    DispatchError,
    HTTPStatusError,
    MalformedPathError,
    ReauthenticationError,
    ResourceError,
    SerializationError,
)
from appnexus.models.envelope import Envelope, ListOptions, Page, RateSnapshot

__version__ = "0.1.0"
__all__ = [
    "AppNexus",
    "AsyncAppNexus",
    "Auth",
    "AppNexusError",
    "ApiError",
    "AuthError",
    "DecodeError",
    "DispatchError",
    "HTTPStatusError",
    "MalformedPathError",
    "ReauthenticationError",
    "ResourceError",
    "SerializationError",
    "Envelope",
    "ListOptions",
    "Page",
    "RateSnapshot",
]
