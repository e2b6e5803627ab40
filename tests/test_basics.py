"""Basic unit tests for the appnexus package."""

from appnexus import (
    AppNexus,
    AsyncAppNexus,
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
    __version__,
)
from appnexus.transport.http import DEFAULT_BASE_URL, USER_AGENT


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert AppNexus is not None
    assert AsyncAppNexus is not None


def test_error_hierarchy():
    for cls in (
        ApiError, AuthError, DecodeError, DispatchError, HTTPStatusError,
        MalformedPathError, ResourceError, SerializationError,
    ):
        assert issubclass(cls, AppNexusError)
    assert issubclass(ReauthenticationError, AuthError)


def test_error_attributes():
    err = AppNexusError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    api = ApiError("SYNTAX", "invalid service", error_code="E1")
    assert str(api) == "AppNexus [SYNTAX]: invalid service"
    assert api.error_id == "SYNTAX"
    assert api.code == "SYNTAX"
    assert api.details == {"error_description": None, "error_code": "E1"}

    http = HTTPStatusError(429, "Too Many Requests", {"retry-after": "1"}, retry_after=1.0)
    assert http.status_code == 429
    assert "429 Too Many Requests" in str(http)
    assert http.retry_after == 1.0

    reauth = ReauthenticationError("bad password")
    assert str(reauth) == "Could not reauthenticate: bad password"
    assert reauth.code == "reauth_error"


def test_client_defaults():
    client = AsyncAppNexus(base_url="http://sand.api.appnexus.com/")
    assert str(client.http.base_url) == "http://sand.api.appnexus.com/"
    assert client.http.user_agent == USER_AGENT
    assert not client.http.authenticated
    assert client.rate.read_limit == 0
    assert DEFAULT_BASE_URL.startswith("https://")
