"""Login, token handling and the single reauthentication retry."""

import asyncio
import json

import httpx
import pytest

from appnexus.auth import Auth
from appnexus.errors import ApiError, AuthError, ReauthenticationError
from appnexus.models.deal import DealEnvelope
from appnexus.transport.http import HttpClient

BASE_URL = "http://sand.api.appnexus.com/"

NOAUTH = {"response": {"error_id": "NOAUTH", "error": "Authentication failed - not logged in"}}


def ok(**fields):
    return {"response": {"status": "OK", **fields}}


class FakeServer:
    """Hands out tok-1, tok-2, ... on each login; deal requests follow `deal_replies`."""

    def __init__(self, deal_replies=None, auth_replies=None):
        self.calls: list[tuple[str, str]] = []
        self.deal_replies = list(deal_replies or [])
        self.auth_replies = list(auth_replies or [])
        self.logins = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        self.calls.append((path, request.headers.get("Authorization", "")))
        if path == "auth":
            if self.auth_replies:
                return httpx.Response(200, json=self.auth_replies.pop(0))
            self.logins += 1
            return httpx.Response(
                200,
                json=ok(token=f"body-{self.logins}"),
                headers={"Set-Cookie": f"token=tok-{self.logins}; Path=/"},
            )
        reply = self.deal_replies.pop(0) if self.deal_replies else ok(deal={"id": 1, "name": "d"})
        return httpx.Response(200, json=reply)


def make_http(server, token=None) -> HttpClient:
    async def no_sleep(seconds):
        pass

    return HttpClient(base_url=BASE_URL, token=token, transport=httpx.MockTransport(server), sleep=no_sleep)


class TestLogin:
    @pytest.mark.asyncio
    async def test_token_comes_from_cookie(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            seen["method"] = request.method
            return httpx.Response(
                200, json=ok(token="from-body"), headers={"Set-Cookie": "token=from-cookie; Path=/"},
            )

        http = make_http(handler)
        token = await http.login("alice", "s3cret")

        assert token == "from-cookie"
        assert http.token == "from-cookie"
        assert http.authenticated
        assert http.username == "alice"
        assert seen == {"method": "POST", "body": {"auth": {"username": "alice", "password": "s3cret"}}}

    @pytest.mark.asyncio
    async def test_token_sent_verbatim_afterwards(self):
        server = FakeServer()
        http = make_http(server)
        await http.login("alice", "pw")
        await http.dispatch(http.build_request("GET", "deal"))
        assert server.calls == [("auth", ""), ("deal", "tok-1")]

    @pytest.mark.asyncio
    async def test_falls_back_to_envelope_token(self):
        http = make_http(lambda r: httpx.Response(200, json=ok(token="body-token")))
        assert await http.login("alice", "pw") == "body-token"

    @pytest.mark.asyncio
    async def test_no_token_anywhere(self):
        http = make_http(lambda r: httpx.Response(200, json=ok()))
        with pytest.raises(AuthError):
            await http.login("alice", "pw")
        assert not http.authenticated

    @pytest.mark.asyncio
    async def test_rejected_credentials(self):
        server = FakeServer(auth_replies=[{"response": {"error_id": "UNAUTH", "error": "No match found for user/pass"}}])
        auth = Auth(make_http(server))
        with pytest.raises(AuthError) as exc:
            await auth.login("alice", "wrong")
        assert isinstance(exc.value.__cause__, ApiError)
        assert not auth.authenticated

    @pytest.mark.asyncio
    async def test_noauth_on_auth_path_is_not_retried(self):
        server = FakeServer(auth_replies=[NOAUTH])
        http = make_http(server)
        with pytest.raises(ApiError):
            await http.login("alice", "pw")
        assert server.calls == [("auth", "")]

    @pytest.mark.asyncio
    async def test_logout_forgets_everything(self):
        http = make_http(FakeServer())
        auth = Auth(http)
        await auth.login("alice", "pw")
        auth.logout()
        assert not auth.authenticated
        assert http.username is None


class TestReauthentication:
    @pytest.mark.asyncio
    async def test_noauth_triggers_one_login_and_one_replay(self):
        server = FakeServer(deal_replies=[NOAUTH])
        http = make_http(server)
        await http.login("alice", "pw")

        envelope, payload = await http.dispatch(http.build_request("GET", "deal"), into=DealEnvelope)

        assert payload.response.deal.id == 1
        assert server.calls == [
            ("auth", ""),
            ("deal", "tok-1"),
            ("auth", ""),
            ("deal", "tok-2"),
        ]
        assert http.token == "tok-2"

    @pytest.mark.asyncio
    async def test_write_request_body_is_replayed(self):
        bodies = []
        server = FakeServer(deal_replies=[NOAUTH, ok(id=55)])

        def handler(request):
            if request.url.path == "/deal":
                bodies.append(json.loads(request.content))
            return server(request)

        http = make_http(handler)
        await http.login("alice", "pw")
        envelope, _ = await http.dispatch(http.build_request("POST", "deal", {"deal": {"name": "x"}}))

        assert envelope.response.new_id == 55
        assert bodies == [{"deal": {"name": "x"}}, {"deal": {"name": "x"}}]

    @pytest.mark.asyncio
    async def test_retry_is_bounded(self):
        server = FakeServer(deal_replies=[NOAUTH, NOAUTH, NOAUTH])
        http = make_http(server)
        await http.login("alice", "pw")

        with pytest.raises(ApiError) as exc:
            await http.dispatch(http.build_request("GET", "deal"))

        assert exc.value.error_id == "NOAUTH"
        assert [path for path, _ in server.calls] == ["auth", "deal", "auth", "deal"]

    @pytest.mark.asyncio
    async def test_without_credentials(self):
        server = FakeServer(deal_replies=[NOAUTH])
        http = make_http(server, token="stale")

        with pytest.raises(ReauthenticationError):
            await http.dispatch(http.build_request("GET", "deal"))

        assert server.calls == [("deal", "stale")]
        assert not http.authenticated

    @pytest.mark.asyncio
    async def test_failed_reauthentication_is_wrapped(self):
        server = FakeServer(deal_replies=[NOAUTH])
        http = make_http(server)
        await http.login("alice", "pw")
        server.auth_replies.append({"response": {"error_id": "UNAUTH", "error": "password expired"}})

        with pytest.raises(ReauthenticationError) as exc:
            await http.dispatch(http.build_request("GET", "deal"))

        assert "password expired" in str(exc.value)
        assert isinstance(exc.value.__cause__, ApiError)
        assert [path for path, _ in server.calls] == ["auth", "deal", "auth"]

    @pytest.mark.asyncio
    async def test_other_api_errors_are_not_retried(self):
        server = FakeServer(deal_replies=[{"response": {"error_id": "NOTFOUND", "error": "deal not found"}}])
        http = make_http(server)
        await http.login("alice", "pw")

        with pytest.raises(ApiError):
            await http.dispatch(http.build_request("GET", "deal"))
        assert [path for path, _ in server.calls] == ["auth", "deal"]

    @pytest.mark.asyncio
    async def test_concurrent_noauth_logs_in_once(self):
        server = FakeServer()

        def handler(request):
            # tok-1 has expired server-side; anything else is accepted
            if request.url.path == "/deal" and request.headers.get("Authorization") == "tok-1":
                server.calls.append(("deal", "tok-1"))
                return httpx.Response(200, json=NOAUTH)
            return server(request)

        http = make_http(handler)
        await http.login("alice", "pw")

        results = await asyncio.gather(*[
            http.dispatch(http.build_request("GET", "deal"), into=DealEnvelope) for _ in range(5)
        ])

        assert all(payload.response.deal.id == 1 for _, payload in results)
        assert server.logins == 2
        assert [call for call in server.calls if call[0] == "auth"] == [("auth", ""), ("auth", "")]
        assert server.calls.count(("deal", "tok-1")) == 5
        assert server.calls.count(("deal", "tok-2")) == 5
        assert http.token == "tok-2"
