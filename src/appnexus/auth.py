"""
Auth module — username/password login against the `auth` service.

The session token comes back as a cookie and is then sent verbatim in the
Authorization header. Credentials stay in memory so an expired session can be
renewed without the caller noticing.
"""

from appnexus.errors import AppNexusError, AuthError
from appnexus.transport.http import HttpClient


class Auth:
    def __init__(self, http: HttpClient):
        self._http = http

    @property
    def authenticated(self) -> bool:
        return self._http.authenticated

    async def login(self, username: str, password: str) -> str:
        """Log in and return the session token."""
        try:
            return await self._http.login(username, password)
        except AuthError:
            raise
        except AppNexusError as e:
            raise AuthError(f"Login failed for {username}: {e}") from e

    def logout(self) -> None:
        """Forget the token and the stored credentials."""
        self._http.logout()
