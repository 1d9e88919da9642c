"""HTTP transport shared by the live adapters."""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import (
    AuthenticationError,
    RemoteProtocolError,
    SourceConnectionError,
    TransportTimeout,
)
from ..models.profile import AdapterProfile, AuthKind

logger = logging.getLogger(__name__)

# Refresh OAuth tokens this many seconds before they expire.
TOKEN_EXPIRY_MARGIN = 30


class HttpTransport:
    """
    Blocking ``requests`` session wrapped for use from coroutines.

    Supports:
    - Basic and OAuth2 client-credentials authentication
    - Retry with backoff on throttling and server errors
    - Mapping of transport failures to typed errors
    """

    def __init__(
        self,
        profile: AdapterProfile,
        session: Optional[requests.Session] = None,
        max_retries: int = 3,
        backoff_factor: float = 1.0,
    ):
        """
        Initialize the transport.

        Args:
            profile: Connection profile (base URL, auth kind, credentials)
            session: Custom requests session
            max_retries: Retries for idempotent requests
            backoff_factor: Exponential backoff factor between retries
        """
        if not profile.url:
            raise SourceConnectionError(f"Profile {profile.name} has no base URL", profile=profile.name)
        self.profile = profile
        self.base_url = profile.url
        self._session = session or self._create_session(max_retries, backoff_factor)
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    def _create_session(self, max_retries: int, backoff_factor: float) -> requests.Session:
        """Create a requests session with retry logic."""
        session = requests.Session()

        retries = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
        )

        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        return session

    @property
    def _timeout_seconds(self) -> float:
        return (self.profile.timeout_ms or 30000) / 1000

    def _fetch_token(self) -> str:
        """Run the OAuth2 client-credentials grant, caching the token until it expires."""
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        creds = self.profile.credentials
        if not creds or not creds.token_url:
            raise AuthenticationError("OAuth2 profile without token URL", profile=self.profile.name)

        try:
            response = self._session.post(
                creds.token_url,
                data={"grant_type": "client_credentials"},
                auth=(creds.client_id or "", creds.client_secret or ""),
                timeout=self._timeout_seconds,
            )
        except requests.exceptions.Timeout:
            raise TransportTimeout("oauth2.token", self.profile.timeout_ms or 30000) from None
        except requests.exceptions.RequestException as e:
            raise SourceConnectionError("Token endpoint unreachable", profile=self.profile.name, cause=e) from e

        if response.status_code in (400, 401, 403):
            raise AuthenticationError("Token request rejected", profile=self.profile.name)
        if response.status_code >= 400:
            raise RemoteProtocolError("Token endpoint error", response.status_code, response.text[:500])

        payload = response.json()
        self._token = payload["access_token"]
        self._token_expires_at = time.monotonic() + float(payload.get("expires_in", 3600)) - TOKEN_EXPIRY_MARGIN
        logger.debug(f"Obtained OAuth2 token for profile {self.profile.name}")
        return self._token

    def _get_auth(self) -> Dict[str, Any]:
        """Keyword arguments carrying authentication for one request."""
        creds = self.profile.credentials
        if self.profile.auth_kind == AuthKind.BASIC and creds:
            return {"auth": (creds.username or "", creds.password or "")}
        if self.profile.auth_kind == AuthKind.OAUTH2:
            return {"headers": {"Authorization": f"Bearer {self._fetch_token()}"}}
        return {}

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform one blocking request and decode the JSON body.

        Raises:
            TransportTimeout: The request exceeded the profile timeout
            SourceConnectionError: The host could not be reached
            AuthenticationError: The remote rejected the credentials
            RemoteProtocolError: Any other error status or an undecodable body
        """
        url = path if path.startswith("http") else f"{self.base_url}/{path.lstrip('/')}"
        kwargs = self._get_auth()
        headers = {"Accept": "application/json", **kwargs.pop("headers", {})}
        if self.profile.client:
            headers["sap-client"] = self.profile.client

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self._timeout_seconds,
                **kwargs,
            )
        except requests.exceptions.Timeout:
            raise TransportTimeout(f"{method} {path}", self.profile.timeout_ms or 30000) from None
        except requests.exceptions.RequestException as e:
            raise SourceConnectionError(f"Request to {self.profile.name} failed", profile=self.profile.name, cause=e) from e

        if response.status_code in (401, 403):
            raise AuthenticationError(f"Credentials rejected by {self.profile.name}", profile=self.profile.name)
        if response.status_code >= 400:
            raise RemoteProtocolError(
                f"HTTP {response.status_code} from {self.profile.name}",
                status_code=response.status_code,
                response=response.text[:500],
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteProtocolError("Response is not valid JSON", response.status_code, response.text[:500]) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Non-blocking GET."""
        return await asyncio.to_thread(self.request, "GET", path, params)

    async def post(self, path: str, json_body: Optional[Dict[str, Any]] = None) -> Any:
        """Non-blocking POST."""
        return await asyncio.to_thread(self.request, "POST", path, None, json_body)

    def close(self) -> None:
        self._session.close()
