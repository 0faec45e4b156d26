from typing import Any, Dict, Optional
import httpx
from loguru import logger

from pathwise.core.config import Settings
from pathwise.core.exceptions import UnauthenticatedError, UpstreamUnavailableError
from pathwise.schemas.user import FederatedAttempt

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_ISSUERS = {"accounts.google.com", "https://accounts.google.com"}


class GoogleIdentityClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.client = httpx.AsyncClient(timeout=10.0, transport=transport)

    @classmethod
    def from_settings(cls, config: Settings) -> "GoogleIdentityClient":
        return cls(config.GOOGLE_CLIENT_ID, config.GOOGLE_CLIENT_SECRET)

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        """
        Exchange an OAuth authorization code for a Google ID token.
        """
        try:
            response = await self.client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
        except httpx.RequestError as e:
            raise UpstreamUnavailableError() from e

        if response.status_code != 200:
            logger.info(f"Google rejected authorization code with status {response.status_code}")
            raise UnauthenticatedError()

        id_token = response.json().get("id_token")
        if not id_token:
            raise UnauthenticatedError()
        return id_token

    async def verify_id_token(self, id_token: str) -> FederatedAttempt:
        """
        Verify a Google ID token and return the verified email as a sign-in attempt.
        """
        try:
            response = await self.client.get(
                GOOGLE_TOKENINFO_URL,
                params={"id_token": id_token},
            )
        except httpx.RequestError as e:
            raise UpstreamUnavailableError() from e

        if response.status_code != 200:
            logger.info(f"Google rejected ID token with status {response.status_code}")
            raise UnauthenticatedError()

        claims: Dict[str, Any] = response.json()
        if claims.get("aud") != self.client_id:
            raise UnauthenticatedError()
        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise UnauthenticatedError()
        # tokeninfo reports booleans as strings
        if str(claims.get("email_verified")).lower() != "true" or not claims.get("email"):
            raise UnauthenticatedError()

        return FederatedAttempt(email=claims["email"], display_name=claims.get("name") or "")

    async def close(self):
        await self.client.aclose()
