"""
Google ID token verification through the tokeninfo endpoint.
No local signature check is done, so the aud == client id comparison is the
integrity check; it must stay. Every failure returns None, never raises.
See https://developers.google.com/identity/sign-in/web/backend-auth#calling-the-tokeninfo-endpoint
"""
import logging
from functools import lru_cache
import httpx
from pydantic import BaseModel
from app.config import get_settings

logger = logging.getLogger(__name__)

TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
REQUEST_TIMEOUT_SECONDS = 10.0


class VerifiedIdentity(BaseModel):
    email: str
    name: str | None = None
    picture: str | None = None
    sub: str | None = None


def audience_matches(payload: dict, expected_audience: str) -> bool:
    """Exact string equality; an empty expected audience never matches."""
    aud = payload.get("aud")
    return bool(expected_audience) and isinstance(aud, str) and aud == expected_audience


class GoogleIdentityVerifier:
    def __init__(
        self,
        client_id: str,
        tokeninfo_url: str = TOKENINFO_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.tokeninfo_url = tokeninfo_url
        self._transport = transport

    async def verify(self, id_token: str) -> VerifiedIdentity | None:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=REQUEST_TIMEOUT_SECONDS) as client:
                res = await client.get(self.tokeninfo_url, params={"id_token": id_token})
        except httpx.HTTPError as e:
            logger.warning("Google tokeninfo request failed: %s", e.__class__.__name__)
            return None

        if res.status_code != 200:
            logger.warning("Google tokeninfo rejected token: status %s", res.status_code)
            return None

        try:
            payload = res.json()
        except ValueError:
            logger.warning("Google tokeninfo returned a non-JSON body")
            return None
        if not isinstance(payload, dict):
            logger.warning("Google tokeninfo returned an unexpected body")
            return None

        if not audience_matches(payload, self.client_id):
            logger.warning("Google id_token audience mismatch")
            return None

        email = payload.get("email")
        if not email or not isinstance(email, str):
            logger.warning("Google id_token has no email")
            return None

        return VerifiedIdentity(
            email=email,
            name=_optional_str(payload.get("name")),
            picture=_optional_str(payload.get("picture")),
            sub=_optional_str(payload.get("sub")),
        )


def _optional_str(value) -> str | None:
    return value if isinstance(value, str) and value else None


@lru_cache
def get_identity_verifier() -> GoogleIdentityVerifier:
    settings = get_settings()
    return GoogleIdentityVerifier(settings.google_client_id, tokeninfo_url=settings.google_tokeninfo_url)
