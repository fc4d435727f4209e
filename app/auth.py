import time
import logging
from functools import lru_cache
from jose import JWTError, jwt
from pydantic import ValidationError
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import get_settings
from app.errors import Unauthenticated
from app.schemas.user import SessionClaims

logger = logging.getLogger(__name__)

# auto_error=False: a missing header or non-Bearer scheme reaches us as None,
# so the 401 body stays uniform.
security = HTTPBearer(auto_error=False)


class SessionTokenCodec:
    """
    Signs and verifies session tokens ({userId, email, exp}).
    Secret and algorithm are fixed at construction; verify only accepts that algorithm.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", default_ttl_seconds: int = 60 * 60 * 24 * 7):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._default_ttl = default_ttl_seconds

    def issue(self, user_id: str, email: str, ttl_seconds: int | None = None) -> str:
        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        payload = {
            "userId": user_id,
            "email": email,
            "exp": int(time.time()) + ttl,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaims | None:
        """Return the claims, or None for a bad signature, wrong algorithm, malformed or expired token."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True, "leeway": 0},
            )
            claims = SessionClaims.model_validate(payload, strict=True)
        except (JWTError, ValidationError):
            return None
        # jose accepts exp == now; a token is dead from its exp second on
        if claims.exp <= int(time.time()):
            return None
        return claims


@lru_cache
def get_session_codec() -> SessionTokenCodec:
    settings = get_settings()
    return SessionTokenCodec(
        settings.secret_key,
        algorithm=settings.algorithm,
        default_ttl_seconds=settings.session_token_expire_seconds,
    )


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    codec: SessionTokenCodec = Depends(get_session_codec),
) -> str:
    """Bearer session token -> user id. Every failure is the same 401."""
    if not credentials:
        raise Unauthenticated()
    claims = codec.verify(credentials.credentials)
    if not claims:
        raise Unauthenticated()
    return claims.userId


def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    codec: SessionTokenCodec = Depends(get_session_codec),
) -> str | None:
    """For anonymous-capable reads: None when no valid session token is presented."""
    if not credentials:
        return None
    claims = codec.verify(credentials.credentials)
    if not claims:
        logger.debug("Ignoring invalid session token on optional-auth route")
        return None
    return claims.userId
