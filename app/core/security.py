"""Identity token verification. Tokens are issued by the external identity provider."""
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> dict | None:
    """Verify signature/expiry and return the claims; None if the token is invalid."""
    settings = get_settings()
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as exc:
        logger.debug("Rejected identity token: %s", exc)
        return None


def user_id_from_token(token: str | None) -> str | None:
    """Return the `sub` claim of a valid token, else None."""
    if not token:
        return None
    claims = decode_access_token(token)
    if not claims:
        return None
    sub = claims.get("sub")
    if not sub:
        return None
    return str(sub)


def create_access_token(subject: str, expires_minutes: int = 60, extra: dict | None = None) -> str:
    """Sign a token the way the identity provider does (used by tests and local tooling)."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {"sub": str(subject), "exp": expire}
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
