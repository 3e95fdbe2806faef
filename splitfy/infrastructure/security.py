"""Bearer token helpers.

Tokens are issued by the identity provider in front of the API; the backend
only needs to validate them and read the ``sub`` claim.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from splitfy.config import get_settings

ALGORITHM = "HS256"

settings = get_settings()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def extract_user_id(token: str) -> int:
    """Return the user id carried by ``token``'s ``sub`` claim."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = ["create_access_token", "decode_access_token", "extract_user_id"]
