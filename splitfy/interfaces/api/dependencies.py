"""FastAPI dependency utilities."""

from collections.abc import Callable
from functools import lru_cache
import logging
import math

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from splitfy.config import get_settings
from splitfy.domain.entities import User
from splitfy.infrastructure.database import get_db
from splitfy.infrastructure.openai_client import (
    NegotiationAnalysisService,
    OpenAIConfigurationError,
)
from splitfy.infrastructure.rate_limit import SlidingWindowRateLimiter
from splitfy.infrastructure.repositories import UserRepository
from splitfy.infrastructure.security import extract_user_id

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

_CREDENTIALS_ERROR = "Could not validate credentials"


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the user identified by the bearer ``token``."""

    try:
        user_id = extract_user_id(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_CREDENTIALS_ERROR,
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


def get_negotiation_analysis_service() -> NegotiationAnalysisService | None:
    """Return the analysis service, or ``None`` when OpenAI is not configured."""

    try:
        return NegotiationAnalysisService()
    except OpenAIConfigurationError as exc:
        logger.debug("Negotiation analysis disabled: %s", exc)
        return None


@lru_cache
def get_rate_limiter(scope: str) -> SlidingWindowRateLimiter:
    """Return the process wide limiter for ``scope``."""

    settings = get_settings()
    limits = {
        "activity": settings.activity_rate_limit,
        "messages": settings.message_rate_limit,
    }
    if scope not in limits:
        raise KeyError(f"Unknown rate limit scope: {scope}")
    return SlidingWindowRateLimiter(limits[scope], settings.rate_limit_window_seconds)


def rate_limit(scope: str) -> Callable[[User], User]:
    """Build a dependency that rejects callers exceeding the ``scope`` limit."""

    def dependency(current_user: User = Depends(get_current_active_user)) -> User:
        decision = get_rate_limiter(scope).hit(f"{scope}:{current_user.id}")
        if not decision.allowed:
            logger.info("Rate limit %s exceeded by user %s", scope, current_user.id)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests",
                headers={"Retry-After": str(max(1, math.ceil(decision.retry_after)))},
            )
        return current_user

    return dependency


__all__ = [
    "oauth2_scheme",
    "resolve_current_user",
    "get_current_user",
    "get_current_active_user",
    "require_admin",
    "get_negotiation_analysis_service",
    "get_rate_limiter",
    "rate_limit",
]
