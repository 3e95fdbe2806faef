"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, Request, status

from splitfy.domain.entities import User
from splitfy.interfaces.api.schemas import PublicProfileRead, UserRead


def http_error_from(exc: Exception) -> HTTPException:
    """Translate a use case exception into the matching HTTP error."""

    if isinstance(exc, PermissionError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    detail = str(exc)
    if "not found" in detail.lower():
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def client_details(request: Request) -> tuple[str | None, str | None]:
    """Return the caller's ip address and user agent."""

    ip_address = request.client.host if request.client else None
    return ip_address, request.headers.get("user-agent")


def to_user_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        display_name=user.display_name,
        profile_image_url=user.profile_image_url,
        bio=user.bio,
        skills=list(user.skills or []),
        preferences=dict(user.preferences or {}),
        contact_info=dict(user.contact_info or {}),
        role=user.role,
        is_active=user.is_active,
        subscription_status=user.subscription_status,
        subscription_tier=user.subscription_tier,
        profile_completeness=user.profile_completeness(),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def to_public_profile(user: User) -> PublicProfileRead:
    location = (user.contact_info or {}).get("location")
    return PublicProfileRead(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        display_name=user.display_name,
        profile_image_url=user.profile_image_url,
        bio=user.bio,
        skills=list(user.skills or []),
        location=str(location) if location else None,
    )


__all__ = ["http_error_from", "client_details", "to_user_read", "to_public_profile"]
