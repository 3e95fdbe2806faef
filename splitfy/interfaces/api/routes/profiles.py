"""Routes for the authenticated user's profile and public profiles."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from splitfy.application.use_cases.users import (
    get_public_profile as get_public_profile_uc,
    update_profile as update_profile_uc,
    update_profile_image as update_profile_image_uc,
)
from splitfy.domain.entities import User
from splitfy.infrastructure.database import get_db
from splitfy.infrastructure.storage import (
    build_object_path,
    is_storage_configured,
    upload_object,
)
from splitfy.interfaces.api.dependencies import get_current_active_user
from splitfy.interfaces.api.routes_helpers import (
    http_error_from,
    to_public_profile,
    to_user_read,
)
from splitfy.interfaces.api.schemas import (
    ProfileImageUpdate,
    ProfileUpdate,
    PublicProfileRead,
    UploadedObjectRead,
    UserRead,
)

router = APIRouter(tags=["profiles"])
logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@router.get("/auth/user", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the profile of the authenticated user."""

    return to_user_read(current_user)


@router.patch("/profile", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = update_profile_uc(
            db, user_id=current_user.id, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.put("/profile/image", response_model=UserRead)
def update_profile_image(
    payload: ProfileImageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        user = update_profile_image_uc(
            db, user_id=current_user.id, image_url=payload.image_url
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_user_read(user)


@router.post(
    "/objects/upload",
    response_model=UploadedObjectRead,
    status_code=status.HTTP_201_CREATED,
)
def upload_profile_object(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_active_user),
):
    """Store an uploaded image in blob storage and return its URL."""

    if not is_storage_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Object storage is not configured",
        )
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image uploads are supported",
        )

    data = file.file.read()
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The file exceeds the maximum upload size",
        )

    path = build_object_path(current_user.id, file.filename)
    try:
        url = upload_object(path, data, content_type=file.content_type)
    except Exception as exc:
        logger.exception("Upload of %s failed", path)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="The file could not be stored",
        ) from exc
    return UploadedObjectRead(url=url, path=path)


@router.get("/users/{user_id}/profile", response_model=PublicProfileRead)
def read_public_profile(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return another user's public profile, recording the view."""

    try:
        user = get_public_profile_uc(db, profile_id=user_id, viewer_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_public_profile(user)


__all__ = ["router"]
