from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.database import get_async_session
from marketplace.core.messages import get_message
from marketplace.core.security import validate_request
from marketplace.services.user_service import user_service
from marketplace.models.developer import DeveloperRead
from marketplace.models.user import (
    UserRead,
    CompanyInfoUpdate,
    SocialProfileUpdate,
    UserInfoUpdate,
    NameLocationUpdate,
    PlanUpdate,
)
from marketplace.schemas.user_schemas import MessageResponse, ProfileImageResponse
from typing import List, Optional
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserRead)
async def get_user(
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.get_user(db, current_user.get("user_id"))


@router.put("/me/company", response_model=UserRead)
async def edit_company_info(
    changes: CompanyInfoUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.update_field_group(db, current_user.get("user_id"), changes)


@router.put("/me/social", response_model=UserRead)
async def edit_social_profile(
    changes: SocialProfileUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.update_field_group(db, current_user.get("user_id"), changes)


@router.put("/me/info", response_model=UserRead)
async def edit_user_info(
    changes: UserInfoUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.update_field_group(db, current_user.get("user_id"), changes)


@router.put("/me/name-location", response_model=UserRead)
async def edit_name_and_location(
    changes: NameLocationUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.update_field_group(db, current_user.get("user_id"), changes)


@router.put("/me/plan", response_model=UserRead)
async def edit_plan(
    changes: PlanUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.update_field_group(db, current_user.get("user_id"), changes)


@router.put("/me/image", response_model=ProfileImageResponse)
async def edit_profile_image(
    file: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    """Upload a new profile image (multipart field ``file``)"""
    user_id = current_user.get("user_id")
    content = await file.read() if file is not None else b""
    if not content:
        logger.warning("Profile image update without a file", user_id=user_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=get_message("no_image_file"),
        )

    return await user_service.update_profile_image(db, user_id, content, file.content_type)


@router.get("/developers", response_model=List[DeveloperRead])
async def get_developers(
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await user_service.get_developers(db)


@router.get("/templates", response_model=List[UserRead])
async def get_templates_by_developer(
    developerId: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    """Users whose productCreator points at the given developer"""
    return await user_service.get_templates_by_developer(db, developerId)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    logger.info("Deleting user", user_id=user_id, requested_by=current_user.get("user_id"))
    await user_service.delete_user(db, user_id)
    return MessageResponse(message=get_message("user_deleted"))
