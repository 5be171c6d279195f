from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel
from marketplace.core.messages import get_message
from marketplace.dao.developer_dao import developer_dao
from marketplace.dao.user_dao import user_dao
from marketplace.models.developer import DeveloperRead
from marketplace.models.user import User, UserRead
from marketplace.sao.storage_sao import StorageError, storage_sao
from marketplace.schemas.user_schemas import ProfileImageResponse
import time
import structlog

logger = structlog.get_logger()

PROFILE_IMAGE_PREFIX = "profileImages"


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=get_message("server_error"),
    )


def profile_image_key(user_id: str) -> str:
    """Object key for a profile image: ``profileImages/<userId>-<epoch millis>``."""
    return f"{PROFILE_IMAGE_PREFIX}/{user_id}-{int(time.time() * 1000)}"


class UserService:
    def __init__(self):
        self.user_dao = user_dao
        self.developer_dao = developer_dao
        self.storage_sao = storage_sao

    async def _get_or_404(self, db: AsyncSession, user_id: str) -> User:
        user = await self.user_dao.get_by_id(db, user_id)
        if not user:
            logger.warning("User not found", user_id=user_id)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=get_message("user_not_found"),
            )
        return user

    async def get_user(self, db: AsyncSession, user_id: str) -> UserRead:
        try:
            user = await self._get_or_404(db, user_id)
            return UserRead.model_validate(user)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error getting user", user_id=user_id, error=str(e))
            raise _server_error()

    async def update_field_group(self, db: AsyncSession, user_id: str, changes: SQLModel) -> UserRead:
        """Write one field group onto the caller's record.

        Only fields present in the request are written, so a group sent with a
        single field leaves its sibling untouched.
        """
        try:
            user = await self._get_or_404(db, user_id)

            update_data = changes.model_dump(exclude_unset=True)
            if update_data:
                user = await self.user_dao.update(db, db_obj=user, obj_in=update_data)
                logger.info("User updated", user_id=user_id, fields=list(update_data))

            return UserRead.model_validate(user)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error updating user", user_id=user_id, error=str(e))
            raise _server_error()

    async def update_profile_image(
        self,
        db: AsyncSession,
        user_id: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> ProfileImageResponse:
        """Upload a new profile image and point the user record at it.

        If the record cannot be saved after the upload succeeded, the uploaded
        object is removed again before the error is returned.
        """
        user = await self._get_or_404(db, user_id)
        key = profile_image_key(user.id)

        try:
            image_url = await self.storage_sao.upload(key, content, content_type)
        except StorageError as e:
            logger.error("Profile image upload failed", user_id=user_id, key=key, error=str(e))
            raise _server_error()

        try:
            await self.user_dao.update(db, db_obj=user, obj_in={"userImg": image_url})
        except Exception as e:
            logger.error("Saving profile image URL failed, removing upload", user_id=user_id, key=key, error=str(e))
            await self._discard_upload(key)
            raise _server_error()

        logger.info("Profile image updated", user_id=user_id, key=key)
        return ProfileImageResponse(message=get_message("profile_image_updated"), imageUrl=image_url)

    async def _discard_upload(self, key: str) -> None:
        try:
            await self.storage_sao.delete(key)
        except StorageError as e:
            # blob is orphaned from here on
            logger.error("Could not remove orphaned upload", key=key, error=str(e))

    async def delete_user(self, db: AsyncSession, user_id: str) -> None:
        try:
            deleted_user = await self.user_dao.delete(db, id=user_id)
            if not deleted_user:
                logger.warning("User not found for deletion", user_id=user_id)
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=get_message("user_not_found"),
                )
            logger.info("User deleted", user_id=user_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error deleting user", user_id=user_id, error=str(e))
            raise _server_error()

    async def get_templates_by_developer(self, db: AsyncSession, developer_id: str) -> List[UserRead]:
        try:
            templates = await self.user_dao.get_by_product_creator(db, developer_id)
            logger.info("Retrieved templates", developer_id=developer_id, count=len(templates))
            return [UserRead.model_validate(template) for template in templates]
        except Exception as e:
            logger.error("Error getting templates", developer_id=developer_id, error=str(e))
            raise _server_error()

    async def get_developers(self, db: AsyncSession) -> List[DeveloperRead]:
        try:
            developers = await self.developer_dao.get_all(db)
            return [DeveloperRead.model_validate(developer) for developer in developers]
        except Exception as e:
            logger.error("Error getting developers", error=str(e))
            raise _server_error()


user_service = UserService()
