from typing import List
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.messages import get_message
from marketplace.dao.category_dao import category_dao
from marketplace.dao.tag_dao import tag_dao
from marketplace.models.category import CategoryCreate, CategoryRead
from marketplace.models.tag import TagCreate, TagRead
import structlog

logger = structlog.get_logger()


class CatalogService:
    """Categories and tags that products point at."""

    def __init__(self):
        self.category_dao = category_dao
        self.tag_dao = tag_dao

    async def get_categories(self, db: AsyncSession) -> List[CategoryRead]:
        try:
            categories = await self.category_dao.get_all(db)
            tag_ids = await self.category_dao.get_tag_ids(db, [category.id for category in categories])
            return [
                CategoryRead(**category.model_dump(), tags=tag_ids[category.id])
                for category in categories
            ]
        except Exception as e:
            logger.error("Error getting categories", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=get_message("server_error"),
            )

    async def create_category(self, db: AsyncSession, category_create: CategoryCreate) -> CategoryRead:
        try:
            category = await self.category_dao.create(db, obj_in=category_create.model_dump())
            tag_ids = await self.category_dao.get_tag_ids(db, [category.id])
            logger.info("Category created", category_id=category.id)
            return CategoryRead(**category.model_dump(), tags=tag_ids[category.id])
        except Exception as e:
            logger.error("Error creating category", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=get_message("server_error"),
            )

    async def get_tags(self, db: AsyncSession) -> List[TagRead]:
        try:
            tags = await self.tag_dao.get_all(db)
            return [TagRead.model_validate(tag) for tag in tags]
        except Exception as e:
            logger.error("Error getting tags", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=get_message("server_error"),
            )

    async def create_tag(self, db: AsyncSession, tag_create: TagCreate) -> TagRead:
        try:
            tag = await self.tag_dao.create(db, obj_in=tag_create.model_dump())
            logger.info("Tag created", tag_id=tag.id)
            return TagRead.model_validate(tag)
        except Exception as e:
            logger.error("Error creating tag", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=get_message("server_error"),
            )


catalog_service = CatalogService()
