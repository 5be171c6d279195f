from typing import Dict, List, Iterable
from sqlmodel import select, col
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.dao.base_dao import BaseDAO
from marketplace.models.category import Category, CategoryTag
import structlog

logger = structlog.get_logger()


class CategoryDAO(BaseDAO[Category]):
    def __init__(self):
        super().__init__(Category)

    async def create(self, db: AsyncSession, *, obj_in: dict) -> Category:
        data = dict(obj_in)
        tag_ids = list(dict.fromkeys(data.pop("tags", None) or []))
        try:
            category = Category(**data)
            db.add(category)
            await db.flush()
            db.add_all([
                CategoryTag(categoryId=category.id, tagId=tag_id, position=position)
                for position, tag_id in enumerate(tag_ids)
            ])
            await db.commit()
            await db.refresh(category)
            logger.info("Created Category", id=category.id, tag_count=len(tag_ids))
            return category
        except Exception as e:
            await db.rollback()
            logger.error("Error creating Category", error=str(e))
            raise

    async def get_tag_ids(self, db: AsyncSession, category_ids: Iterable[str]) -> Dict[str, List[str]]:
        category_ids = list(category_ids)
        tag_ids: Dict[str, List[str]] = {category_id: [] for category_id in category_ids}
        if not category_ids:
            return tag_ids
        try:
            result = await db.execute(
                select(CategoryTag.categoryId, CategoryTag.tagId)
                .where(col(CategoryTag.categoryId).in_(category_ids))
                .order_by(CategoryTag.categoryId, CategoryTag.position)
            )
            for category_id, tag_id in result.all():
                tag_ids[category_id].append(tag_id)
            return tag_ids
        except Exception as e:
            logger.error("Error getting category tag ids", error=str(e))
            raise


category_dao = CategoryDAO()
