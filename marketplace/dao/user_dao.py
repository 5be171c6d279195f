from typing import List
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.dao.base_dao import BaseDAO
from marketplace.models.user import User
import structlog

logger = structlog.get_logger()


class UserDAO(BaseDAO[User]):
    def __init__(self):
        super().__init__(User)

    async def get_by_product_creator(self, db: AsyncSession, developer_id: str) -> List[User]:
        try:
            result = await db.execute(select(User).where(User.productCreator == developer_id))
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error getting users by product creator", developer_id=developer_id, error=str(e))
            raise


user_dao = UserDAO()
