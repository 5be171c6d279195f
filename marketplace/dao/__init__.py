# Export all DAO classes
from .base_dao import BaseDAO
from .product_dao import product_dao
from .category_dao import category_dao
from .tag_dao import tag_dao
from .user_dao import user_dao
from .developer_dao import developer_dao

__all__ = [
    "BaseDAO",
    "product_dao",
    "category_dao",
    "tag_dao",
    "user_dao",
    "developer_dao",
]
