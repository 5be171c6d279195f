from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime
import uuid

from .timestamps import utc_now, timestamp_column


class CategoryBase(SQLModel):
    title: str = Field(index=True)
    description: Optional[str] = None


class Category(CategoryBase, table=True):
    __tablename__ = "Category"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column())


class CategoryTag(SQLModel, table=True):
    """Ordered tag reference held by a category. The tag may no longer exist."""
    __tablename__ = "Category_Tag"

    categoryId: str = Field(primary_key=True, foreign_key="Category.id")
    tagId: str = Field(primary_key=True)
    position: int = Field(default=0)


class CategoryCreate(CategoryBase):
    tags: List[str] = Field(default_factory=list)


class CategoryRead(CategoryBase):
    id: str
    tags: List[str] = Field(default_factory=list)
    createdAt: datetime


class CategoryTagsRef(SQLModel):
    """Category hydrated down to its tag list."""
    id: str
    tags: List[str] = Field(default_factory=list)


class CategoryTitleRef(SQLModel):
    """Category hydrated down to its title."""
    id: str
    title: str
