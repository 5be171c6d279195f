from sqlmodel import SQLModel, Field
from pydantic import field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from .timestamps import utc_now, timestamp_column

from .category import CategoryTagsRef, CategoryTitleRef
from .tag import TagRead


class ProductBase(SQLModel):
    title: str = Field(index=True)
    description: Optional[str] = None
    categoryId: Optional[str] = Field(default=None, index=True)
    productCreator: Optional[str] = Field(default=None, index=True)
    privateURL: Optional[str] = None
    privateTemplate: Optional[str] = None
    price: float
    uploadVideoUrl: Optional[str] = None
    uploadImgUrl: Optional[str] = None


class Product(ProductBase, table=True):
    __tablename__ = "Product"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column())
    updatedAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column())


class ProductTag(SQLModel, table=True):
    """Ordered tag reference held by a product. The tag may no longer exist."""
    __tablename__ = "Product_Tag"

    productId: str = Field(primary_key=True, foreign_key="Product.id")
    tagId: str = Field(primary_key=True, index=True)
    position: int = Field(default=0)


class ProductCreate(ProductBase):
    tags: List[str] = Field(default_factory=list)


class ProductUpdate(SQLModel):
    """Sparse patch: only fields present in the request body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    categoryId: Optional[str] = None
    tags: Optional[List[str]] = None
    productCreator: Optional[str] = None
    privateURL: Optional[str] = None
    privateTemplate: Optional[str] = None
    price: Optional[float] = None
    uploadVideoUrl: Optional[str] = None
    uploadImgUrl: Optional[str] = None

    @field_validator("title", "price")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("field may not be null")
        return value


class ProductRead(ProductBase):
    id: str
    tags: List[str] = Field(default_factory=list)
    createdAt: datetime
    updatedAt: datetime


class ProductListItem(ProductRead):
    category: Optional[CategoryTagsRef] = None


class ProductDetail(ProductRead):
    category: Optional[CategoryTitleRef] = None


class ProductSearchResult(ProductBase):
    id: str
    tags: List[TagRead] = Field(default_factory=list)
    createdAt: datetime
    updatedAt: datetime


class ProductName(SQLModel):
    id: str
    title: str
