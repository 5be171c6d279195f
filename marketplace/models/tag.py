from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from .timestamps import utc_now, timestamp_column


class TagBase(SQLModel):
    title: str = Field(index=True)


class Tag(TagBase, table=True):
    __tablename__ = "Tag"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column())


class TagCreate(TagBase):
    pass


class TagRead(TagBase):
    id: str
