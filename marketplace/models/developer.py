from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
import uuid

from .timestamps import utc_now, timestamp_column


class DeveloperBase(SQLModel):
    name: str
    jobTitle: Optional[str] = None
    bio: Optional[str] = None
    imgUrl: Optional[str] = None


class Developer(DeveloperBase, table=True):
    __tablename__ = "Developer"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column())


class DeveloperRead(DeveloperBase):
    id: str
    createdAt: datetime
