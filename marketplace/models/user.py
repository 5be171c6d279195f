from sqlmodel import SQLModel, Field
from pydantic import EmailStr
from typing import Optional
from datetime import datetime
import uuid

from .timestamps import utc_now, timestamp_column


class UserBase(SQLModel):
    userName: Optional[str] = None
    email: Optional[str] = Field(default=None, unique=True, index=True)
    name: Optional[str] = None
    address: Optional[str] = None
    companyName: Optional[str] = None
    companyUrl: Optional[str] = None
    linkedInUrl: Optional[str] = None
    twitterUrl: Optional[str] = None
    userImg: Optional[str] = None
    plan: Optional[str] = None
    productCreator: Optional[str] = Field(default=None, index=True)


class User(UserBase, table=True):
    __tablename__ = "User"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    createdAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column(), nullable=False)
    updatedAt: datetime = Field(default_factory=utc_now, sa_type=timestamp_column(), nullable=False)


class UserRead(UserBase):
    id: str
    createdAt: datetime
    updatedAt: datetime


class CompanyInfoUpdate(SQLModel):
    companyName: Optional[str] = None
    companyUrl: Optional[str] = None


class SocialProfileUpdate(SQLModel):
    linkedInUrl: Optional[str] = None
    twitterUrl: Optional[str] = None


class UserInfoUpdate(SQLModel):
    userName: Optional[str] = None
    email: Optional[EmailStr] = None


class NameLocationUpdate(SQLModel):
    name: Optional[str] = None
    address: Optional[str] = None


class PlanUpdate(SQLModel):
    plan: str
