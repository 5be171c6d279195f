from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.database import get_async_session
from marketplace.core.security import validate_request, validate_catalog_read
from marketplace.services.catalog_service import catalog_service
from marketplace.models.category import CategoryCreate, CategoryRead
from marketplace.models.tag import TagCreate, TagRead
from typing import List

router = APIRouter(tags=["Catalog"])


@router.get("/categories", response_model=List[CategoryRead])
async def get_categories(
    db: AsyncSession = Depends(get_async_session),
    reader=Depends(validate_catalog_read),
):
    return await catalog_service.get_categories(db)


@router.post("/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await catalog_service.create_category(db, category)


@router.get("/tags", response_model=List[TagRead])
async def get_tags(
    db: AsyncSession = Depends(get_async_session),
    reader=Depends(validate_catalog_read),
):
    return await catalog_service.get_tags(db)


@router.post("/tags", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag: TagCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    return await catalog_service.create_tag(db, tag)
