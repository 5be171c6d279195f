from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.database import get_async_session
from marketplace.core.messages import get_message
from marketplace.core.security import validate_request, validate_catalog_read
from marketplace.services.product_service import product_service
from marketplace.models.product import (
    ProductCreate,
    ProductUpdate,
    ProductRead,
    ProductListItem,
    ProductDetail,
    ProductSearchResult,
    ProductName,
)
from marketplace.schemas.user_schemas import MessageResponse
from typing import List
import structlog

logger = structlog.get_logger()

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[ProductListItem])
async def get_products(
    db: AsyncSession = Depends(get_async_session),
    reader=Depends(validate_catalog_read),
):
    """List every product with its category's tag list"""
    return await product_service.get_products(db)


@router.get("/names", response_model=List[ProductName])
async def get_product_names(
    db: AsyncSession = Depends(get_async_session),
    reader=Depends(validate_catalog_read),
):
    """List {id, title} pairs for pickers"""
    return await product_service.get_product_names(db)


@router.get("/search", response_model=List[ProductSearchResult])
async def search_products(
    searchTerm: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_async_session),
    reader=Depends(validate_catalog_read),
):
    """Keyword search over title, creator and tag titles"""
    return await product_service.search_products(db, searchTerm)


@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(
    product_id: str,
    db: AsyncSession = Depends(get_async_session),
    reader=Depends(validate_catalog_read),
):
    return await product_service.get_product(db, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    logger.info("Creating product", user_id=current_user.get("user_id"))
    return await product_service.create_product(db, product)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    product_update: ProductUpdate,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    """Patch a product with only the fields present in the body"""
    return await product_service.update_product(db, product_id, product_update)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_async_session),
    current_user=Depends(validate_request),
):
    await product_service.delete_product(db, product_id)
    return MessageResponse(message=get_message("product_deleted"))
