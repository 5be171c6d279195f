from typing import Dict, List, Optional
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.core.messages import get_message
from marketplace.dao.category_dao import category_dao
from marketplace.dao.product_dao import product_dao
from marketplace.models.category import CategoryTagsRef, CategoryTitleRef
from marketplace.models.product import (
    Product,
    ProductCreate,
    ProductUpdate,
    ProductRead,
    ProductListItem,
    ProductDetail,
    ProductSearchResult,
    ProductName,
)
from marketplace.models.tag import TagRead
import structlog

logger = structlog.get_logger()


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=get_message("server_error"),
    )


class ProductService:
    def __init__(self):
        self.product_dao = product_dao
        self.category_dao = category_dao

    async def _to_read(self, db: AsyncSession, product: Product) -> ProductRead:
        tag_ids = await self.product_dao.get_tag_ids(db, [product.id])
        return ProductRead(**product.model_dump(), tags=tag_ids[product.id])

    async def _get_or_404(self, db: AsyncSession, product_id: str) -> Product:
        product = await self.product_dao.get_by_id(db, product_id)
        if not product:
            logger.warning("Product not found", product_id=product_id)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=get_message("product_not_found"),
            )
        return product

    async def get_products(self, db: AsyncSession) -> List[ProductListItem]:
        """All products, each category hydrated down to its tag list."""
        try:
            products = await self.product_dao.get_all(db)
            product_ids = [product.id for product in products]
            tag_ids = await self.product_dao.get_tag_ids(db, product_ids)

            category_ids = {product.categoryId for product in products if product.categoryId}
            categories = await self.category_dao.get_by_ids(db, category_ids)
            category_tags = await self.category_dao.get_tag_ids(db, [c.id for c in categories])
            hydrated: Dict[str, CategoryTagsRef] = {
                category.id: CategoryTagsRef(id=category.id, tags=category_tags[category.id])
                for category in categories
            }

            logger.info("Retrieved products", count=len(products))
            return [
                ProductListItem(
                    **product.model_dump(),
                    tags=tag_ids[product.id],
                    category=hydrated.get(product.categoryId),
                )
                for product in products
            ]
        except Exception as e:
            logger.error("Error getting products", error=str(e))
            raise _server_error()

    async def get_product_names(self, db: AsyncSession) -> List[ProductName]:
        try:
            names = await self.product_dao.get_names(db)
            return [ProductName(id=product_id, title=title) for product_id, title in names]
        except Exception as e:
            logger.error("Error getting product names", error=str(e))
            raise _server_error()

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductDetail:
        """One product with its category hydrated down to the title."""
        try:
            product = await self._get_or_404(db, product_id)
            tag_ids = await self.product_dao.get_tag_ids(db, [product.id])

            category: Optional[CategoryTitleRef] = None
            if product.categoryId:
                found = await self.category_dao.get_by_id(db, product.categoryId)
                if found:
                    category = CategoryTitleRef(id=found.id, title=found.title)

            return ProductDetail(**product.model_dump(), tags=tag_ids[product.id], category=category)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error getting product", product_id=product_id, error=str(e))
            raise _server_error()

    async def create_product(self, db: AsyncSession, product_create: ProductCreate) -> ProductRead:
        try:
            product = await self.product_dao.create(db, obj_in=product_create.model_dump())
            logger.info("Product created successfully", product_id=product.id)
            return await self._to_read(db, product)
        except Exception as e:
            logger.error("Error creating product", error=str(e))
            raise _server_error()

    async def update_product(self, db: AsyncSession, product_id: str, product_update: ProductUpdate) -> ProductRead:
        """Apply only the fields the caller sent; everything else is kept."""
        try:
            product = await self._get_or_404(db, product_id)

            update_data = product_update.model_dump(exclude_unset=True)
            if update_data:
                product = await self.product_dao.update(db, db_obj=product, obj_in=update_data)
                logger.info("Product updated successfully", product_id=product_id, fields=list(update_data))

            return await self._to_read(db, product)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error updating product", product_id=product_id, error=str(e))
            raise _server_error()

    async def delete_product(self, db: AsyncSession, product_id: str) -> None:
        try:
            deleted_product = await self.product_dao.delete(db, id=product_id)
            if not deleted_product:
                logger.warning("Product not found for deletion", product_id=product_id)
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=get_message("product_not_found"),
                )
            logger.info("Product deleted successfully", product_id=product_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error deleting product", product_id=product_id, error=str(e))
            raise _server_error()

    async def search_products(self, db: AsyncSession, search_term: str) -> List[ProductSearchResult]:
        try:
            products = await self.product_dao.search(db, search_term)
            if not products:
                logger.info("Product search found nothing", search_term=search_term)
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=get_message("no_search_results"),
                )

            tags = await self.product_dao.get_tags(db, [product.id for product in products])
            logger.info("Searched products", search_term=search_term, count=len(products))
            return [
                ProductSearchResult(
                    **product.model_dump(),
                    tags=[TagRead(id=tag.id, title=tag.title) for tag in tags[product.id]],
                )
                for product in products
            ]
        except HTTPException:
            raise
        except Exception as e:
            logger.error("Error searching products", search_term=search_term, error=str(e))
            raise _server_error()


product_service = ProductService()
