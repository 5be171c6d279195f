from typing import Dict, List, Optional, Iterable, Tuple
from marketplace.models.timestamps import utc_now
from sqlmodel import select, col, or_
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from marketplace.dao.base_dao import BaseDAO
from marketplace.models.product import Product, ProductTag
from marketplace.models.tag import Tag
import structlog

logger = structlog.get_logger()


class ProductDAO(BaseDAO[Product]):
    def __init__(self):
        super().__init__(Product)

    def _tag_links(self, product_id: str, tag_ids: Iterable[str]) -> List[ProductTag]:
        return [
            ProductTag(productId=product_id, tagId=tag_id, position=position)
            for position, tag_id in enumerate(dict.fromkeys(tag_ids))
        ]

    async def create(self, db: AsyncSession, *, obj_in: dict) -> Product:
        """Insert a product and its ordered tag references in one commit."""
        data = dict(obj_in)
        tag_ids = data.pop("tags", None) or []
        try:
            product = Product(**data)
            db.add(product)
            await db.flush()
            links = self._tag_links(product.id, tag_ids)
            db.add_all(links)
            await db.commit()
            await db.refresh(product)
            logger.info("Created Product", id=product.id, tag_count=len(links))
            return product
        except Exception as e:
            await db.rollback()
            logger.error("Error creating Product", error=str(e))
            raise

    async def update(self, db: AsyncSession, *, db_obj: Product, obj_in: dict) -> Product:
        """Apply a sparse patch. A ``tags`` key replaces the whole tag list."""
        data = dict(obj_in)
        product_id = db_obj.id
        try:
            if "tags" in data:
                tag_ids = data.pop("tags") or []
                await db.execute(delete(ProductTag).where(col(ProductTag.productId) == product_id))
                db.add_all(self._tag_links(product_id, tag_ids))

            for field, value in data.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
            db_obj.updatedAt = utc_now()

            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            logger.info("Updated Product", id=product_id, fields=list(obj_in))
            return db_obj
        except Exception as e:
            await db.rollback()
            logger.error("Error updating Product", id=product_id, error=str(e))
            raise

    async def delete(self, db: AsyncSession, *, id: str) -> Optional[Product]:
        try:
            product = await self.get_by_id(db, id)
            if product:
                await db.execute(delete(ProductTag).where(col(ProductTag.productId) == id))
                await db.delete(product)
                await db.commit()
                logger.info("Deleted Product", id=id)
            return product
        except Exception as e:
            await db.rollback()
            logger.error("Error deleting Product", id=id, error=str(e))
            raise

    async def get_names(self, db: AsyncSession) -> List[Tuple[str, str]]:
        try:
            result = await db.execute(select(Product.id, Product.title))
            return [(row[0], row[1]) for row in result.all()]
        except Exception as e:
            logger.error("Error getting product names", error=str(e))
            raise

    async def get_tag_ids(self, db: AsyncSession, product_ids: Iterable[str]) -> Dict[str, List[str]]:
        """Raw tag references per product, dangling ones included."""
        product_ids = list(product_ids)
        tag_ids: Dict[str, List[str]] = {product_id: [] for product_id in product_ids}
        if not product_ids:
            return tag_ids
        try:
            result = await db.execute(
                select(ProductTag.productId, ProductTag.tagId)
                .where(col(ProductTag.productId).in_(product_ids))
                .order_by(ProductTag.productId, ProductTag.position)
            )
            for product_id, tag_id in result.all():
                tag_ids[product_id].append(tag_id)
            return tag_ids
        except Exception as e:
            logger.error("Error getting product tag ids", error=str(e))
            raise

    async def get_tags(self, db: AsyncSession, product_ids: Iterable[str]) -> Dict[str, List[Tag]]:
        """Hydrated tags per product. References to missing tags are dropped."""
        product_ids = list(product_ids)
        tags: Dict[str, List[Tag]] = {product_id: [] for product_id in product_ids}
        if not product_ids:
            return tags
        try:
            result = await db.execute(
                select(ProductTag.productId, Tag)
                .join(Tag, col(Tag.id) == col(ProductTag.tagId))
                .where(col(ProductTag.productId).in_(product_ids))
                .order_by(ProductTag.productId, ProductTag.position)
            )
            for product_id, tag in result.all():
                tags[product_id].append(tag)
            return tags
        except Exception as e:
            logger.error("Error getting product tags", error=str(e))
            raise

    async def search(self, db: AsyncSession, term: str) -> List[Product]:
        """Case-insensitive substring match on title, creator or any tag title.

        Runs as a single statement: tags matching the term feed a subquery of
        linked product ids, which joins the title and creator conditions.
        """
        try:
            matching_tags = select(Tag.id).where(col(Tag.title).icontains(term, autoescape=True))
            tagged_products = select(ProductTag.productId).where(col(ProductTag.tagId).in_(matching_tags))
            result = await db.execute(
                select(Product).where(
                    or_(
                        col(Product.title).icontains(term, autoescape=True),
                        col(Product.productCreator).icontains(term, autoescape=True),
                        col(Product.id).in_(tagged_products),
                    )
                )
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Error searching products", term=term, error=str(e))
            raise


product_dao = ProductDAO()
