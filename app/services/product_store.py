"""Product persistence gateway used by the product routes."""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError, StoreError
from app.models.product import Product
from app.schemas.product import ProductCreate, ProductReplace

logger = logging.getLogger(__name__)

# Range of a signed 64-bit INTEGER column
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


class ProductStore:
    """
    Reads and writes products through one database session.

    Mutating operations expect the caller to have checked existence with
    get_by_id first. A row that disappears in between raises NotFoundError;
    every other database failure is rolled back and raised as StoreError.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Product store '{operation}' failed: {e}")
            raise StoreError(operation, str(e)) from e

    def _require(self, product_id: int) -> Product:
        product = self._get(product_id)
        if product is None:
            raise NotFoundError()
        return product

    def _get(self, product_id: int) -> Optional[Product]:
        if not MIN_ID <= product_id <= MAX_ID:
            return None
        return self.db.get(Product, product_id)

    def list(self) -> List[Product]:
        """Return all products, newest id first."""
        with self._guard("list"):
            return self.db.query(Product).order_by(Product.id.desc()).all()

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product, or None when no row has this id."""
        with self._guard("get_by_id"):
            return self._get(product_id)

    def create(self, fields: ProductCreate) -> Product:
        """Insert a new, available product."""
        with self._guard("create"):
            product = Product(name=fields.name, price=fields.price, availability=True)
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        logger.info(f"Created product {product.id}")
        return product

    def replace(self, product_id: int, fields: ProductReplace) -> Product:
        """Overwrite name, price and availability of an existing product."""
        with self._guard("replace"):
            product = self._require(product_id)
            product.name = fields.name
            product.price = fields.price
            product.availability = fields.availability
            self.db.commit()
            self.db.refresh(product)
        logger.info(f"Replaced product {product_id}")
        return product

    def toggle_availability(self, product_id: int) -> Product:
        """Flip availability relative to the stored value."""
        with self._guard("toggle_availability"):
            product = self._require(product_id)
            product.availability = not product.availability
            self.db.commit()
            self.db.refresh(product)
        logger.info(f"Product {product_id} availability set to {product.availability}")
        return product

    def delete(self, product_id: int) -> None:
        """Permanently remove a product."""
        with self._guard("delete"):
            product = self._require(product_id)
            self.db.delete(product)
            self.db.commit()
        logger.info(f"Deleted product {product_id}")


def get_product_store(db: Session = Depends(get_db)) -> ProductStore:
    """Dependency for the request-scoped product store."""
    return ProductStore(db)
