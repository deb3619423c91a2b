"""Envelopes for product responses."""
from typing import Iterable

from app.models.product import Product
from app.schemas.product import (
    DeletedEnvelope,
    MessageResponse,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ValidationErrorResponse,
)

DELETED_MESSAGE = "Product deleted successfully"

# OpenAPI descriptions shared by the id-addressed routes
INVALID_ID_RESPONSE = {400: {"model": ValidationErrorResponse, "description": "Bad request - Invalid ID"}}
INVALID_INPUT_RESPONSE = {
    400: {"model": ValidationErrorResponse, "description": "Bad request - Invalid ID or input data"}
}
NOT_FOUND_RESPONSE = {404: {"model": MessageResponse, "description": "Product not found"}}


def product_envelope(product: Product) -> ProductEnvelope:
    return ProductEnvelope(data=ProductResponse.model_validate(product))


def product_list_envelope(products: Iterable[Product]) -> ProductListEnvelope:
    return ProductListEnvelope(
        data=[ProductResponse.model_validate(product) for product in products]
    )


def deleted_envelope() -> DeletedEnvelope:
    return DeletedEnvelope(data=DELETED_MESSAGE)
