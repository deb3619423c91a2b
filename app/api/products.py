"""Product CRUD API endpoints."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from app.api.responses import (
    INVALID_ID_RESPONSE,
    INVALID_INPUT_RESPONSE,
    NOT_FOUND_RESPONSE,
    deleted_envelope,
    product_envelope,
    product_list_envelope,
)
from app.exceptions import NotFoundError
from app.schemas.product import (
    DeletedEnvelope,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductReplace,
)
from app.services.product_store import ProductStore, get_product_store
from app.services.validation import (
    CREATE_RULES,
    ID_RULES,
    REPLACE_RULES,
    as_number,
    as_text,
    to_boolean,
    validate,
)

router = APIRouter(prefix="/api/products", tags=["products"])


def _existing_id(product_id: str, store: ProductStore) -> int:
    """Resolve a validated path id to a stored product id, or raise NotFoundError."""
    pk = int(product_id)
    if store.get_by_id(pk) is None:
        raise NotFoundError()
    return pk


@router.get("", response_model=ProductListEnvelope, summary="Get a list of products")
def list_products(store: ProductStore = Depends(get_product_store)):
    """Return every product, highest id first."""
    return product_list_envelope(store.list())


@router.get(
    "/{product_id}",
    response_model=ProductEnvelope,
    summary="Get a product by ID",
    responses={**INVALID_ID_RESPONSE, **NOT_FOUND_RESPONSE},
)
def get_product(product_id: str, store: ProductStore = Depends(get_product_store)):
    """Get a single product by ID."""
    validate(ID_RULES, params={"id": product_id})
    product = store.get_by_id(int(product_id))
    if product is None:
        raise NotFoundError()

    return product_envelope(product)


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=201,
    summary="Create a new product",
    responses=INVALID_INPUT_RESPONSE,
)
def create_product(
    payload: Optional[Dict[str, Any]] = Body(
        None, examples=[{"name": "Monitor Curvo 49 Pulgadas", "price": 399}]
    ),
    store: ProductStore = Depends(get_product_store),
):
    """
    Create a new product.

    The name must not be empty and the price must be a number greater than 0.
    New products are always available.
    """
    body = payload or {}
    validate(CREATE_RULES, body=body)

    fields = ProductCreate(name=as_text(body["name"]), price=as_number(body["price"]))
    return product_envelope(store.create(fields))


@router.put(
    "/{product_id}",
    response_model=ProductEnvelope,
    summary="Update a product",
    responses={**INVALID_INPUT_RESPONSE, **NOT_FOUND_RESPONSE},
)
def replace_product(
    product_id: str,
    payload: Optional[Dict[str, Any]] = Body(
        None, examples=[{"name": "Monitor Curvo 49 Pulgadas", "price": 399, "availability": True}]
    ),
    store: ProductStore = Depends(get_product_store),
):
    """
    Replace name, price and availability of a product.

    All three fields are required; the id never changes.
    """
    body = payload or {}
    validate(REPLACE_RULES, params={"id": product_id}, body=body)
    pk = _existing_id(product_id, store)

    fields = ProductReplace(
        name=as_text(body["name"]),
        price=as_number(body["price"]),
        availability=to_boolean(body["availability"]),
    )
    return product_envelope(store.replace(pk, fields))


@router.patch(
    "/{product_id}",
    response_model=ProductEnvelope,
    summary="Toggle product availability",
    responses={**INVALID_ID_RESPONSE, **NOT_FOUND_RESPONSE},
)
def toggle_availability(product_id: str, store: ProductStore = Depends(get_product_store)):
    """Invert the stored availability of a product."""
    validate(ID_RULES, params={"id": product_id})
    pk = _existing_id(product_id, store)

    return product_envelope(store.toggle_availability(pk))


@router.delete(
    "/{product_id}",
    response_model=DeletedEnvelope,
    summary="Delete a product",
    responses={**INVALID_ID_RESPONSE, **NOT_FOUND_RESPONSE},
)
def delete_product(product_id: str, store: ProductStore = Depends(get_product_store)):
    """Delete a single product."""
    validate(ID_RULES, params={"id": product_id})
    pk = _existing_id(product_id, store)

    store.delete(pk)
    return deleted_envelope()
