"""Product schemas for API requests and responses."""
from typing import Any, Optional

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Validated and normalized fields for a new product."""

    name: str = Field(..., min_length=1, description="Product name")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Product price")


class ProductReplace(ProductCreate):
    """Validated and normalized fields for a full update."""

    availability: bool = Field(..., description="Whether the product is available")


class ProductResponse(BaseModel):
    """Schema for product responses. Timestamps are never exposed."""

    id: int = Field(..., examples=[1])
    name: str = Field(..., examples=["Monitor Curvo de 45 Pulgadas"])
    price: float = Field(..., examples=[300])
    availability: bool = Field(..., examples=[True])

    class Config:
        from_attributes = True


class ProductEnvelope(BaseModel):
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    data: list[ProductResponse]


class DeletedEnvelope(BaseModel):
    data: str = Field(..., examples=["Product deleted successfully"])


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Product not found"])


class FieldErrorResponse(BaseModel):
    """One failed validation rule."""

    type: str = "field"
    value: Optional[Any] = None
    msg: str
    path: str
    location: str


class ValidationErrorResponse(BaseModel):
    errors: list[FieldErrorResponse]
