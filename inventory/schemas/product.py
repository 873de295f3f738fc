# File: inventory/schemas/product.py

from typing import Optional

from pydantic import BaseModel


class ProductBase(BaseModel):
    name: str
    category: str
    quantity: int
    price: float


class ProductIn(BaseModel):
    """
    Create/update payload.

    Every field is optional at parse time; presence and range are checked
    by the product service.
    """

    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None


class ProductRead(ProductBase):
    id: int

    class Config:
        # Pydantic v2 equivalent of orm_mode=True
        from_attributes = True


class ProductCreated(BaseModel):
    message: str
    productId: int
