# File: inventory/schemas/category.py

from typing import Optional

from pydantic import BaseModel


class CategoryIn(BaseModel):
    name: Optional[str] = None


class CategoryCreated(BaseModel):
    message: str
    categoryId: int
    categoryName: str
