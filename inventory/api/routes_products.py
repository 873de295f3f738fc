# File: inventory/api/routes_products.py

"""
Product and category routes.

The whole router sits behind ``get_current_user`` (see api.py).
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory.api.deps import get_db
from inventory.schemas.category import CategoryCreated, CategoryIn
from inventory.schemas.product import ProductCreated, ProductIn, ProductRead
from inventory.schemas.user import MessageResponse
from inventory.services import product_service

router = APIRouter()


@router.get("", response_model=list[ProductRead], summary="List products, newest first")
def list_products(db: Session = Depends(get_db)):
    return product_service.list_products(db)


@router.post(
    "",
    response_model=ProductCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    product = product_service.create_product(db, payload)
    return {"message": "Product added successfully", "productId": product.id}


@router.put("/{product_id}", response_model=MessageResponse, summary="Update product")
def update_product(product_id: int, payload: ProductIn, db: Session = Depends(get_db)):
    product_service.update_product(db, product_id, payload)
    return {"message": "Product updated successfully"}


@router.delete("/{product_id}", response_model=MessageResponse, summary="Delete product")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    product_service.delete_product(db, product_id)
    return {"message": "Product deleted successfully"}


@router.delete("", response_model=MessageResponse, summary="Delete ALL products")
def reset_products(db: Session = Depends(get_db)):
    product_service.reset_products(db)
    return {"message": "All products deleted successfully"}


# -----------------------------
# Categories
# -----------------------------
@router.post(
    "/category/add",
    response_model=CategoryCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Add category",
)
def add_category(payload: CategoryIn, db: Session = Depends(get_db)):
    category = product_service.add_category(db, payload.name)
    return {
        "message": "Category added successfully",
        "categoryId": category.id,
        "categoryName": category.name,
    }


@router.get("/categories/list", response_model=list[str], summary="Category names A-Z")
def list_categories(db: Session = Depends(get_db)):
    return product_service.list_categories(db)
