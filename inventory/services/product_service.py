# File: inventory/services/product_service.py

"""
Product and category operations.

All functions take the request's SQLAlchemy session and commit their own
writes. Concurrent updates to the same row are last-write-wins.
"""

import math

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory.core.errors import ConflictError, NotFoundError, ValidationError
from inventory.models.category import Category
from inventory.models.product import Product
from inventory.schemas.product import ProductIn


# -----------------------------
# Validation
# -----------------------------
def validate_product(payload: ProductIn) -> None:
    """
    Presence check on all four fields plus a range check on the numbers.

    Zero quantity and zero price are valid; only absent values and
    negatives are rejected.
    """
    blank_text = not (payload.name and payload.name.strip()) or not (
        payload.category and payload.category.strip()
    )
    if blank_text or payload.quantity is None or payload.price is None:
        raise ValidationError("All fields are required")

    if payload.quantity < 0:
        raise ValidationError("Quantity must be a non-negative integer")
    if not math.isfinite(payload.price) or payload.price < 0:
        raise ValidationError("Price must be a non-negative number")


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


# -----------------------------
# Products
# -----------------------------
def list_products(db: Session) -> list[Product]:
    return db.query(Product).order_by(Product.id.desc()).all()


def create_product(db: Session, payload: ProductIn) -> Product:
    validate_product(payload)

    product = Product(
        name=payload.name,
        category=payload.category,
        quantity=payload.quantity,
        price=payload.price,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info("Created product {} ({!r})", product.id, product.name)
    return product


def update_product(db: Session, product_id: int, payload: ProductIn) -> Product:
    validate_product(payload)
    product = _get_product_or_404(db, product_id)

    product.name = payload.name
    product.category = payload.category
    product.quantity = payload.quantity
    product.price = payload.price
    db.commit()
    db.refresh(product)

    logger.info("Updated product {}", product_id)
    return product


def delete_product(db: Session, product_id: int) -> None:
    product = _get_product_or_404(db, product_id)
    db.delete(product)
    db.commit()
    logger.info("Deleted product {}", product_id)


def reset_products(db: Session) -> int:
    """Remove every product row. Irreversible."""
    removed = db.query(Product).delete(synchronize_session=False)
    db.commit()
    logger.warning("Reset inventory: {} products removed", removed)
    return removed


# -----------------------------
# Categories
# -----------------------------
def add_category(db: Session, name: str | None) -> Category:
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("Category name is required")

    category = Category(name=normalized)
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Category already exists")
    db.refresh(category)

    logger.info("Added category {!r} (id={})", category.name, category.id)
    return category


def list_categories(db: Session) -> list[str]:
    rows = (
        db.query(Category.name)
        .order_by(func.lower(Category.name), Category.name)
        .all()
    )
    return [name for (name,) in rows]
