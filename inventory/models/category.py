# File: inventory/models/category.py

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory.models.base import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
