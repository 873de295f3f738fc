# File: inventory/client/views.py

"""
Presentation transforms for the product list.

Search, category filter, column sort and the totals row all run over the
already-fetched list; none of them has a server-side counterpart.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Union

from inventory.schemas.product import ProductRead

ALL_CATEGORIES = "all"
SORTABLE_FIELDS = ("id", "name", "category", "quantity", "price")


@dataclass(frozen=True)
class SelectOption:
    value: str
    label: str


def normalize_options(options: Iterable[Union[str, SelectOption, Mapping[str, str]]]) -> list[SelectOption]:
    """Collapse a strings-or-objects option list into SelectOptions."""
    normalized = []
    for opt in options:
        if isinstance(opt, SelectOption):
            normalized.append(opt)
        elif isinstance(opt, str):
            normalized.append(SelectOption(value=opt, label=opt))
        else:
            value = opt["value"]
            normalized.append(SelectOption(value=value, label=opt.get("label", value)))
    return normalized


@dataclass(frozen=True)
class InventoryStats:
    total_items: int
    total_value: float


@dataclass
class ProductListView:
    search: str = ""
    category_filter: str = ALL_CATEGORIES
    sort_field: str = "id"
    sort_direction: str = "asc"

    def toggle_sort(self, field: str) -> None:
        """Same column flips direction; a new column starts ascending."""
        if field not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort by {field!r}")
        if field == self.sort_field:
            self.sort_direction = "desc" if self.sort_direction == "asc" else "asc"
        else:
            self.sort_field = field
            self.sort_direction = "asc"

    def matches(self, product: ProductRead) -> bool:
        term = self.search.lower()
        matches_search = (
            not term
            or term in product.name.lower()
            or term in product.category.lower()
        )
        matches_category = (
            self.category_filter == ALL_CATEGORIES
            or product.category == self.category_filter
        )
        return matches_search and matches_category

    def visible(self, products: Sequence[ProductRead]) -> list[ProductRead]:
        return [p for p in products if self.matches(p)]

    def apply(self, products: Sequence[ProductRead]) -> list[ProductRead]:
        def sort_key(product: ProductRead):
            value = getattr(product, self.sort_field)
            # strings sort case-insensitively, ties by raw value
            return (value.casefold(), value) if isinstance(value, str) else value

        return sorted(
            self.visible(products),
            key=sort_key,
            reverse=self.sort_direction == "desc",
        )

    def stats(self, products: Sequence[ProductRead]) -> InventoryStats:
        """Totals over the rows that pass search and filter."""
        shown = self.visible(products)
        return InventoryStats(
            total_items=sum(p.quantity for p in shown),
            total_value=round(sum(p.price * p.quantity for p in shown), 2),
        )

    @staticmethod
    def filter_options(categories: Iterable[str]) -> list[SelectOption]:
        return normalize_options([ALL_CATEGORIES, *categories])
