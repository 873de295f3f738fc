# File: inventory/client/app.py

"""
Client application state.

    UNAUTHENTICATED --login--> LOADING --> READY <--> EDITING

A stored token counts as "authenticated" on start without a round trip.
An expired token surfaces on the next call: the AuthError resets the app
to UNAUTHENTICATED in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loguru import logger

from inventory.client.sdk import GENERIC_ERROR_MESSAGE, InventoryClient
from inventory.client.views import ProductListView
from inventory.core.errors import AuthError, InventoryError
from inventory.schemas.product import ProductRead


class AppState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    READY = "ready"
    EDITING = "editing"


@dataclass(frozen=True)
class Notification:
    kind: str  # "success" | "error"
    message: str


class InventoryApp:
    def __init__(self, client: InventoryClient):
        self.client = client
        self.state = AppState.UNAUTHENTICATED
        self.products: list[ProductRead] = []
        self.categories: list[str] = []
        self.editing: Optional[ProductRead] = None
        self.view = ProductListView()
        self.notification: Optional[Notification] = None

    @property
    def username(self) -> Optional[str]:
        return self.client.store.username

    @property
    def is_authenticated(self) -> bool:
        return self.state != AppState.UNAUTHENTICATED

    # -----------------------
    # Notifications
    # -----------------------
    def notify(self, kind: str, message: str) -> None:
        self.notification = Notification(kind, message)

    def dismiss(self) -> None:
        self.notification = None

    def _reset_session(self) -> None:
        self.client.store.clear()
        self.state = AppState.UNAUTHENTICATED
        self.products = []
        self.categories = []
        self.editing = None

    def _call(self, action: Callable, fallback: str = GENERIC_ERROR_MESSAGE):
        """
        Run one API call. Errors become an error notification and the call
        returns None; an AuthError also drops the session.
        """
        try:
            return action()
        except AuthError as exc:
            logger.warning("Authentication failed, returning to login: {}", exc.message)
            if self.is_authenticated:
                self._reset_session()
            self.notify("error", exc.message or fallback)
        except InventoryError as exc:
            self.notify("error", exc.message or fallback)
        return None

    # -----------------------
    # Session
    # -----------------------
    def start(self) -> AppState:
        if self.client.store.is_authenticated:
            self.state = AppState.LOADING
            self.refresh()
        return self.state

    def register(self, username: str, password: str) -> bool:
        if not username or not password:
            self.notify("error", "Please fill in all fields")
            return False
        result = self._call(lambda: self.client.register(username, password), "Error registering")
        if result is None:
            return False
        self.notify("success", "Registration successful. Please sign in.")
        return True

    def login(self, username: str, password: str) -> bool:
        if not username or not password:
            self.notify("error", "Please fill in all fields")
            return False
        if self._call(lambda: self.client.login(username, password), "Error logging in") is None:
            return False
        self.state = AppState.LOADING
        self.refresh()
        return self.is_authenticated

    def logout(self) -> None:
        self._reset_session()

    # -----------------------
    # Products
    # -----------------------
    def refresh(self) -> None:
        self.state = AppState.LOADING if self.state != AppState.EDITING else self.state
        products = self._call(self.client.list_products, "Error fetching products")
        if products is None:
            if self.is_authenticated:
                self.state = AppState.EDITING if self.editing else AppState.READY
            return
        self.products = products
        categories = self._call(self.client.list_categories, "Error fetching categories")
        if categories is not None:
            self.categories = sorted(set(categories) | set(self.categories), key=str.casefold)
        if self.is_authenticated:
            self.state = AppState.EDITING if self.editing else AppState.READY

    def visible_products(self) -> list[ProductRead]:
        return self.view.apply(self.products)

    def begin_edit(self, product_id: int) -> None:
        self.editing = next((p for p in self.products if p.id == product_id), None)
        if self.editing is not None:
            self.state = AppState.EDITING

    def cancel_edit(self) -> None:
        self.editing = None
        if self.is_authenticated:
            self.state = AppState.READY

    def submit_product(self, name: str, category: str, quantity: int, price: float) -> bool:
        """Create a product, or save the one being edited."""
        if self.editing is not None:
            product_id = self.editing.id
            result = self._call(
                lambda: self.client.update_product(product_id, name, category, quantity, price),
                "Error saving product. Please try again.",
            )
            if result is None:
                return False
            self.editing = None
            self.notify("success", f'"{name}" updated successfully!')
        else:
            result = self._call(
                lambda: self.client.create_product(name, category, quantity, price),
                "Error saving product. Please try again.",
            )
            if result is None:
                return False
            self.notify("success", f'"{name}" added successfully!')
        self.refresh()
        return True

    def delete_product(self, product_id: int) -> bool:
        target = next((p for p in self.products if p.id == product_id), None)
        if self._call(lambda: self.client.delete_product(product_id), "Error deleting product") is None:
            return False
        # drop locally first, then reconcile with the server
        self.products = [p for p in self.products if p.id != product_id]
        if self.editing is not None and self.editing.id == product_id:
            self.editing = None
        label = target.name if target is not None else f"Product {product_id}"
        # posted before the refetch so an auth failure there replaces it
        self.notify("success", f'"{label}" deleted successfully!')
        self.refresh()
        return True

    def reset_all(self) -> bool:
        if self._call(self.client.reset_products, "Error resetting products") is None:
            return False
        self.editing = None
        self.notify("success", "All products deleted")
        self.refresh()
        return True

    def add_category(self, name: str) -> Optional[str]:
        result = self._call(lambda: self.client.add_category(name), "Failed to add category")
        if result is None:
            return None
        added = result["categoryName"]
        if added not in self.categories:
            self.categories = sorted([*self.categories, added], key=str.casefold)
        self.notify("success", f'Category "{added}" added successfully!')
        return added
