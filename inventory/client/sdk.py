# File: inventory/client/sdk.py

"""
HTTP client for the inventory API.

Credentials are attached per request by a BearerAuth object owned by the
client instance; it reads the SessionStore at send time, so logging in or
out never touches shared/default headers.
"""

from typing import Any, Optional

import httpx
from loguru import logger

from inventory.client.storage import SessionStore
from inventory.core.errors import ERRORS_BY_CODE, AuthError, InventoryError, UnknownError
from inventory.schemas.product import ProductRead

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class BearerAuth(httpx.Auth):
    """Adds ``Authorization: Bearer <token>`` when the store holds a token."""

    def __init__(self, store: SessionStore):
        self.store = store

    def auth_flow(self, request: httpx.Request):
        if self.store.token:
            request.headers["Authorization"] = f"Bearer {self.store.token}"
        yield request


def error_from_response(response: httpx.Response) -> InventoryError:
    """Map an error response onto the shared exception classes."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = body.get("message") or GENERIC_ERROR_MESSAGE
    if response.status_code in (401, 403):
        return AuthError(message, status_code=response.status_code)

    error_cls = ERRORS_BY_CODE.get(body.get("code"))
    if error_cls is None:
        return UnknownError(message, status_code=response.status_code)
    return error_cls(message, status_code=response.status_code)


class InventoryClient:
    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        store: Optional[SessionStore] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10,
    ):
        self.store = store if store is not None else SessionStore()
        self.http = http if http is not None else httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.auth = BearerAuth(self.store)

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, *, authenticated: bool = True, **kwargs) -> Any:
        try:
            response = self.http.request(
                method,
                path,
                auth=self.auth if authenticated else None,
                **kwargs,
            )
        except httpx.HTTPError as exc:
            # connection refused, timeouts and other transport failures
            logger.warning("{} {} failed: {}", method, path, exc)
            raise UnknownError(GENERIC_ERROR_MESSAGE) from exc

        if response.is_success:
            try:
                return response.json()
            except ValueError as exc:
                logger.warning("{} {} returned a non-JSON body", method, path)
                raise UnknownError(GENERIC_ERROR_MESSAGE) from exc

        error = error_from_response(response)
        if authenticated and isinstance(error, AuthError):
            # stale or rejected token: drop it so the caller re-authenticates
            logger.warning("Session rejected ({}): {}", response.status_code, error.message)
            self.store.clear()
        raise error

    # -----------------------
    # Auth
    # -----------------------
    def register(self, username: str, password: str) -> dict:
        return self._request(
            "POST",
            "/api/auth/register",
            authenticated=False,
            json={"username": username, "password": password},
        )

    def login(self, username: str, password: str) -> str:
        data = self._request(
            "POST",
            "/api/auth/login",
            authenticated=False,
            json={"username": username, "password": password},
        )
        self.store.save(data["token"], data["username"])
        return data["username"]

    def logout(self) -> None:
        self.store.clear()

    def profile(self) -> dict:
        return self._request("GET", "/api/auth/profile")["user"]

    # -----------------------
    # Products
    # -----------------------
    def list_products(self) -> list[ProductRead]:
        return [ProductRead(**p) for p in self._request("GET", "/api/products")]

    def create_product(self, name: str, category: str, quantity: int, price: float) -> int:
        data = self._request(
            "POST",
            "/api/products",
            json={"name": name, "category": category, "quantity": quantity, "price": price},
        )
        return data["productId"]

    def update_product(self, product_id: int, name: str, category: str, quantity: int, price: float) -> dict:
        return self._request(
            "PUT",
            f"/api/products/{product_id}",
            json={"name": name, "category": category, "quantity": quantity, "price": price},
        )

    def delete_product(self, product_id: int) -> dict:
        return self._request("DELETE", f"/api/products/{product_id}")

    def reset_products(self) -> dict:
        return self._request("DELETE", "/api/products")

    # -----------------------
    # Categories
    # -----------------------
    def add_category(self, name: str) -> dict:
        return self._request("POST", "/api/products/category/add", json={"name": name})

    def list_categories(self) -> list[str]:
        return self._request("GET", "/api/products/categories/list")
