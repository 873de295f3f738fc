"""
Client SDK and application state, driven against the real API through
the FastAPI TestClient.
"""

import os
import stat
from datetime import timedelta

import httpx
import pytest

from inventory.client.app import AppState, InventoryApp, Notification
from inventory.client.sdk import GENERIC_ERROR_MESSAGE, InventoryClient
from inventory.client.storage import SessionStore
from inventory.core.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    UnknownError,
    ValidationError,
)
from inventory.core.security import create_access_token


@pytest.fixture
def logged_in(api_client):
    api_client.register("carol", "pw")
    api_client.login("carol", "pw")
    return api_client


# -----------------------
# SessionStore
# -----------------------
def test_session_store_persists_between_instances(tmp_path):
    path = tmp_path / "session.json"
    SessionStore(path).save("tok", "carol")

    reloaded = SessionStore(path)
    assert reloaded.token == "tok"
    assert reloaded.username == "carol"

    reloaded.clear()
    assert not path.exists()
    assert not SessionStore(path).is_authenticated


def test_session_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert SessionStore(path).token is None


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_session_file_is_owner_only(tmp_path):
    path = tmp_path / "session.json"
    SessionStore(path).save("tok", "carol")
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


# -----------------------
# SDK
# -----------------------
def test_login_saves_token_on_the_instance(api_client):
    api_client.register("carol", "pw")
    assert api_client.login("carol", "pw") == "carol"
    assert api_client.store.token
    assert api_client.profile()["username"] == "carol"


def test_credentials_are_scoped_to_each_client(client, logged_in):
    other = InventoryClient(store=SessionStore(path=None), http=client)
    with pytest.raises(AuthError) as exc_info:
        other.list_products()
    assert exc_info.value.status_code == 401
    # the logged in client is unaffected
    assert logged_in.list_products() == []


def test_sdk_maps_error_codes(logged_in):
    with pytest.raises(ValidationError):
        logged_in.create_product("", "Tools", 1, 1.0)
    with pytest.raises(NotFoundError) as exc_info:
        logged_in.delete_product(12345)
    assert exc_info.value.message == "Product not found"

    logged_in.add_category("Tools")
    with pytest.raises(ConflictError):
        logged_in.add_category("Tools")


def test_bad_login_keeps_no_session(api_client):
    with pytest.raises(AuthError) as exc_info:
        api_client.login("ghost", "pw")
    assert exc_info.value.message == "Invalid credentials"
    assert api_client.store.token is None


def test_rejected_token_clears_store(api_client):
    api_client.store.save("garbage", "carol")
    with pytest.raises(AuthError) as exc_info:
        api_client.list_products()
    assert exc_info.value.status_code == 403
    assert api_client.store.token is None


def test_end_to_end_crud(api_client):
    api_client.register("dave", "pw")
    api_client.login("dave", "pw")

    product_id = api_client.create_product("Widget", "Tools", 5, 9.99)
    assert api_client.list_products()[0].id == product_id

    api_client.update_product(product_id, "Widget XL", "Tools", 7, 12.5)
    updated = api_client.list_products()[0]
    assert (updated.name, updated.quantity, updated.price) == ("Widget XL", 7, 12.5)

    api_client.delete_product(product_id)
    assert all(p.id != product_id for p in api_client.list_products())


# -----------------------
# InventoryApp
# -----------------------
def test_app_starts_unauthenticated_without_token(api_client):
    app = InventoryApp(api_client)
    assert app.start() == AppState.UNAUTHENTICATED


def test_app_login_loads_products(api_client):
    api_client.register("erin", "pw")
    app = InventoryApp(api_client)

    assert app.login("erin", "pw")
    assert app.state == AppState.READY
    assert app.username == "erin"
    assert app.products == []


def test_app_rejects_empty_login_form(api_client):
    app = InventoryApp(api_client)
    assert not app.login("", "")
    assert app.notification.message == "Please fill in all fields"


def test_app_surfaces_server_message_on_bad_login(api_client):
    app = InventoryApp(api_client)
    assert not app.login("nobody", "pw")
    assert app.state == AppState.UNAUTHENTICATED
    assert app.notification.kind == "error"
    assert app.notification.message == "Invalid credentials"


def test_app_edit_cycle(api_client):
    api_client.register("erin", "pw")
    app = InventoryApp(api_client)
    app.login("erin", "pw")

    assert app.submit_product("Widget", "Tools", 5, 9.99)
    assert app.notification.message == '"Widget" added successfully!'
    product = app.products[0]

    app.begin_edit(product.id)
    assert app.state == AppState.EDITING

    assert app.submit_product("Widget", "Tools", 6, 9.99)
    assert app.state == AppState.READY
    assert app.editing is None
    assert app.products[0].quantity == 6

    assert app.delete_product(product.id)
    assert app.products == []
    assert app.notification.message == '"Widget" deleted successfully!'


def test_app_cancel_edit(api_client):
    api_client.register("erin", "pw")
    app = InventoryApp(api_client)
    app.login("erin", "pw")
    app.submit_product("Widget", "Tools", 5, 9.99)

    app.begin_edit(app.products[0].id)
    app.cancel_edit()
    assert app.state == AppState.READY
    assert app.editing is None


def test_app_validation_error_keeps_session(api_client):
    api_client.register("erin", "pw")
    app = InventoryApp(api_client)
    app.login("erin", "pw")

    assert not app.submit_product("Widget", "Tools", -1, 9.99)
    assert app.state == AppState.READY
    assert app.notification.message == "Quantity must be a non-negative integer"
    app.dismiss()
    assert app.notification is None


def test_app_reset_all_and_categories(api_client):
    api_client.register("erin", "pw")
    app = InventoryApp(api_client)
    app.login("erin", "pw")
    app.submit_product("A", "Tools", 1, 1)
    app.submit_product("B", "Tools", 1, 1)

    assert app.reset_all()
    assert app.products == []

    assert app.add_category("  Garden ") == "Garden"
    assert app.categories == ["Garden"]
    assert app.add_category("Garden") is None
    assert app.notification.message == "Category already exists"


def test_expired_token_resets_app_in_place(client):
    store = SessionStore(path=None)
    expired = create_access_token({"userId": 1, "username": "frank"}, expires_delta=timedelta(seconds=-1))
    store.save(expired, "frank")
    app = InventoryApp(InventoryClient(store=store, http=client))

    assert app.start() == AppState.UNAUTHENTICATED
    assert store.token is None
    assert app.products == []
    assert app.notification.message == "Invalid or expired token"


# -----------------------
# Transport failures and refetch errors
# -----------------------
def test_unreachable_server_raises_unknown_error():
    sdk = InventoryClient(base_url="http://127.0.0.1:1", store=SessionStore(path=None), timeout=2)
    with pytest.raises(UnknownError) as exc_info:
        sdk.login("carol", "pw")
    assert exc_info.value.message == GENERIC_ERROR_MESSAGE
    assert isinstance(exc_info.value.__cause__, httpx.HTTPError)


def test_unreachable_server_becomes_notification():
    store = SessionStore(path=None)
    store.save("tok", "carol")
    app = InventoryApp(InventoryClient(base_url="http://127.0.0.1:1", store=store, timeout=2))

    app.start()

    assert app.notification.kind == "error"
    assert app.notification.message == GENERIC_ERROR_MESSAGE
    # a network failure is not an auth failure: the session survives
    assert store.token == "tok"


def test_non_json_success_body_becomes_unknown_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>ok</html>"))
    sdk = InventoryClient(
        store=SessionStore(path=None),
        http=httpx.Client(transport=transport, base_url="http://inventory.test"),
    )
    sdk.store.save("tok", "carol")

    app = InventoryApp(sdk)
    app.start()
    assert app.notification.kind == "error"
    assert app.notification.message == GENERIC_ERROR_MESSAGE


def _expire_session_on_refetch(monkeypatch, api_client):
    fetch = api_client.list_products

    def list_with_revoked_token():
        api_client.store.save("garbage", api_client.store.username)
        return fetch()

    monkeypatch.setattr(api_client, "list_products", list_with_revoked_token)


def test_auth_failure_on_refetch_after_delete_is_reported(monkeypatch, api_client):
    api_client.register("gina", "pw")
    app = InventoryApp(api_client)
    app.login("gina", "pw")
    app.submit_product("W", "Tools", 1, 1.0)
    product_id = app.products[0].id

    _expire_session_on_refetch(monkeypatch, api_client)
    assert app.delete_product(product_id)

    assert app.state == AppState.UNAUTHENTICATED
    assert app.notification == Notification("error", "Invalid or expired token")


def test_auth_failure_on_refetch_after_reset_is_reported(monkeypatch, api_client):
    api_client.register("gina", "pw")
    app = InventoryApp(api_client)
    app.login("gina", "pw")

    _expire_session_on_refetch(monkeypatch, api_client)
    assert app.reset_all()

    assert app.state == AppState.UNAUTHENTICATED
    assert app.notification == Notification("error", "Invalid or expired token")
