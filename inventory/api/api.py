from fastapi import APIRouter, Depends

from inventory.api.deps import get_current_user
from inventory.api.routes_auth import router as auth_router
from inventory.api.routes_products import router as products_router


api_router = APIRouter()

# open
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])

# protected
api_router.include_router(
    products_router,
    prefix="/products",
    tags=["products"],
    dependencies=[Depends(get_current_user)],
)
