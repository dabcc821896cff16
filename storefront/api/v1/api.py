from fastapi import APIRouter

from storefront.api.v1.routers import restaurant as restaurant_router
from storefront.api.v1.routers import checkout as checkout_router
from storefront.api.v1.routers import admin_config as admin_config_router

router = APIRouter()

# public routes
router.include_router(restaurant_router.router)
router.include_router(checkout_router.router)

# admin routes
router.include_router(admin_config_router.router)
