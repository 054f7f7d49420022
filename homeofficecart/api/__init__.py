# homeofficecart/api/__init__.py
from fastapi import APIRouter

from homeofficecart.api.routers import health, products, carts, orders

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
