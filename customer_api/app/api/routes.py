from fastapi import APIRouter
from . import customers, addresses, health

api_router = APIRouter(prefix="/api")

# Include all route modules
api_router.include_router(health.router)
api_router.include_router(customers.router)
api_router.include_router(addresses.router)
