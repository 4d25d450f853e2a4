"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, health, products, users

api_router = APIRouter()

# Registration, login, token identity
api_router.include_router(auth.router)

# Admin-only user listing
api_router.include_router(users.router)

# Owned product CRUD
api_router.include_router(products.router)

# Liveness / database probe
api_router.include_router(health.router)
