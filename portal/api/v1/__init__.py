"""API v1 routes."""

from fastapi import APIRouter

from portal.api.v1 import auth, cep, health, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(cep.router, prefix="/cep", tags=["cep"])
