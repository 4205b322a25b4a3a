from fastapi import APIRouter

from src.buildor.api.v1 import admin, auth, checkout, invites, portal, site

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(portal.router)
api_router.include_router(invites.router)
api_router.include_router(admin.router)
api_router.include_router(checkout.router)
api_router.include_router(site.router)
