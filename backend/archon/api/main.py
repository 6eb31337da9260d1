from fastapi import APIRouter

from archon.api.routes import reviews

api_router = APIRouter()
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
