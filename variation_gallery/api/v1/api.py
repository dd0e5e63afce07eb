from fastapi import APIRouter
from variation_gallery.api.v1.endpoints import gallery, assignment, product, attribute

api_router = APIRouter()

# Storefront routes (no auth required)
api_router.include_router(gallery.router, prefix="/gallery", tags=["gallery"])

# Admin writes are guarded per endpoint (require superuser)
api_router.include_router(assignment.router, prefix="/assignments", tags=["assignments"])

api_router.include_router(product.router, prefix="/catalog", tags=["products"])

api_router.include_router(attribute.router, prefix="/catalog", tags=["attributes"])
