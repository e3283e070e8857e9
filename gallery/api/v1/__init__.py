"""API v1 routes aggregation"""

from fastapi import APIRouter

from .artworks.router import router as artworks_router
from .cart.router import router as cart_router
from .payments.router import router as payments_router
from .orders.router import router as orders_router
from .admin.router import router as admin_router
from .contact.router import router as contact_router
from .newsletter.router import router as newsletter_router
from .social_media.router import router as social_media_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(artworks_router, prefix="/artworks", tags=["Artworks"])
api_router.include_router(cart_router, prefix="/cart", tags=["Cart"])
api_router.include_router(payments_router, tags=["Payments"])
api_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
api_router.include_router(admin_router, prefix="/admin", tags=["Admin"])
api_router.include_router(contact_router, prefix="/contact", tags=["Contact"])
api_router.include_router(newsletter_router, prefix="/newsletter", tags=["Newsletter"])
api_router.include_router(social_media_router, prefix="/social-media", tags=["Social Media"])

# Export router
router = api_router
