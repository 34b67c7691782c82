"""Root API router."""

from fastapi import APIRouter

from localguide.api.endpoints import places, reviews, site_config, stores

router = APIRouter()

router.include_router(places.router)
router.include_router(reviews.router)
router.include_router(stores.router)
router.include_router(site_config.router)
