"""Expose API endpoint routers."""

from localguide.api.endpoints import places, reviews, site_config, stores

__all__ = ["places", "reviews", "site_config", "stores"]
