"""Site configuration endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from localguide.api.deps import get_site_config_store
from localguide.core.errors import GuideError
from localguide.services.site_config import SiteConfigStore

router = APIRouter(prefix="/config", tags=["config"])


@router.get("", response_model=dict[str, Any])
def read_config(config_store: SiteConfigStore = Depends(get_site_config_store)) -> dict[str, Any]:
    try:
        return config_store.load()
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("")
def save_config(
    payload: Optional[dict[str, Any]] = Body(None),
    config_store: SiteConfigStore = Depends(get_site_config_store),
) -> dict[str, Any]:
    try:
        config = config_store.save(payload)
    except GuideError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return {"message": "config saved", "config": config}
