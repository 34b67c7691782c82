"""Editable site configuration stored in ``config.json``."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from localguide.core.errors import PersistenceFailure, ValidationError
from localguide.services.json_storage import read_json, write_json_atomic

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("appTitle", "map", "categories", "ai")

DEFAULT_CONFIG: dict[str, Any] = {
    "appTitle": "うつのみYEAH!",
    "subtitle1": "帰り道は宇都宮で。",
    "subtitle2": "寄り道が、特別な旅になる。",
    "map": {"center": {"lat": 36.5579, "lng": 139.8984}, "zoom": 14},
    "categories": [
        {"id": "gyoza", "name": "餃子", "emoji": "🥟"},
        {"id": "cocktail", "name": "カクテル", "emoji": "🍸"},
        {"id": "jazz", "name": "ジャズ", "emoji": "🎷"},
    ],
    "ai": {
        "greeting": "こんにちは!宇都宮観光AI案内です 🎉",
        "description": "短時間で宇都宮を楽しむ最適なルートをご提案します!",
        "categoryPrompt": "何を体験したいですか?",
    },
}


class SiteConfigStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._write_lock = threading.Lock()

    def ensure_default(self) -> None:
        with self._write_lock:
            if not self.path.exists():
                logger.warning("%s is missing; writing the default config", self.path)
                write_json_atomic(self.path, DEFAULT_CONFIG)

    def load(self) -> dict[str, Any]:
        config = read_json(self.path, default=None)
        if not isinstance(config, dict):
            raise PersistenceFailure("failed to read the site config")
        return config

    def save(self, config: dict[str, Any] | None) -> dict[str, Any]:
        if not config:
            raise ValidationError("request body is empty")
        if any(not config.get(key) for key in REQUIRED_KEYS):
            raise ValidationError("required fields: " + ", ".join(REQUIRED_KEYS))
        with self._write_lock:
            write_json_atomic(self.path, config)
        logger.info("site config saved: %s", config["appTitle"])
        return config
