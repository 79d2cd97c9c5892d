import os
from typing import Optional

_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module(env: Optional[str] = None) -> str:
    """Dotted settings module for ``env`` (default: the APP_ENV variable).

    Unknown names fall back to development.
    """
    name = (env or os.getenv("APP_ENV") or "development").strip().lower()
    return _MODULES.get(name, "config.development")
