"""
Shared slowapi limiter, keyed by client address.

Limits are decorated onto routes at import time; create_app applies the
settings of the app being built through configure_limiter.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from household_hub.config import Settings, settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

_write_limit = settings.WRITE_RATE_LIMIT


def configure_limiter(app_settings: Settings) -> Limiter:
    global _write_limit
    limiter.enabled = app_settings.RATE_LIMIT_ENABLED
    _write_limit = app_settings.WRITE_RATE_LIMIT
    return limiter


def write_rate_limit() -> str:
    """Limit for zone and shopping list writes, read on every request."""
    return _write_limit
