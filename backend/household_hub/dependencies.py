"""
Shared API dependencies.
"""

from fastapi import Request

from household_hub.config import Settings
from household_hub.core.readiness import ReadinessState
from household_hub.services.janitor import PurchasedItemJanitor


def get_readiness(request: Request) -> ReadinessState:
    """Readiness state owned by the running application."""
    return request.app.state.readiness


def get_janitor(request: Request) -> PurchasedItemJanitor:
    return request.app.state.janitor


def get_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings
