"""API router package for endpoint composition."""

from .health import api_create_health_router
from .obfuscation import api_create_obfuscation_router

__all__ = ["api_create_health_router", "api_create_obfuscation_router"]
