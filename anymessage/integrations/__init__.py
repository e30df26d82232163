"""
Integration module initialization.

Persists per-team third-party provider credentials behind the
``POST /integration/save`` endpoint.
"""

from .models import IntegrationSaveRequest, Integration
from .accessor import IntegrationAccessor, BoundIntegration
from .endpoints import integration_router

__all__ = [
    "IntegrationSaveRequest",
    "Integration",
    "IntegrationAccessor",
    "BoundIntegration",
    "integration_router"
]
