"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.shipments import router as shipments_router

__all__ = [
    "shipments_router",
]
