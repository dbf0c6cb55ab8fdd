"""
API route modules.

Contains the FastAPI routers.
"""

from propcast.api.routes import projections

__all__ = ["projections"]
