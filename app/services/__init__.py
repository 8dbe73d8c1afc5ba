"""
Service layer exposing the data-access operations to the web layer.
"""

from .listing import ListingService

__all__ = [
    "ListingService",
]
