"""
Pydantic models for the Inertia adapter.

All data shapes defined here. No imports from services or context.
"""

from inertia.models.page import PageEnvelope, RequestIntent, SSRResult

__all__ = [
    "PageEnvelope",
    "RequestIntent",
    "SSRResult",
]
