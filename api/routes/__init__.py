"""API routes package"""

from . import decisions, health

__all__ = ["decisions", "health"]
