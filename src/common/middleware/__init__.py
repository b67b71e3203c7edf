"""Common middleware for EventHub."""

from .cors import CorsHeadersMiddleware
from .observability import StructlogContextMiddleware

__all__ = ["CorsHeadersMiddleware", "StructlogContextMiddleware"]
