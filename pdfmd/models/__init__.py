"""Data models for the rasterization pipeline."""

from .document import DocumentHandle
from .page import PageGeometry, Viewport
from .surface import DrawingSurface

__all__ = ["DocumentHandle", "PageGeometry", "Viewport", "DrawingSurface"]
