"""
Muscle diagram renderer.

Overlays colour-tinted muscle silhouettes onto a base body image and returns
the composite as PNG. The HTTP surface lives in :mod:`musclemap.api`; the
composition pipeline in :mod:`musclemap.compositor`.
"""

from __future__ import annotations

__all__ = [
    "LayerCompositor",
    "MuscleGroup",
    "RenderConfig",
    "RenderRequest",
    "RenderResult",
]

from .compositor import LayerCompositor, RenderRequest, RenderResult
from .config import RenderConfig
from .muscles import MuscleGroup
