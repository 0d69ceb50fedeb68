"""
Трассировщик лучей для сцен из сфер с точечными источниками света.
"""

from .scene import Camera, Sphere, Scene
from .camera import Viewport
from .renderer import (
    render, trace_ray,
    TRACE_HIT, TRACE_MISS, TRACE_DEPTH_EXCEEDED, MAX_DEPTH,
)
from .random_scene import create_random_scene
from .postprocess import to_rgb, to_rgba, save_png, save_ppm

__all__ = [
    'Camera', 'Sphere', 'Scene', 'Viewport',
    'render', 'trace_ray',
    'TRACE_HIT', 'TRACE_MISS', 'TRACE_DEPTH_EXCEEDED', 'MAX_DEPTH',
    'create_random_scene',
    'to_rgb', 'to_rgba', 'save_png', 'save_ppm',
]
