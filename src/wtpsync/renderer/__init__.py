"""Renderers for generated descriptors."""

from wtpsync.renderer.descriptors import descriptors_to_dict, render_json

__all__ = [
    "descriptors_to_dict",
    "render_json",
]
