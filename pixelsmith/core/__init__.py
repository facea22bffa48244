"""Core sprite editor modules"""

# Make key classes available at package level
from .pixelsmith_codec import SpriteCodec
from .pixelsmith_controller import EditorController, PointerButton
from .pixelsmith_mapper import CoordinateMapper
from .pixelsmith_models import Color, GridModel, PaintColorModel, ViewTransform, checker_color
from .pixelsmith_tools import ToolType, create_tool

__all__ = [
    "Color",
    "CoordinateMapper",
    "EditorController",
    "GridModel",
    "PaintColorModel",
    "PointerButton",
    "SpriteCodec",
    "ToolType",
    "ViewTransform",
    "checker_color",
    "create_tool",
]
