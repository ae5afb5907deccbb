"""Expression evaluation and template rendering."""

from .expressions import evaluate, evaluate_when, is_supported_expression, stringify
from .renderer import build_render_context, interpolate_simple, render

__all__ = [
    "build_render_context",
    "evaluate",
    "evaluate_when",
    "interpolate_simple",
    "is_supported_expression",
    "render",
    "stringify",
]
