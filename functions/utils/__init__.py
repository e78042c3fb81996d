"""
Utility helpers: parameters, colors, JSON recovery, LLM client, errors.
"""

from .color_utils import contrast_ratio, parse_color
from .json_recovery import parse_json_object

__all__ = [
    "contrast_ratio",
    "parse_color",
    "parse_json_object",
]
