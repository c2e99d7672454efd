"""
Domain extractors.

Each extractor scans the entry list for one domain (colors, spacing,
typography) and returns flat primitive maps plus mode-keyed token candidates.
Entries are always visited in file-name order.
"""

from .colors import ColorExtraction, extract_colors
from .spacing import SpacingExtraction, extract_spacing
from .typography import TypographyExtraction, extract_typography

__all__ = [
    "ColorExtraction",
    "SpacingExtraction",
    "TypographyExtraction",
    "extract_colors",
    "extract_spacing",
    "extract_typography",
]
