"""Rendering pipeline: excerpt, gutter, underline, composition and styling."""

from prologuepy.render.block import RenderedBlock, RenderedLine, Role, Segment, TextStyle
from prologuepy.render.compose import (
    NO_SOURCE_PLACEHOLDER,
    compose,
    compose_group,
    render_diagnostic,
)
from prologuepy.render.excerpt import ExcerptLine, extract, extract_ranges, extract_span, primary_line_range
from prologuepy.render.gutter import blank_gutter, format_gutter, gutter_width
from prologuepy.render.options import ColorMode, RenderOptions
from prologuepy.render.style import SEVERITY_STYLES, style, supports_color
from prologuepy.render.underline import (
    Annotation,
    annotation_rows,
    expand_tabs,
    underline,
    underline_parts,
)

__all__ = [
    "Annotation",
    "ColorMode",
    "ExcerptLine",
    "NO_SOURCE_PLACEHOLDER",
    "RenderOptions",
    "RenderedBlock",
    "RenderedLine",
    "Role",
    "SEVERITY_STYLES",
    "Segment",
    "TextStyle",
    "annotation_rows",
    "blank_gutter",
    "compose",
    "compose_group",
    "expand_tabs",
    "extract",
    "extract_ranges",
    "extract_span",
    "format_gutter",
    "gutter_width",
    "primary_line_range",
    "render_diagnostic",
    "style",
    "supports_color",
    "underline",
    "underline_parts",
]
