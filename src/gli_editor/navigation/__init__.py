"""Navigation — line specs and viewport arithmetic."""

from gli_editor.navigation.line_spec import (
    DEFAULT_CONTEXT,
    AllLines,
    LineSpan,
    LineSpec,
    SingleLine,
    parse_line_spec,
    resolve_line_spec,
)
from gli_editor.navigation.viewport import (
    SCROLL_MARGIN,
    Viewport,
    clamp_window,
    jump_to_bottom,
    jump_to_line,
    jump_to_top,
    page_down,
    page_up,
    reclamp,
    resize,
    scroll_down,
    scroll_up,
)

__all__ = [
    "DEFAULT_CONTEXT",
    "SCROLL_MARGIN",
    "AllLines",
    "LineSpan",
    "LineSpec",
    "SingleLine",
    "Viewport",
    "clamp_window",
    "jump_to_bottom",
    "jump_to_line",
    "jump_to_top",
    "page_down",
    "page_up",
    "parse_line_spec",
    "reclamp",
    "resize",
    "scroll_down",
    "scroll_up",
]
