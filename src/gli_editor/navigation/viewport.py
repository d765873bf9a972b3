"""Window and cursor arithmetic for keyboard navigation.

Every function takes the current ``Viewport`` and the file's line count and
returns a new ``Viewport``; nothing here touches the buffer or the screen.
The window height ``H`` is ``end_line - start_line``. An empty file is the
``(0, 0)`` window with cursor 0 and every move leaves it alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

SCROLL_MARGIN = 3


@dataclass(frozen=True)
class Viewport:
    start_line: int
    end_line: int
    cursor: int

    @property
    def height(self) -> int:
        return self.end_line - self.start_line

    @classmethod
    def initial(cls, start: int, end: int) -> "Viewport":
        """Window from a resolved line spec; cursor on its first line."""
        return cls(start, end, start)


def clamp_window(start: int, end: int, total: int) -> Tuple[int, int]:
    """Clamp both bounds to ``[1, total]``, then restore ``start <= end``.

    When the bounds cross, the one that is not pinned at a file boundary moves.
    """
    if total == 0:
        return 0, 0
    start = min(max(start, 1), total)
    end = min(max(end, 1), total)
    if start > end:
        if end == total:
            start = end
        else:
            end = start
    return start, end


def scroll_up(view: Viewport, total: int, margin: int = SCROLL_MARGIN) -> Viewport:
    if total == 0 or view.cursor <= 1:
        return view
    cursor = view.cursor - 1
    start, end = view.start_line, view.end_line
    if cursor - start < margin and start > 1:
        start, end = clamp_window(start - 1, start - 1 + view.height, total)
    return Viewport(start, end, cursor)


def scroll_down(view: Viewport, total: int, margin: int = SCROLL_MARGIN) -> Viewport:
    if total == 0 or view.cursor >= total:
        return view
    cursor = view.cursor + 1
    start, end = view.start_line, view.end_line
    if end - cursor < margin and end < total:
        start, end = clamp_window(start + 1, start + 1 + view.height, total)
    return Viewport(start, end, cursor)


def page_up(view: Viewport, total: int) -> Viewport:
    if total == 0:
        return view
    step = max(view.height, 1)
    start = max(view.start_line - step, 1)
    start, end = clamp_window(start, start + view.height, total)
    return Viewport(start, end, start)


def page_down(view: Viewport, total: int) -> Viewport:
    if total == 0:
        return view
    step = max(view.height, 1)
    start = min(view.start_line + step, max(total - view.height, 1))
    start, end = clamp_window(start, start + view.height, total)
    return Viewport(start, end, start)


def jump_to_top(view: Viewport, total: int) -> Viewport:
    if total == 0:
        return view
    start, end = clamp_window(1, 1 + view.height, total)
    return Viewport(start, end, 1)


def jump_to_bottom(view: Viewport, total: int) -> Viewport:
    if total == 0:
        return view
    start, end = clamp_window(total - view.height + 1, total, total)
    return Viewport(start, end, total)


def jump_to_line(view: Viewport, total: int, target: int) -> Tuple[Viewport, str]:
    """Center the window on *target*.

    An out-of-range target leaves the viewport unchanged; the message says so.
    """
    if target < 1 or target > total:
        return view, f"Invalid line number: {target}"
    start = max(target - view.height // 2, 1)
    start, end = clamp_window(start, start + view.height, total)
    return Viewport(start, end, target), f"Jumped to line {target}"


def resize(view: Viewport, total: int, content_height: int) -> Viewport:
    """Refit the window to *content_height* rows, centred on the cursor."""
    if total == 0 or content_height <= 0:
        return view
    cursor = min(max(view.cursor, 1), total)
    start = max(cursor - content_height // 2, 1)
    start, end = clamp_window(start, start + content_height - 1, total)
    return Viewport(start, end, cursor)


def reclamp(view: Viewport, total: int, cursor: Optional[int] = None) -> Viewport:
    """Fit an existing viewport back inside a buffer whose size changed."""
    if total == 0:
        return Viewport(0, 0, 0)
    start, end = clamp_window(view.start_line, view.end_line, total)
    target = view.cursor if cursor is None else cursor
    return Viewport(start, end, min(max(target, 1), total))
