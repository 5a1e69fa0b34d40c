"""Visibility oracles consulted when hidden elements are excluded.

Geometry can only come from a real layout engine. ``layout_capture`` stores
it on each element as ``data-layout-*`` attributes; a tree parsed straight
from HTML has none and must use :class:`NullVisibilityOracle`.
"""

import logging
from dataclasses import dataclass

from bs4 import Tag

logger = logging.getLogger(__name__)

BOX_ATTR = "data-layout-box"
RECT_ATTR = "data-layout-rect"
SCROLL_ATTR = "data-layout-scroll"


@dataclass(frozen=True)
class PageBounds:
    top: float
    right: float
    bottom: float
    left: float

    def intersects(self, rect: "PageBounds") -> bool:
        return (
            rect.left < self.right
            and rect.right > self.left
            and rect.top < self.bottom
            and rect.bottom > self.top
        )


def _parse_numbers(value, count):
    if not value:
        return None
    parts = str(value).split(",")
    if len(parts) != count:
        return None
    try:
        return [float(p) for p in parts]
    except ValueError:
        return None


class NullVisibilityOracle:
    """No layout engine behind the tree: everything is visible."""

    def __init__(self, root=None):
        self._root = root

    def page_bounds(self):
        return None

    def is_visible(self, node) -> bool:
        return True


class LayoutVisibilityOracle:
    """Reads geometry captured by a browser and tests it against the page.

    Page bounds span from the origin to the root's scroll width and the
    tallest scroll height of any element. They are computed on first use and
    kept for the lifetime of the oracle, which is one conversion call.
    """

    def __init__(self, root):
        self._root = root
        self._bounds = None

    def page_bounds(self) -> PageBounds:
        if self._bounds is None:
            self._bounds = self._compute_page_bounds()
        return self._bounds

    def _compute_page_bounds(self):
        tallest = 0.0
        for element in self._root.find_all(True):
            scroll = _parse_numbers(element.get(SCROLL_ATTR), 2)
            if scroll and scroll[1] > tallest:
                tallest = scroll[1]

        root_scroll = _parse_numbers(self._root.get(SCROLL_ATTR), 2)
        width = root_scroll[0] if root_scroll else 0.0

        bounds = PageBounds(top=0.0, right=width, bottom=tallest, left=0.0)
        logger.debug("Page bounds: %s", bounds)
        return bounds

    def is_visible(self, node) -> bool:
        # Only elements have boxes.
        if not isinstance(node, Tag):
            return True

        box = _parse_numbers(node.get(BOX_ATTR), 3)
        rect = _parse_numbers(node.get(RECT_ATTR), 4)
        if box is None or rect is None:
            return True

        width, height, rect_count = box
        if not width and not height and not rect_count:
            return False

        left, top, right, bottom = rect
        return self.page_bounds().intersects(
            PageBounds(top=top, right=right, bottom=bottom, left=left)
        )
