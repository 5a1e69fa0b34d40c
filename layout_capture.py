"""Render a page in headless Chromium and record element geometry.

The geometry is written onto every element as ``data-layout-*`` attributes
before the DOM is serialised, so the parsed tree can be checked by
``converter.visibility.LayoutVisibilityOracle`` without a live browser.
"""

import logging

logger = logging.getLogger(__name__)

_ANNOTATE_JS = """
() => {
  for (const el of document.querySelectorAll("*")) {
    const r = el.getBoundingClientRect();
    el.setAttribute("data-layout-box",
      [el.offsetWidth || 0, el.offsetHeight || 0, el.getClientRects().length].join(","));
    el.setAttribute("data-layout-rect", [r.left, r.top, r.right, r.bottom].join(","));
    el.setAttribute("data-layout-scroll", [el.scrollWidth, el.scrollHeight].join(","));
  }
  return document.querySelectorAll("*").length;
}
"""


class LayoutCaptureError(RuntimeError):
    """The page could not be rendered in a browser."""


def render_with_layout(url, wait_ms=0, timeout_s=30):
    """Load ``url`` in Chromium and return its annotated HTML.

    Requires the ``render`` extra (``playwright``) and an installed
    browser (``playwright install chromium``).
    """
    try:
        from playwright.sync_api import Error as PlaywrightError
        from playwright.sync_api import sync_playwright
    except ImportError as exc:
        raise LayoutCaptureError(
            "Rendering needs Playwright: pip install 'deba[render]' && playwright install chromium"
        ) from exc

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch()
            try:
                page = browser.new_page()
                page.goto(url, timeout=timeout_s * 1000, wait_until="load")
                if wait_ms:
                    page.wait_for_timeout(wait_ms)
                count = page.evaluate(_ANNOTATE_JS)
                logger.info("Captured layout for %d elements", count)
                return page.content()
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise LayoutCaptureError(f"Failed to render {url}: {exc}") from exc
