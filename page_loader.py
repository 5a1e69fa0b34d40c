import logging
import time
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from bs4 import BeautifulSoup, FeatureNotFound

from layout_capture import LayoutCaptureError, render_with_layout

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http:", "https:")
FILE_SCHEME = "file:"


class PageLoadError(RuntimeError):
    """The source document could not be fetched or read."""


@dataclass
class LoadedPage:
    """A parsed page plus the URL its relative links resolve against."""

    soup: BeautifulSoup
    url: str
    rendered: bool = False


def is_url(source):
    return source.startswith(REMOTE_SCHEMES) or source.startswith(FILE_SCHEME)


def _source_url(source):
    if is_url(source):
        return source
    return Path(source).resolve().as_uri()


def _fetch_remote(url, loader_cfg):
    """GET a page with retry logic.

    Retries on network errors, timeouts, HTTP 429 and 5xx. Fails immediately
    on other HTTP errors.
    """
    max_retries = loader_cfg["max_retries"]
    headers = {"User-Agent": loader_cfg["user_agent"]}
    backoff_times = [1, 4, 16]

    for attempt in range(1, max_retries + 1):
        try:
            resp = requests.get(url, headers=headers, timeout=loader_cfg["timeout_s"])

            if resp.status_code == 429 or resp.status_code >= 500:
                raise requests.ConnectionError(f"HTTP {resp.status_code} (retryable)")

            resp.raise_for_status()
            return resp.text
        except (requests.ConnectionError, requests.Timeout) as exc:
            if attempt < max_retries:
                wait = backoff_times[min(attempt, len(backoff_times)) - 1]
                logger.warning(
                    "Fetch attempt %d/%d for %s failed: %s; retrying in %ds",
                    attempt, max_retries, url, exc, wait,
                )
                time.sleep(wait)
            else:
                raise PageLoadError(f"Failed to fetch {url} after {max_retries} attempts: {exc}") from exc
        except requests.RequestException as exc:
            raise PageLoadError(f"Failed to fetch {url}: {exc}") from exc


def _read_local(source):
    path = Path(unquote(urlparse(source).path)) if source.startswith(FILE_SCHEME) else Path(source)
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise PageLoadError(f"Failed to read {path}: {exc}") from exc


def load_page(source, cfg, render=False):
    """Load ``source`` (URL or local path) and parse it with BeautifulSoup.

    Args:
        source: ``http:``/``https:``/``file:`` URL or a filesystem path.
        cfg: validated configuration; only ``cfg["loader"]`` is read.
        render: load through a headless browser so the tree carries layout
            geometry for hidden-element filtering.

    Raises:
        PageLoadError: the page could not be fetched, read or rendered.
    """
    loader_cfg = cfg["loader"]
    url = _source_url(source)

    if render:
        logger.info("Rendering %s", url)
        try:
            html = render_with_layout(url, wait_ms=loader_cfg["render_wait_ms"], timeout_s=loader_cfg["timeout_s"])
        except LayoutCaptureError as exc:
            raise PageLoadError(str(exc)) from exc
    elif source.startswith(REMOTE_SCHEMES):
        logger.info("Fetching %s", url)
        html = _fetch_remote(url, loader_cfg)
    else:
        logger.info("Reading %s", source)
        html = _read_local(source)

    try:
        soup = BeautifulSoup(html, loader_cfg["parser"])
    except FeatureNotFound as exc:
        raise PageLoadError(f"Failed to parse {url} with {loader_cfg['parser']}: {exc}") from exc

    return LoadedPage(soup=soup, url=url, rendered=render)
