"""Print the Markdown rendition of a web page or local HTML file."""

import argparse
import logging
import sys

from soupsieve import SelectorSyntaxError

from config import load_config
from converter.extractor import html_to_markdown
from converter.visibility import LayoutVisibilityOracle, NullVisibilityOracle
from models.options import ConvertOptions
from page_loader import PageLoadError, load_page

logger = logging.getLogger(__name__)


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Convert an HTML page to Markdown")
    parser.add_argument(
        "source",
        help="http:, https: or file: URL, or a local path",
    )
    parser.add_argument(
        "--no-images",
        action="store_true",
        help="drop images instead of emitting ![alt](src)",
    )
    parser.add_argument(
        "--no-links",
        action="store_true",
        help="emit link text without [text](href)",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="keep elements a rendered page would not show",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="SELECTOR",
        help="skip elements matching this CSS selector (repeatable)",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="load the page in headless Chromium so hidden elements can be detected",
    )
    parser.add_argument(
        "--parser",
        default=None,
        choices=["html.parser", "lxml", "html5lib"],
        help="BeautifulSoup tree builder",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="HTTP / render timeout in seconds",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="log progress to stderr",
    )
    return parser


def _setup_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_options(args, cfg, base_url=""):
    convert_cfg = cfg["convert"]
    return ConvertOptions(
        images=convert_cfg["images"] and not args.no_images,
        links=convert_cfg["links"] and not args.no_links,
        exclude_hidden=convert_cfg["exclude_hidden"] and not args.include_hidden,
        exclude=tuple(convert_cfg["exclude"]) + tuple(args.exclude),
        base_url=convert_cfg["base_url"] or base_url,
    )


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    cfg = load_config()
    _setup_logging("DEBUG" if args.verbose else cfg["logging"]["level"])

    if args.parser:
        cfg["loader"]["parser"] = args.parser
    if args.timeout:
        cfg["loader"]["timeout_s"] = max(1, args.timeout)

    try:
        page = load_page(args.source, cfg, render=args.render)
    except PageLoadError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    options = build_options(args, cfg, base_url=page.url)
    # Geometry only exists on trees that went through a browser.
    oracle_class = LayoutVisibilityOracle if page.rendered else NullVisibilityOracle
    logger.info(
        "Converting %s (images=%s, links=%s, exclude_hidden=%s, exclude=%s)",
        page.url, options.images, options.links, options.exclude_hidden, list(options.exclude),
    )

    try:
        markdown = html_to_markdown(page, options, oracle_class)
    except SelectorSyntaxError as exc:
        logger.error("Invalid exclude selector: %s", exc)
        sys.exit(1)

    sys.stdout.write(markdown + "\n")


if __name__ == "__main__":
    main()
