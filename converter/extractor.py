"""HTML tree -> Markdown traversal.

The extractor walks BeautifulSoup nodes in document order and feeds spans
into a :class:`~converter.document.Document`, declaring a block boundary
wherever the markup starts or ends a block. Tags it does not know are
flattened: their children are processed as if they were siblings.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import PageElement

from converter import dom
from converter.document import Document, TraversalState
from converter.segments import BlockKind, Span
from converter.text_utils import escape, is_present
from converter.visibility import NullVisibilityOracle
from models.options import ConvertOptions

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
BLOCK_INITIATING_TAGS = (
    "address", "article", "aside", "body", "blockquote", "div", "dd", "dl", "dt", "figure",
    "footer", "header", "li", "main", "nav", "ol", "p", "pre", "section", "td", "th", "ul",
)
BREAK_TAGS = list(HEADING_TAGS + BLOCK_INITIATING_TAGS)
ENHANCERS = {"b": "**", "strong": "**", "i": "*", "em": "*"}
SKIP_TAGS = ("head", "style", "script", "noscript")


def _as_node_list(source):
    if isinstance(source, (list, tuple)):
        return list(source)
    return [source]


def _unwrap(node):
    """Resolve documents and loaded pages to their root element."""
    if not isinstance(node, PageElement):
        node = getattr(node, "soup", node)
    if isinstance(node, BeautifulSoup):
        return dom.root_element(node)
    return node


def _owner_soup(node):
    top = node
    while top.parent is not None:
        top = top.parent
    return top if isinstance(top, BeautifulSoup) else None


def _document_base(node, base_url):
    """Honour ``<base href>`` the way a browser resolves attribute URLs."""
    soup = _owner_soup(node)
    base_tag = soup.find("base", href=True) if soup is not None else None
    if base_tag is not None:
        return urljoin(base_url, base_tag["href"]) if base_url else base_tag["href"]
    return base_url


class Extractor:
    """Converts one or more nodes to Markdown.

    An instance holds per-call state only; :meth:`extract` resets it, so the
    same extractor may be reused, but never concurrently.
    """

    def __init__(self, source, options=None, oracle_class=NullVisibilityOracle):
        self.nodes = [_unwrap(node) for node in _as_node_list(source)]
        self.options = ConvertOptions.coerce(options)
        self.oracle_class = oracle_class
        self.state = None
        self.document = None
        self.oracle = None
        self.base_url = self.options.base_url

    def extract(self) -> str:
        self.state = TraversalState()
        self.document = Document(self.state)
        self.oracle = self._make_oracle()
        if self.nodes:
            self.base_url = _document_base(self.nodes[0], self.options.base_url)

        for node in self.nodes:
            self.document.break_block()
            self.process(node)
            self.document.break_block()

        content = self.document.get_content().strip()
        logger.debug("Extracted %d characters from %d node(s)", len(content), len(self.nodes))
        return content

    def _make_oracle(self):
        if not self.nodes or not self.options.exclude_hidden:
            return NullVisibilityOracle()
        soup = _owner_soup(self.nodes[0])
        root = dom.root_element(soup) if soup is not None else self.nodes[0]
        return self.oracle_class(root)

    # ------ dispatch ------

    def process(self, node):
        name = dom.node_name(node)

        if self._should_skip(node, name):
            return

        if not self._coalesce_line_break(name):
            return

        if dom.is_text(node):
            self.document.push(Span(str(node)))
            return

        handler = self._handler_for(name)
        if handler is not None:
            handler(node, name)
            return

        # Pretend the children of this node are its siblings.
        self.process_children(node)

    def _handler_for(self, name):
        if name in ENHANCERS:
            return self._process_enhancer
        if name == "img" and self.options.images:
            return self._process_image
        if name == "a" and self.options.links:
            return self._process_link
        if name == "blockquote":
            return self._process_blockquote
        if name == "li":
            return self._process_list_item
        if name in ("dt", "dd"):
            return self._process_definition
        if name in ("pre", "textarea"):
            return self._process_preformatted
        if name in BLOCK_INITIATING_TAGS:
            return self._process_block
        if name in HEADING_TAGS:
            return self._process_heading
        return None

    def _should_skip(self, node, name):
        if name in SKIP_TAGS:
            return True

        if dom.is_element(node):
            for selector in self.options.exclude:
                if node.css.match(selector):
                    logger.debug("Skipping <%s> matched by %r", name, selector)
                    return True

        if self.options.exclude_hidden and not self.oracle.is_visible(node):
            logger.debug("Skipping hidden <%s>", name)
            return True

        return False

    def _coalesce_line_break(self, name):
        """Track ``<br>`` runs. Returns False when the node is fully handled.

        Two breaks in a row end the paragraph. A single break becomes one
        literal newline, emitted in front of whatever comes next.
        """
        if name == "br":
            if self.state.pending_break:
                self.state.pending_break = False
                self.document.break_block()
                return False
            self.state.pending_break = True
        elif self.state.pending_break:
            self.state.pending_break = False
            self.document.push("\n")
        return True

    # ------ handlers ------

    def _process_enhancer(self, node, name):
        if not is_present(dom.rendered_text(node)):
            return

        marker = Span(ENHANCERS[name], raw=True)
        self.document.push(marker)
        self.process_children(node)
        self.document.push(marker)

    def _process_image(self, node, name):
        alt = escape(node.get("alt", ""))
        src = self._resolve(node.get("src"))
        self.document.push(Span(f"![{alt}]({src})", raw=True))

    def _process_link(self, node, name):
        if not is_present(dom.rendered_text(node)):
            return

        # Markdown links cannot wrap block content.
        if node.find(BREAK_TAGS) is not None:
            self.process_children(node)
            return

        self.document.push(Span("[", raw=True))
        self.process_children(node)
        self.document.push(Span(f"]({self._resolve(node.get('href'))})", raw=True))

    def _process_blockquote(self, node, name):
        self.state.in_blockquote = True
        self.document.break_block()
        self.process_flow_content(node)
        self.state.in_blockquote = False

    def _process_list_item(self, node, name):
        ordinal = None
        parent = node.parent
        if parent is not None and dom.node_name(parent) == "ol":
            ordinal = dom.count_previous_element_siblings(node) + 1

        last = dom.next_element_sibling(node) is None
        self.document.break_block(BlockKind.LIST_ITEM, last=last, ordinal=ordinal)
        self.process_flow_content(node)

    def _process_definition(self, node, name):
        if name == "dt":
            self.document.break_block(BlockKind.DEFINITION_TERM)
        else:
            last = dom.next_element_sibling(node) is None
            self.document.break_block(BlockKind.DEFINITION_DESCRIPTION, last=last)
        self.process_flow_content(node)

    def _process_preformatted(self, node, name):
        self.document.break_block(BlockKind.PREFORMATTED)
        if name == "textarea":
            # The value is the raw source text, markup included.
            self.document.push(Span(node.decode_contents(formatter=None)))
        else:
            self.process_children(node)
        self.document.break_block()

    def _process_block(self, node, name):
        if self.state.group_with_next:
            self.state.group_with_next = False
        else:
            self.document.break_block()
        self.process_children(node)
        self.document.break_block()

    def _process_heading(self, node, name):
        self.document.break_block(BlockKind.HEADING, level=int(name[1]))
        self.process_children(node)
        self.document.break_block()

    # ------ recursion ------

    def process_flow_content(self, node):
        """Process children without a paragraph break before the first block."""
        self.state.group_with_next = True
        self.process_children(node)
        self.state.group_with_next = False
        self.document.break_block()

    def process_children(self, node):
        for child in dom.children(node):
            self.process(child)

    def _resolve(self, url):
        if url is None:
            return ""
        if self.base_url:
            return urljoin(self.base_url, url)
        return url


def html_to_markdown(source, options=None, oracle_class=NullVisibilityOracle) -> str:
    """Convert a node, a list of nodes, a soup or a loaded page to Markdown.

    Args:
        source: ``bs4`` node(s), a ``BeautifulSoup`` document, or any object
            exposing the parsed document as ``.soup``.
        options: ``ConvertOptions`` or a dict with ``images``, ``links``,
            ``exclude_hidden``/``excludeHidden``, ``exclude`` and ``base_url``.
        oracle_class: visibility oracle built once per call from the
            document root. Only a layout-backed oracle can hide anything.
    """
    return Extractor(source, options, oracle_class).extract()
