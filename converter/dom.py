"""Thin accessors over BeautifulSoup nodes."""

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

TEXT_NODE_NAME = "#text"
OTHER_NODE_NAME = "#other"


def node_name(node) -> str:
    if isinstance(node, Tag):
        return (node.name or "").lower()
    if is_text(node):
        return TEXT_NODE_NAME
    return OTHER_NODE_NAME


def is_text(node) -> bool:
    """Character data only; comments, CDATA and doctypes do not count."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_element(node) -> bool:
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def children(node) -> list:
    # A template's content is an inert fragment, not child nodes.
    if isinstance(node, Tag) and (node.name or "").lower() != "template":
        return list(node.contents)
    return []


def rendered_text(node) -> str:
    if isinstance(node, Tag):
        return node.get_text()
    return str(node)


def next_element_sibling(node):
    for sibling in node.next_siblings:
        if isinstance(sibling, Tag):
            return sibling
    return None


def count_previous_element_siblings(node) -> int:
    return sum(1 for sibling in node.previous_siblings if isinstance(sibling, Tag))


def root_element(soup: BeautifulSoup):
    """Return the ``<html>`` element, or the soup itself for a fragment."""
    return soup.find("html") or soup
