"""Segment model: inline spans and the block kinds they are grouped into.

A block renders to an ordered list of *pieces*. A piece is either a
:class:`Span` (inline text, whitespace-normalised by the stringifier) or a
plain ``str`` (structural literal such as a list prefix or a blank line,
kept verbatim).
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from converter.text_utils import escape, is_present, normalise

_RE_PARAGRAPH_GAP = re.compile(r"\n{2,}")


class Span:
    """Inline text. Escaped once on construction unless ``raw`` is set."""

    __slots__ = ("text",)

    def __init__(self, text: str, raw: bool = False):
        self.text = text if raw else escape(text)

    def __str__(self):
        return self.text

    def __repr__(self):
        return f"Span({self.text!r})"


class BlockKind(str, Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST_ITEM = "list_item"
    DEFINITION_TERM = "definition_term"
    DEFINITION_DESCRIPTION = "definition_description"
    PREFORMATTED = "preformatted"


@dataclass
class Block:
    """A finished block buffer plus the parameters of its kind.

    ``level`` applies to headings, ``last`` to list items and definition
    descriptions, ``ordinal`` to items of ordered lists.
    """

    kind: BlockKind = BlockKind.PARAGRAPH
    segments: list = field(default_factory=list)
    level: int = 1
    last: bool = False
    ordinal: int | None = None

    def to_pieces(self) -> list:
        return _RENDERERS[self.kind](self)


def _render_paragraph(block):
    return block.segments + ["\n\n"]


def _render_heading(block):
    return ["#" * block.level + " "] + block.segments + ["\n\n"]


def _render_list_item(block):
    prefix = "* " if block.ordinal is None else f"{block.ordinal}. "
    return [prefix] + block.segments + ["\n\n" if block.last else "\n"]


def _render_definition_term(block):
    return block.segments + [":\n"]


def _render_definition_description(block):
    return block.segments + ["\n\n" if block.last else "\n"]


def _render_preformatted(block):
    text = "".join(str(segment) for segment in block.segments)
    paragraphs = []
    for chunk in _RE_PARAGRAPH_GAP.split(text):
        normalised = normalise(chunk)
        if is_present(normalised):
            paragraphs.append(normalised)

    if not paragraphs:
        return []
    return ["\n\n".join(paragraphs) + "\n\n"]


_RENDERERS = {
    BlockKind.PARAGRAPH: _render_paragraph,
    BlockKind.HEADING: _render_heading,
    BlockKind.LIST_ITEM: _render_list_item,
    BlockKind.DEFINITION_TERM: _render_definition_term,
    BlockKind.DEFINITION_DESCRIPTION: _render_definition_description,
    BlockKind.PREFORMATTED: _render_preformatted,
}
