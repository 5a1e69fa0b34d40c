"""Tests for the block accumulator."""

from converter.document import Document, TraversalState
from converter.segments import BlockKind, Span


def make_document():
    state = TraversalState()
    return state, Document(state)


class TestDocument:
    def test_blank_block_contributes_nothing(self):
        _, doc = make_document()
        doc.push(Span("   "))
        doc.push("\n")
        doc.break_block()
        assert doc.get_content() == ""

    def test_literals_alone_are_not_content(self):
        _, doc = make_document()
        doc.push("\n")
        assert not doc.is_present()
        doc.push(Span("x"))
        assert doc.is_present()

    def test_break_renders_pending_kind(self):
        _, doc = make_document()
        doc.break_block(BlockKind.HEADING, level=2)
        doc.push(Span("Title"))
        doc.break_block()
        doc.push(Span("Body"))
        doc.finish()
        assert doc.get_content() == "## Title\n\nBody\n\n"

    def test_start_discards_open_buffer(self):
        _, doc = make_document()
        doc.push(Span("dropped"))
        doc.start()
        doc.push(Span("kept"))
        doc.finish()
        assert doc.get_content() == "kept\n\n"

    def test_blockquote_prefix(self):
        state, doc = make_document()
        state.in_blockquote = True
        doc.push(Span("quoted"))
        doc.break_block()
        state.in_blockquote = False
        doc.push(Span("plain"))
        doc.break_block()
        assert doc.get_content() == "> quoted\n\nplain\n\n"
