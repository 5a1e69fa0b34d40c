"""Block accumulator: the open segment buffer and the rendered output."""

from dataclasses import dataclass

from converter.segments import Block, BlockKind, Span
from converter.stringifier import stringify
from converter.text_utils import is_present


@dataclass
class TraversalState:
    """Cross-node state for one conversion call."""

    pending_break: bool = False
    in_blockquote: bool = False
    group_with_next: bool = False


class Document:
    """Collects segments for the currently open block.

    Each call to :meth:`break_block` renders whatever is open and starts a
    new block of the given kind. Rendered text is only ever appended.
    """

    def __init__(self, state: TraversalState):
        self._state = state
        self._content: list[str] = []
        self.start()

    def start(self, kind: BlockKind = BlockKind.PARAGRAPH, **params):
        self._segments = []
        self._pending = Block(kind, self._segments, **params)

    def push(self, segment):
        self._segments.append(segment)

    def is_present(self) -> bool:
        return any(
            isinstance(segment, Span) and is_present(segment.text)
            for segment in self._segments
        )

    def finish(self):
        if not self.is_present():
            return

        if self._state.in_blockquote:
            self._content.append("> ")
        self._content.append(stringify(self._pending.to_pieces()))

    def break_block(self, kind: BlockKind = BlockKind.PARAGRAPH, **params):
        self.finish()
        self.start(kind, **params)

    def get_content(self) -> str:
        return "".join(self._content)
