"""Fold rendered block pieces into text."""

from itertools import groupby

from converter.segments import Span
from converter.text_utils import normalise


def _is_inline(piece):
    return isinstance(piece, Span)


def stringify(pieces) -> str:
    """Join pieces, normalising each run of consecutive spans.

    Runs of structural literals are concatenated untouched so list prefixes,
    ``:\\n`` markers and blank-line separators survive exactly.
    """
    output = []
    for inline, group in groupby(pieces, key=_is_inline):
        text = "".join(str(piece) for piece in group)
        output.append(normalise(text) if inline else text)
    return "".join(output)
