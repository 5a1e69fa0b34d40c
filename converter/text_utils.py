"""Markdown escaping and whitespace helpers used by every segment."""

import re

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------
# Always special: emphasis/list (*), HTML tags (<), links (\[), escapes (\\),
# emphasis (_), code spans and fences (` ~).
_RE_ALWAYS = re.compile(r"([*<\[\\_`~])")
# Special only when they open a block: headings, list markers, setext
# underlines, blockquotes.
_RE_BLOCK_START = re.compile(r"^(\s*?)([#+\-=>])")
# '&' starting something that could be read as an HTML entity.
_RE_ENTITY = re.compile(r"(&.*?;)")
# "12. " would become an ordered list item.
_RE_ORDINAL = re.compile(r"^(\s*\d+)\. ")
_RE_WHITESPACE = re.compile(r"\s+")
_RE_BLANK = re.compile(r"\s*")


def escape(text):
    """Backslash-escape characters that carry Markdown meaning.

    Characters such as ``!``, ``(``, ``]`` or ``:`` only matter next to
    something that is already escaped here, so they are left alone.
    """
    text = _RE_ALWAYS.sub(r"\\\1", text)
    text = _RE_BLOCK_START.sub(r"\1\\\2", text)
    text = _RE_ENTITY.sub(r"\\\1", text)
    text = _RE_ORDINAL.sub(r"\1\\. ", text)
    return text


def normalise(text):
    """Collapse whitespace runs (newlines included) to one space and trim."""
    return _RE_WHITESPACE.sub(" ", text).strip()


def is_present(text):
    return bool(text) and _RE_BLANK.fullmatch(text) is None
