"""Utilities for reducing HTML to plain text.

Nothing is parsed: comments, whole block elements, remaining tags and entity
references are deleted in a fixed order by strip_html(). Spans that cross a
line break collapse to a single space so that words on either side stay
separated; spans on a single line collapse to nothing.

Each stage scans forward once. Delimiter lookups go through _Finder, which
remembers the last hit, so text after an unterminated ``<``, ``<!--`` or ``&``
is never rescanned and run time stays linear in the input size. Whitespace is
ASCII whitespace only.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

BLOCK_ELEMENTS: tuple[str, ...] = ("head", "style", "script", "noscript", "iframe", "svg")

_NEWLINE = re.compile(r"[\r\n]")
_NEWLINE_RUN = re.compile(r"[\r\n]+")
_WHITESPACE = re.compile(r"\s", re.ASCII)
_TAG_END = re.compile(">")
_SEMICOLON = re.compile(";")

_COMMENT_OPEN = re.compile("<!--")
_COMMENT_CLOSE = re.compile("-->")


class _Finder:
    """First match of a pattern at or after a position, reused while still valid."""

    def __init__(self, text: str, pattern: re.Pattern[str]) -> None:
        self._text = text
        self._pattern = pattern
        self._pos = -1
        self._match: re.Match[str] | None = None

    def search(self, pos: int) -> re.Match[str] | None:
        if 0 <= self._pos <= pos and (self._match is None or self._match.start() >= pos):
            return self._match
        self._pos = pos
        self._match = self._pattern.search(self._text, pos)
        return self._match


def has_newline(text: str) -> bool:
    """Return True if the text contains at least one line feed or carriage return."""
    return _NEWLINE.search(text) is not None


def _strip_spans(
    text: str,
    opener: re.Pattern[str],
    closer: re.Pattern[str],
    *,
    single_line: bool,
    attributes: bool,
) -> str:
    """
    Remove every span from an opener to the nearest closer after it.

    Args:
        text: Text to scan.
        opener: Start of a span, e.g. ``<!--`` or ``<style``.
        closer: End of a span; the first one after the opener wins.
        single_line: Only remove spans without a line break, replacing them
            with nothing. Otherwise spans with a line break become one space.
        attributes: The opener is a start tag that runs on to the next ``>``.

    Returns:
        The text with the spans removed.
    """
    openers = _Finder(text, opener)
    tag_ends = _Finder(text, _TAG_END)
    closers = _Finder(text, closer)
    newlines = _Finder(text, _NEWLINE)

    parts: list[str] = []
    kept = 0
    pos = 0
    while True:
        found = openers.search(pos)
        if found is None:
            break
        start, body = found.start(), found.end()
        if attributes:
            tag_end = tag_ends.search(body)
            if tag_end is None:
                break  # no later opener can be closed either
            body = tag_end.end()
        close = closers.search(body)
        if close is None:
            break
        newline = newlines.search(start)
        multi_line = newline is not None and newline.start() < close.end()
        if single_line and multi_line:
            pos = start + 1
            continue
        parts.append(text[kept:start])
        parts.append(" " if multi_line else "")
        kept = pos = close.end()
    parts.append(text[kept:])
    return "".join(parts)


def strip_comments(html: str) -> str:
    """
    Remove HTML comments.

    A comment that opens and closes on the same line is removed outright, so
    ``A<!-- B -->C`` becomes ``AC``. A comment with a line break between its
    markers is replaced with a single space, so ``A<!--\\nB -->C`` becomes
    ``A C``. Single-line comments are all removed before multi-line ones.
    Unterminated comments are left as they are.

    Args:
        html: Text that may contain HTML comments.

    Returns:
        The text without any complete comment.
    """
    html = _strip_spans(html, _COMMENT_OPEN, _COMMENT_CLOSE, single_line=True, attributes=False)
    return _strip_spans(html, _COMMENT_OPEN, _COMMENT_CLOSE, single_line=False, attributes=False)


def strip_element(html: str, name: str) -> str:
    """
    Remove every ``name`` element together with everything inside it.

    The opening tag may carry attributes and the closing tag may have
    whitespace before its ``>``. The name is matched case-sensitively and
    as a whole word, so ``head`` leaves ``<header>`` alone. An element on a
    single line is removed outright; one spanning several lines is replaced
    with a single space. Nesting is not tracked: the first matching closing
    tag ends the element.

    Args:
        html: Text that may contain the element.
        name: Element name, e.g. ``"style"`` or ``"script"``.

    Returns:
        The text without that element.
    """
    tag = re.escape(name)
    html = _strip_spans(
        html,
        re.compile(rf"<{tag}(?=[ \t/>])"),
        re.compile(rf"</{tag}>"),
        single_line=True,
        attributes=True,
    )
    return _strip_spans(
        html,
        re.compile(rf"<{tag}(?=[\s/>])", re.ASCII),
        re.compile(rf"</{tag}\s*>", re.ASCII),
        single_line=False,
        attributes=True,
    )


def strip_block_elements(html: str, elements: Iterable[str] = BLOCK_ELEMENTS) -> str:
    """
    Remove comments, then each block element in turn.

    Args:
        html: HTML document or fragment.
        elements: Element names to remove, in order. Defaults to head, style,
            script, noscript, iframe and svg.

    Returns:
        The text with comments and the given elements removed.
    """
    html = strip_comments(html)
    for name in elements:
        html = strip_element(html, name)
    return html


def strip_tags(html: str) -> str:
    """
    Remove all tags, e.g. ``A<b>B</b>C`` becomes ``ABC``.

    A tag may contain at most one run of line breaks. A ``<`` without such a
    ``>`` after it is left as it is.
    """
    tag_ends = _Finder(html, _TAG_END)
    first_runs = _Finder(html, _NEWLINE_RUN)
    second_runs = _Finder(html, _NEWLINE_RUN)

    parts: list[str] = []
    kept = 0
    pos = 0
    while True:
        start = html.find("<", pos)
        if start == -1:
            break
        tag_end = tag_ends.search(start + 1)
        if tag_end is None:
            break
        run = first_runs.search(start + 1)
        if run is not None and run.start() < tag_end.start():
            second = second_runs.search(run.end())
            if second is not None and second.start() < tag_end.start():
                pos = start + 1
                continue
        parts.append(html[kept:start])
        kept = pos = tag_end.end()
    parts.append(html[kept:])
    return "".join(parts)


def strip_entities(html: str) -> str:
    """Delete entity references without decoding them: ``2010&ndash;2012`` becomes ``20102012``."""
    semicolons = _Finder(html, _SEMICOLON)
    spaces = _Finder(html, _WHITESPACE)

    parts: list[str] = []
    kept = 0
    pos = 0
    while True:
        start = html.find("&", pos)
        if start == -1:
            break
        end = semicolons.search(start + 1)
        if end is None:
            break
        space = spaces.search(start + 1)
        if space is not None and space.start() < end.start():
            pos = start + 1
            continue
        parts.append(html[kept:start])
        kept = pos = end.end()
    parts.append(html[kept:])
    return "".join(parts)


def strip_html(html: str) -> str:
    """
    Reduce HTML to plain text.

    Block elements go first so their contents never survive as bare text, then
    the remaining tags, then entity references. Because entities go last, a
    ``<`` ... ``>`` pair kept apart by an entity between two line breaks
    (``<a\\n&x;\\nb>``) becomes a complete tag only after the tag pass and
    stays in the output.

    Args:
        html: HTML document or fragment.

    Returns:
        Plain text with comments, block elements, tags and entities removed.
    """
    return strip_entities(strip_tags(strip_block_elements(html)))
