"""HTML parsing helpers: sentences, code snippets and headings."""

from __future__ import annotations

import re
import urllib.error
import urllib.request
from typing import Callable, Iterator, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

_SENTENCE = re.compile(r"[^.!?]+[.!?]")
_HEADING = re.compile(r"h[1-6]")
_FETCH_TIMEOUT = 30.0


def parse_html(markup: Union[str, bytes]) -> BeautifulSoup:
    """Parse an HTML document."""
    return BeautifulSoup(markup, "html.parser")


def split_text_to_sentences(text: str) -> list[str]:
    """Return trimmed sentences that end in '.', '!' or '?'; unterminated text is dropped."""
    return [match.strip() for match in _SENTENCE.findall(text)]


def _is_text(element: PageElement) -> bool:
    return isinstance(element, NavigableString) and not isinstance(element, PreformattedString)


def _elements(root: PageElement, wanted: Callable[[str], bool]) -> Iterator[Tag]:
    if isinstance(root, Tag) and wanted(root.name):
        yield root
    if isinstance(root, Tag):
        for element in root.descendants:
            if isinstance(element, Tag) and wanted(element.name):
                yield element


def node_text(node: PageElement) -> str:
    """Return the concatenated text of a node and all its descendants."""
    if isinstance(node, NavigableString):
        return str(node) if _is_text(node) else ""
    return "".join(str(element) for element in node.descendants if _is_text(element))


def extract_code_snippets(root: PageElement) -> list[str]:
    """Return the text of every <pre> and <code> element, in document order."""
    return [node_text(tag) for tag in _elements(root, lambda name: name in ("pre", "code"))]


def extract_headings(root: PageElement) -> list[str]:
    """Return the text of every <h1>..<h6> element, in document order."""
    return [node_text(tag) for tag in _elements(root, lambda name: bool(_HEADING.fullmatch(name)))]


def parse_html_from_url(url: str) -> BeautifulSoup:
    """Fetch a URL and parse its body as HTML, whatever the response status."""
    try:
        with urllib.request.urlopen(url, timeout=_FETCH_TIMEOUT) as response:
            body = response.read()
    except urllib.error.HTTPError as exc:
        try:
            body = exc.read()
        finally:
            exc.close()
    return parse_html(body)