"""Link and text extraction from parsed HTML pages."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from bs4 import NavigableString, Tag
from bs4.element import PageElement, PreformattedString

_IGNORED_PREFIXES = ("#", "mailto:")
_FOLLOWED_SCHEMES = ("http", "https")


def _clean_path(path: str) -> str:
    """Lexically normalise a slash-separated path."""
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
        else:
            parts.append(segment)
    cleaned = "/".join(parts)
    if rooted:
        return "/" + cleaned
    return cleaned or "."


def _strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def _normalise_link(link: str, base_host: str) -> str | None:
    if not link or link.startswith(_IGNORED_PREFIXES):
        return None
    if link.startswith("/"):
        link = "https://" + base_host + link
    try:
        parts = urlsplit(link)
    except ValueError:
        return None
    scheme, netloc = parts.scheme, parts.netloc
    host = _strip_www(netloc.rpartition("@")[2])
    base = _strip_www(base_host)
    if not host:
        netloc = base
        scheme = "https"
        host = base
    if host != base or scheme not in _FOLLOWED_SCHEMES:
        return None
    return urlunsplit((scheme, netloc, _clean_path(parts.path), parts.query, ""))


def extract_links(root: PageElement, base_host: str) -> list[str]:
    """Return normalised links from <a href> elements that stay on base_host."""
    anchors: list[Tag] = []
    if isinstance(root, Tag):
        if root.name == "a":
            anchors.append(root)
        anchors.extend(root.find_all("a"))
    links: list[str] = []
    for anchor in anchors:
        href = anchor.get("href")
        if not isinstance(href, str):
            continue
        link = _normalise_link(href, base_host)
        if link is not None:
            links.append(link)
    return links


def extract_text(root: PageElement) -> str:
    """Return the concatenation of every text node, each stripped of surrounding whitespace."""
    if isinstance(root, NavigableString):
        return "" if isinstance(root, PreformattedString) else root.strip()
    return "".join(
        element.strip()
        for element in root.descendants
        if isinstance(element, NavigableString) and not isinstance(element, PreformattedString)
    )