"""HTTP API serving indexed documents as JSON."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Mapping
from urllib.parse import parse_qs, unquote, urlsplit

from .docstore import Document
from .index import InvertedIndex

JSON_TYPE = "application/json"
TEXT_TYPE = "text/plain; charset=utf-8"
HTML_TYPE = "text/html; charset=utf-8"

_DOCUMENT_PREFIX = "/document/"
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

_log = logging.getLogger(__name__)


@dataclass
class Response:
    """An HTTP response produced by the API."""

    status: int
    content_type: str
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


def _json(status: int, value: Any) -> Response:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return Response(status, JSON_TYPE, (text + "\n").encode("utf-8"))


def _error(status: int, message: str) -> Response:
    return Response(
        status,
        TEXT_TYPE,
        (message + "\n").encode("utf-8"),
        {"X-Content-Type-Options": "nosniff"},
    )


def _query(query_string: str, doc_store: Mapping[str, Document], index: InvertedIndex) -> Response:
    values = parse_qs(query_string).get("q", [""])
    term = values[0]
    if not term:
        return _error(400, "Missing query parameter 'q'")
    out = []
    for hit in index.search(term):
        document = doc_store.get(hit.id)
        if document is None:
            continue
        item: dict[str, Any] = {"id": document.id, "url": document.url, "text": document.text}
        if document.headings:
            item["headings"] = list(document.headings)
        if document.code_snippets:
            item["code_snippets"] = list(document.code_snippets)
        out.append(item)
    return _json(200, out or None)


def _document(doc_id: str, doc_store: Mapping[str, Document]) -> Response:
    if not doc_id:
        return _error(400, "Missing document ID")
    document = doc_store.get(doc_id)
    if document is None:
        return _error(404, "Document not found")
    return _json(200, document.to_dict())


def handle_request(
    path: str, doc_store: Mapping[str, Document], index: InvertedIndex
) -> Response:
    """Route a request target (path and query string) to its handler."""
    parts = urlsplit(path)
    route = unquote(parts.path) or "/"
    if route == "/health":
        return _json(200, {"status": "ok"})
    if route == "/mcp":
        return _json(501, {"error": "MCP endpoint not implemented yet"})
    if route == "/query":
        return _query(parts.query, doc_store, index)
    if route.startswith(_DOCUMENT_PREFIX):
        return _document(route[len(_DOCUMENT_PREFIX):], doc_store)
    if route == _DOCUMENT_PREFIX.rstrip("/"):
        location = _DOCUMENT_PREFIX + (f"?{parts.query}" if parts.query else "")
        body = f'<a href="{location}">Moved Permanently</a>.\n\n'.encode("utf-8")
        return Response(301, HTML_TYPE, body, {"Location": location})
    return _error(404, "404 page not found")


def make_server(
    host: str, port: int, doc_store: Mapping[str, Document], index: InvertedIndex
) -> ThreadingHTTPServer:
    """Create, but do not start, an HTTP server bound to host and port."""

    class _Handler(BaseHTTPRequestHandler):
        def _respond(self, send_body: bool = True) -> None:
            response = handle_request(self.path, doc_store, index)
            self.send_response(response.status)
            self.send_header("Content-Type", response.content_type)
            self.send_header("Content-Length", str(len(response.body)))
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.end_headers()
            if send_body:
                self.wfile.write(response.body)

        def do_GET(self) -> None:
            self._respond()

        do_POST = do_PUT = do_DELETE = do_PATCH = do_GET

        def do_HEAD(self) -> None:
            self._respond(send_body=False)

        def log_message(self, format: str, *args: Any) -> None:
            _log.debug("%s - %s", self.address_string(), format % args)

    return ThreadingHTTPServer((host, port), _Handler)


def start_server(
    address: str, doc_store: Mapping[str, Document], index: InvertedIndex
) -> None:
    """Serve the API on a "host:port" address until interrupted."""
    host, _, port = address.rpartition(":")
    if not port.isdigit():
        raise ValueError(f"invalid address {address!r}")
    print(f"API server listening on {address}")
    with make_server(host.strip("[]"), int(port), doc_store, index) as server:
        server.serve_forever()