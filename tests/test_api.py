import json
import threading
import urllib.error
import urllib.request

import pytest

from documcp.api import handle_request, make_server
from documcp.docstore import Document
from documcp.index import InvertedIndex

URL_A = "https://example.com/a"
URL_B = "https://example.com/b"


@pytest.fixture
def stores():
    index = InvertedIndex()
    doc_store = {}
    first = index.add_document(URL_A, "", "alpha beta")
    doc_store[first] = Document(first, URL_A, text="alpha beta", headings=["Intro"])
    second = index.add_document(URL_B, "", "gamma <b> alpha")
    doc_store[second] = Document(second, URL_B, text="gamma <b> alpha", code_snippets=["x = 1"])
    index.add_document(URL_A, "", "alpha sentence only in index")
    return doc_store, index, first, second


def test_health(stores):
    doc_store, index, _, _ = stores
    response = handle_request("/health", doc_store, index)
    assert response.status == 200
    assert response.content_type == "application/json"
    assert json.loads(response.body) == {"status": "ok"}
    assert response.body.endswith(b"\n")


def test_mcp_not_implemented(stores):
    doc_store, index, _, _ = stores
    response = handle_request("/mcp", doc_store, index)
    assert response.status == 501
    assert json.loads(response.body) == {"error": "MCP endpoint not implemented yet"}


def test_query_missing_parameter(stores):
    doc_store, index, _, _ = stores
    response = handle_request("/query", doc_store, index)
    assert response.status == 400
    assert response.body == b"Missing query parameter 'q'\n"


def test_query_returns_matching_documents(stores):
    doc_store, index, first, _ = stores
    response = handle_request("/query?q=alpha%20beta", doc_store, index)
    assert response.status == 200
    assert json.loads(response.body) == [
        {"id": first, "url": URL_A, "text": "alpha beta", "headings": ["Intro"]}
    ]


def test_query_omits_empty_lists_and_skips_unstored(stores):
    doc_store, index, _, second = stores
    results = json.loads(handle_request("/query?q=alpha", doc_store, index).body)
    assert {item["id"] for item in results} == set(doc_store)
    by_id = {item["id"]: item for item in results}
    assert "headings" not in by_id[second]
    assert by_id[second]["code_snippets"] == ["x = 1"]


def test_query_without_matches_is_null(stores):
    doc_store, index, _, _ = stores
    response = handle_request("/query?q=missing", doc_store, index)
    assert response.status == 200
    assert json.loads(response.body) is None


def test_json_escapes_html(stores):
    doc_store, index, _, _ = stores
    body = handle_request("/query?q=gamma", doc_store, index).body
    assert b"\\u003cb\\u003e" in body
    assert b"<b>" not in body


def test_document_found(stores):
    doc_store, index, first, _ = stores
    response = handle_request(f"/document/{first}", doc_store, index)
    assert response.status == 200
    data = json.loads(response.body)
    assert data["ID"] == first
    assert data["URL"] == URL_A
    assert data["Headings"] == ["Intro"]


def test_document_errors(stores):
    doc_store, index, _, _ = stores
    missing = handle_request("/document/nope", doc_store, index)
    assert missing.status == 404
    assert missing.body == b"Document not found\n"
    empty = handle_request("/document/", doc_store, index)
    assert empty.status == 400
    assert empty.body == b"Missing document ID\n"


def test_document_without_slash_redirects(stores):
    doc_store, index, _, _ = stores
    response = handle_request("/document", doc_store, index)
    assert response.status == 301
    assert response.headers["Location"] == "/document/"


def test_unknown_path(stores):
    doc_store, index, _, _ = stores
    response = handle_request("/health/extra", doc_store, index)
    assert response.status == 404
    assert response.body == b"404 page not found\n"


def test_server_round_trip(stores):
    doc_store, index, first, _ = stores
    server = make_server("127.0.0.1", 0, doc_store, index)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        port = server.server_address[1]
        with urllib.request.urlopen(f"http://127.0.0.1:{port}/document/{first}") as reply:
            assert reply.status == 200
            assert json.loads(reply.read())["ID"] == first
        with pytest.raises(urllib.error.HTTPError) as excinfo:
            urllib.request.urlopen(f"http://127.0.0.1:{port}/query")
        assert excinfo.value.code == 400
        excinfo.value.close()
    finally:
        server.shutdown()
        server.server_close()
        thread.join()