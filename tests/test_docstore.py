import json
from datetime import datetime

from documcp.docstore import Document


def test_defaults():
    doc = Document(id="d", url="https://example.com/")
    assert doc.headings == []
    assert doc.code_snippets == []
    assert doc.metadata == {}
    assert doc.version == 1
    assert doc.title == ""


def test_last_updated_is_current():
    before = datetime.now().astimezone()
    doc = Document(id="d", url="u")
    after = datetime.now().astimezone()
    assert before <= doc.last_updated <= after


def test_default_lists_are_independent():
    first = Document(id="a", url="u")
    second = Document(id="b", url="u")
    first.headings.append("Intro")
    assert second.headings == []


def test_to_dict_fields():
    doc = Document(
        id="doc1",
        url="https://example.com/page",
        title="Title",
        text="Body text",
        headings=["Intro"],
        code_snippets=["print(1)"],
        metadata={"lang": "en"},
        version=3,
    )
    data = doc.to_dict()
    assert set(data) == {
        "ID", "URL", "Title", "Text", "Headings",
        "CodeSnippets", "Metadata", "Version", "LastUpdated",
    }
    assert data["ID"] == "doc1"
    assert data["URL"] == "https://example.com/page"
    assert data["Headings"] == ["Intro"]
    assert data["CodeSnippets"] == ["print(1)"]
    assert data["Metadata"] == {"lang": "en"}
    assert data["Version"] == 3


def test_to_dict_timestamp_round_trip():
    doc = Document(id="d", url="u")
    data = json.loads(json.dumps(doc.to_dict()))
    assert datetime.fromisoformat(data["LastUpdated"]) == doc.last_updated