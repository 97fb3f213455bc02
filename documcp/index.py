"""A simple thread-safe in-memory full-text index."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

_WORD = re.compile(r"[A-Za-z0-9]+")
_SENTENCE_END = frozenset(".!?")


@dataclass(frozen=True)
class IndexedDocument:
    """A document as stored in the index."""

    id: str
    url: str
    title: str
    text: str


def tokenize(text: str) -> list[str]:
    """Split text into lowercase runs of ASCII letters and digits."""
    return [word.lower() for word in _WORD.findall(text)]


def tokenize_sentences(text: str) -> list[str]:
    """Split text into trimmed sentences ending at '.', '!' or '?'; trailing text is kept."""
    sentences: list[str] = []
    current: list[str] = []
    for char in text:
        current.append(char)
        if char in _SENTENCE_END:
            sentence = "".join(current).strip()
            if sentence:
                sentences.append(sentence)
            current = []
    tail = "".join(current).strip()
    if tail:
        sentences.append(tail)
    return sentences


def contains_all_terms(sentence: str, terms: Iterable[str]) -> bool:
    """Return whether every term occurs, case-insensitively, in the sentence."""
    lowered = sentence.lower()
    return all(term in lowered for term in terms)


class InvertedIndex:
    """Maps lowercase terms to the documents that contain them."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._docs: dict[str, IndexedDocument] = {}
        self._terms: dict[str, set[str]] = {}
        self._next_id = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._docs)

    def add_document(self, url: str, title: str, text: str) -> str:
        """Index a new document and return its generated ID."""
        with self._lock:
            self._next_id += 1
            doc_id = f"doc{self._next_id}"
            self._docs[doc_id] = IndexedDocument(doc_id, url, title, text)
            for term in tokenize(text):
                self._terms.setdefault(term, set()).add(doc_id)
            return doc_id

    def _matching_ids(self, terms: list[str]) -> set[str]:
        if not terms:
            return set()
        matches: Optional[set[str]] = None
        for term in terms:
            doc_ids = self._terms.get(term)
            if not doc_ids:
                return set()
            matches = set(doc_ids) if matches is None else matches & doc_ids
        return matches or set()

    def _matching_docs(self, terms: list[str]) -> list[IndexedDocument]:
        ids = self._matching_ids(terms)
        return [doc for doc_id, doc in self._docs.items() if doc_id in ids]

    def search(self, query: str) -> list[IndexedDocument]:
        """Return documents containing every term of the query, in insertion order."""
        with self._lock:
            return self._matching_docs(tokenize(query))

    def get_document(self, doc_id: str) -> Optional[IndexedDocument]:
        """Return the document with the given ID, or None."""
        with self._lock:
            return self._docs.get(doc_id)

    def search_sentences(self, query: str) -> list[str]:
        """Return sentences of matching documents that contain every query term."""
        with self._lock:
            terms = tokenize(query)
            return [
                sentence
                for doc in self._matching_docs(terms)
                for sentence in tokenize_sentences(doc.text)
                if contains_all_terms(sentence, terms)
            ]