"""Concurrent same-host web crawler that persists its results to disk."""

from __future__ import annotations

import json
import os
import queue
import threading
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple, Union
from urllib.parse import urlsplit

from .extractor import extract_links, extract_text
from .parse import parse_html

RESULTS_FILE_NAME = "results.json"
_FETCH_TIMEOUT = 30.0

Fetcher = Callable[[str], Tuple[int, bytes]]
PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class CrawlResult:
    """A crawled URL and the text extracted from it."""

    url: str
    text: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON representation stored in results.json."""
        return {"URL": self.url, "Text": self.text}


def fetch_url(url: str) -> tuple[int, bytes]:
    """Fetch a URL and return its status code and body."""
    try:
        with urllib.request.urlopen(url, timeout=_FETCH_TIMEOUT) as response:
            return response.status, response.read()
    except urllib.error.HTTPError as exc:
        with exc:
            return exc.code, b""


def new_process_dir(base_dir: PathLike) -> Path:
    """Create a uniquely named process directory under base_dir and return it."""
    process_dir = Path(base_dir) / str(time.time_ns())
    process_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
    return process_dir


class Crawler:
    """Crawls pages on the seed's host with a pool of worker threads."""

    def __init__(self, seed: str, process_dir: PathLike, fetch: Optional[Fetcher] = None) -> None:
        self.host = urlsplit(seed).netloc.rpartition("@")[2]
        self.process_dir = Path(process_dir)
        self.process_id = self.process_dir.name
        self.visited: set[str] = set()
        self._fetch: Fetcher = fetch or fetch_url
        self._lock = threading.Lock()

    def start(
        self, seed: str, max_depth: int, max_pages: int, concurrency: int
    ) -> list[CrawlResult]:
        """Crawl from seed, save the results to results.json and return them."""
        work: queue.Queue[Optional[tuple[str, int]]] = queue.Queue()
        results: list[CrawlResult] = []
        with self._lock:
            if seed not in self.visited:
                self.visited.add(seed)
                work.put((seed, 0))

        workers = [
            threading.Thread(
                target=self._worker,
                args=(work, results, max_depth, max_pages),
                daemon=True,
            )
            for _ in range(max(1, concurrency))
        ]
        for worker in workers:
            worker.start()
        work.join()
        for _ in workers:
            work.put(None)
        for worker in workers:
            worker.join()

        results = results[:max_pages]
        self._save_results(results)
        return results

    def _worker(
        self,
        work: "queue.Queue[Optional[tuple[str, int]]]",
        results: list[CrawlResult],
        max_depth: int,
        max_pages: int,
    ) -> None:
        while True:
            item = work.get()
            try:
                if item is None:
                    return
                url, depth = item
                try:
                    self._crawl(url, depth, max_depth, max_pages, work, results)
                except Exception as exc:  # a broken page must not stop the crawl
                    print(f"[ERROR] Failed to crawl {url}: {exc}")
            finally:
                work.task_done()

    def _crawl(
        self,
        url: str,
        depth: int,
        max_depth: int,
        max_pages: int,
        work: "queue.Queue[Optional[tuple[str, int]]]",
        results: list[CrawlResult],
    ) -> None:
        if depth > max_depth:
            return
        with self._lock:
            if len(self.visited) > max_pages:
                return

        print(f"[CRAWL] Depth {depth}: {url}")
        try:
            status, body = self._fetch(url)
        except (OSError, ValueError) as exc:
            print(f"[ERROR] Failed to GET {url}: {exc}")
            return
        if status != 200:
            print(f"[ERROR] Non-OK status for {url}: {status}")
            return

        page = parse_html(body)
        with self._lock:
            if len(results) < max_pages:
                results.append(CrawlResult(url, extract_text(page)))

        links = extract_links(page, self.host)
        print(f"[LINKS] Found {len(links)} links on {url}")
        for link in links:
            with self._lock:
                if link in self.visited or len(self.visited) >= max_pages:
                    continue
                self.visited.add(link)
            print(f"[ENQUEUE] {link} (depth {depth + 1})")
            work.put((link, depth + 1))

    def _save_results(self, results: list[CrawlResult]) -> None:
        self.process_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        payload = json.dumps([result.to_dict() for result in results], indent=2)
        (self.process_dir / RESULTS_FILE_NAME).write_text(payload + "\n", encoding="utf-8")