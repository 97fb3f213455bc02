"""Crawl job scheduling into per-process directories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import get_processes_dir
from .crawler import CrawlResult, Crawler, Fetcher, new_process_dir

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class CrawlJob:
    """A crawl job and the directory its results were written to."""

    seed_url: str
    max_depth: int
    max_pages: int
    concurrency: int
    process_id: str
    process_dir: Path


class Scheduler:
    """Starts crawl jobs under a configuration directory."""

    def __init__(self, config_dir: PathLike, fetch: Optional[Fetcher] = None) -> None:
        self.config_dir = Path(config_dir)
        self._fetch = fetch

    def start_crawl_job(
        self, seed_url: str, max_depth: int, max_pages: int, concurrency: int
    ) -> tuple[CrawlJob, list[CrawlResult]]:
        """Create a process directory, run a crawl into it, and return the job and results."""
        process_dir = new_process_dir(get_processes_dir(self.config_dir))
        crawler = Crawler(seed_url, process_dir, fetch=self._fetch)
        results = crawler.start(seed_url, max_depth, max_pages, concurrency)
        job = CrawlJob(
            seed_url=seed_url,
            max_depth=max_depth,
            max_pages=max_pages,
            concurrency=concurrency,
            process_id=process_dir.name,
            process_dir=process_dir,
        )
        return job, results