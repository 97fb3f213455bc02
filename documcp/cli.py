"""Command-line interface: crawl, query, serve, config and version."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from .api import start_server
from .config import ConfigError, get_default_config_dir, load_config
from .docstore import Document
from .index import InvertedIndex
from .parse import (
    extract_code_snippets,
    extract_headings,
    parse_html_from_url,
    split_text_to_sentences,
)
from .scheduler import Scheduler

VERSION = "0.1.0"

_USAGE_LINES = (
    "Usage: documcp <command> [options]",
    "Commands:",
    "  crawl   -url <seed_url>    Crawl a documentation site",
    "  query   -s <string>        Query indexed content",
    "  serve   [-port <port>]     Start the API server",
    "  config  [-dir <dir>]       Show config from specified directory",
    "  version                     Show version",
)


def print_usage() -> str:
    """Print the command summary and return the printed text."""
    text = "\n".join(_USAGE_LINES)
    print(text)
    return text


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _parser(name: str) -> argparse.ArgumentParser:
    return argparse.ArgumentParser(prog=f"documcp {name}")


def _format_list(items: Sequence[str]) -> str:
    return "[" + " ".join(items) + "]"


def _crawl(args: Sequence[str], config_dir: Path) -> int:
    parser = _parser("crawl")
    parser.add_argument("-url", "--url", default="", help="Seed URL to crawl")
    parser.add_argument("-depth", "--depth", type=int, default=2, help="Max crawl depth")
    parser.add_argument("-max", "--max", type=int, default=20, help="Max pages to crawl")
    parser.add_argument(
        "-concurrency", "--concurrency", type=int, default=4,
        help="Number of concurrent workers",
    )
    options = parser.parse_args(args)
    if not options.url:
        print("Please provide a seed URL with -url")
        return 1

    try:
        job, results = Scheduler(config_dir).start_crawl_job(
            options.url, options.depth, options.max, options.concurrency
        )
    except (OSError, ValueError) as exc:
        _error(f"Crawl failed: {exc}")
        return 1
    print(
        f"Crawling: {options.url} (depth={options.depth}, max={options.max}, "
        f"concurrency={options.concurrency})"
    )
    print(f"Process ID: {job.process_id}\nProcess Dir: {job.process_dir}")

    doc_store: dict[str, Document] = {}
    index = InvertedIndex()
    for result in results:
        sentences = split_text_to_sentences(result.text)
        try:
            page = parse_html_from_url(result.url)
        except (OSError, ValueError):
            page = None
        code_snippets = extract_code_snippets(page) if page is not None else []
        headings = extract_headings(page) if page is not None else []
        doc_id = index.add_document(result.url, "", result.text)
        doc_store[doc_id] = Document(
            doc_id, result.url, "", result.text, headings, code_snippets, {}, 1
        )
        for sentence in sentences:
            index.add_document(result.url, "", sentence)
        for code in code_snippets:
            index.add_document(result.url, "", code)

    print(f"Indexed {len(results)} documents.")
    print(f"Results saved to: {job.process_dir}")
    return 0


def _query(args: Sequence[str], config_dir: Path) -> int:
    parser = _parser("query")
    parser.add_argument("-s", "--s", dest="query", default="", help="Query string")
    options = parser.parse_args(args)
    if not options.query:
        print("Please provide a query string with -s")
        return 1

    doc_store: dict[str, Document] = {}
    index = InvertedIndex()
    hits = index.search(options.query)
    quoted = json.dumps(options.query, ensure_ascii=False)
    print(f"Found {len(hits)} results for query: {quoted}")
    for hit in hits:
        document = doc_store.get(hit.id)
        if document is None:
            continue
        print(f"URL: {document.url}")
        print(f"Text: {document.text[:200]}")
        if document.headings:
            print(f"Headings: {_format_list(document.headings)}")
        if document.code_snippets:
            print(f"Code Snippets: {_format_list(document.code_snippets)}")
        print("-----")
    return 0


def _serve(args: Sequence[str], config_dir: Path) -> int:
    parser = _parser("serve")
    parser.add_argument("-port", "--port", default="8080", help="Port to run API server on")
    options = parser.parse_args(args)
    print(f"Starting API server on port {options.port}")
    try:
        start_server(":" + options.port, {}, InvertedIndex())
    except (OSError, ValueError) as exc:
        _error(f"API server failed: {exc}")
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


def _config(args: Sequence[str], config_dir: Path) -> int:
    parser = _parser("config")
    parser.add_argument("-dir", "--dir", default="", help="Config directory to use")
    options = parser.parse_args(args)
    directory = Path(options.dir) if options.dir else config_dir
    try:
        config = load_config(directory)
    except ConfigError as exc:
        _error(f"Failed to load config from {directory}: {exc}")
        return 1
    print(f"Config loaded from {directory}:")
    print(f"  AppName: {config.app_name}")
    print(f"  Version: {config.version}")
    return 0


_COMMANDS: dict[str, Callable[[Sequence[str], Path], int]] = {
    "crawl": _crawl,
    "query": _query,
    "serve": _serve,
    "config": _config,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config_dir = get_default_config_dir()
    except ConfigError as exc:
        _error(f"Failed to get config dir: {exc}")
        return 1
    try:
        load_config(config_dir)
    except ConfigError as exc:
        _error(f"Failed to load config: {exc}")
        return 1

    if not args:
        print_usage()
        return 1
    if args[0] == "version":
        print("documcp version", VERSION)
        return 0
    command = _COMMANDS.get(args[0])
    if command is None:
        print_usage()
        return 1
    return command(args[1:], config_dir)