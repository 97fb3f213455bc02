# documcp

documcp crawls a documentation site on a single host and extracts each
page's text. It saves the crawl to disk and builds an in-memory full-text
index of the pages, with their headings and code snippets. It also
provides a small JSON HTTP API for serving such an index.

## Installation

```
pip install .
```

## Configuration

Every command first loads `~/.documcp/config.json`. If that file does not
exist, documcp creates it together with the subdirectories `indexes/`,
`connections/` and `processes/`. The file holds two fields, `app_name` and
`version`, and neither may be empty. If these environment variables are set
and non-empty, they override the values from the file:

- `DOCUMCP_APP_NAME`
- `DOCUMCP_VERSION`

## Commands

```
documcp crawl -url https://docs.example.com/ [-depth 2] [-max 20] [-concurrency 4]
documcp query -s "search terms"
documcp serve [-port 8080]
documcp config [-dir /path/to/config]
documcp version
```

Options may be written with one dash or two, for example `-url` or `--url`.

- `crawl` starts at the seed URL and follows `<a href>` links that stay on
  the seed's host. A leading `www.` is ignored when hosts are compared.
  Links starting with `#` or `mailto:` are skipped. Fragments are removed
  and paths are normalised. The crawl goes no deeper than `-depth` links
  and keeps at most `-max` pages. `-concurrency` sets the number of worker
  threads. Each crawl writes `results.json`, a list of `{"URL", "Text"}`
  objects, to a new directory named by a nanosecond timestamp under
  `processes/`. documcp then fetches each page again, extracts its
  headings (`h1`–`h6`) and code snippets (`pre`, `code`), and indexes the
  page text, its sentences and its code snippets. It prints the process ID,
  the process directory and the number of documents indexed.
- `query` searches an index and prints each match's URL, the first 200
  characters of its text, and its headings and code snippets.
- `serve` runs the HTTP API on the given port, on all interfaces.
- `config` loads the configuration from `-dir`, or from `~/.documcp` if
  `-dir` is not given, and prints the application name and version.
- `version` prints `documcp version 0.1.0`.

Running with no command, or with an unknown one, prints the usage and exits
with status 1.

## HTTP API

- `GET /health` returns `{"status":"ok"}`.
- `GET /query?q=<terms>` returns a JSON list of the stored documents that
  contain every term. Each item has `id`, `url` and `text`, plus
  `headings` and `code_snippets` when they are not empty. When nothing
  matches, the body is `null`. A missing `q` gives 400.
- `GET /document/<id>` returns one stored document with the fields `ID`,
  `URL`, `Title`, `Text`, `Headings`, `CodeSnippets`, `Metadata`, `Version`
  and `LastUpdated`. An unknown ID gives 404 and an empty ID gives 400.
  `/document` redirects to `/document/`.
- `/mcp` answers 501 with `{"error":"MCP endpoint not implemented yet"}`.
- Any other path gives 404.

The server handles `HEAD` and answers other methods as if they were `GET`.

## What documcp does not do

Indexes live only in memory and are never saved. `crawl` builds its index
and throws it away when the command ends. `query` and `serve` each start
with an empty index and an empty document store, so on the command line
`query` always reports 0 results and the server has no documents to
return. The `indexes/` and `connections/` directories are created but
nothing is written to them. documcp offers no Model Context Protocol
integration; `/mcp` only reports that it is not available.

## Library use

```python
from documcp.index import InvertedIndex

index = InvertedIndex()
doc_id = index.add_document("https://docs.example.com/", "", "Install the tool. Run it daily!")
print([doc.url for doc in index.search("install tool")])
print(index.search_sentences("run"))
```

An index matches whole tokens only. A token is a run of ASCII letters or
digits, and case does not matter. `search` returns the documents that
contain every term of the query, in the order they were added.
`search_sentences` returns the sentences of those documents that contain
every term. `get_document` looks up a document by its ID and returns
`None` if there is none.

Other building blocks:

- `documcp.scheduler.Scheduler(config_dir).start_crawl_job(seed_url, max_depth, max_pages, concurrency)`
  runs a crawl into a new process directory. It returns a `CrawlJob` and
  the list of `CrawlResult`s.
- `documcp.crawler.Crawler` and `Scheduler` take an optional
  `fetch(url) -> (status, body)` callable in place of real HTTP requests.
- `documcp.parse` provides `parse_html`, `split_text_to_sentences`,
  `extract_headings`, `extract_code_snippets`, `node_text` and
  `parse_html_from_url`.
- `documcp.extractor` provides `extract_links` and `extract_text`.
- `documcp.api.handle_request(path, doc_store, index)` returns a
  `Response` without any network I/O. `make_server` and `start_server`
  serve the API over a `doc_store` mapping of IDs to
  `documcp.docstore.Document` objects and an `InvertedIndex`.
- `documcp.config` provides `load_config`, `save_config`, `Config` and
  `ConfigError`.