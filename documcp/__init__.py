"""Crawl documentation sites, index their text in memory and serve search over HTTP."""

__version__ = "0.1.0"