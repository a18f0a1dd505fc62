"""
Web client version tracker.

This package provides:
- Best-effort User-Agent lookup and a single page fetch
- Extraction of the embedded appServerConfig blob from HTML
- A local JSON ledger of every client version seen so far
- A single-shot CLI entrypoint meant to be run from a scheduler.
"""

__version__ = "0.1.0"
