"""
Locate the embedded appServerConfig blob and the web-player bundle in a page.

The blob is looked up with an ordered list of strategies; the first one that
matches wins. Adding or dropping a strategy only means editing
``BLOB_STRATEGIES``.
"""

from __future__ import annotations

import re
from typing import Callable, List, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup


CONFIG_ELEMENT_ID = "appServerConfig"

CONFIG_TAG_RE = re.compile(r'<script[^>]*id="appServerConfig"[^>]*>([^<]+)</script>')


class Extraction(NamedTuple):
    blob: Optional[str]
    web_player_url: Optional[str]
    strategy: Optional[str] = None


def _select_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    element = soup.select_one(selector)
    if element is None:
        return None
    if element.name in ("script", "style"):
        # raw text containers: children are Script/Stylesheet strings
        return "".join(str(child) for child in element.contents).strip()
    return element.get_text().strip()


def _by_plain_text_script(soup: BeautifulSoup, html: str) -> Optional[str]:
    return _select_text(soup, f'script[id="{CONFIG_ELEMENT_ID}"][type="text/plain"]')


def _by_script_id(soup: BeautifulSoup, html: str) -> Optional[str]:
    return _select_text(soup, f'script[id="{CONFIG_ELEMENT_ID}"]')


def _by_any_element_id(soup: BeautifulSoup, html: str) -> Optional[str]:
    return _select_text(soup, f"#{CONFIG_ELEMENT_ID}")


def _by_regex(soup: BeautifulSoup, html: str) -> Optional[str]:
    match = CONFIG_TAG_RE.search(html)
    if match is None:
        return None
    return match.group(1).strip()


Strategy = Callable[[BeautifulSoup, str], Optional[str]]

BLOB_STRATEGIES: List[Tuple[str, Strategy]] = [
    ('script[id="appServerConfig"][type="text/plain"]', _by_plain_text_script),
    ('script[id="appServerConfig"]', _by_script_id),
    ("#appServerConfig", _by_any_element_id),
    ("regex", _by_regex),
]


def find_config_blob(soup: BeautifulSoup, html: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(blob, strategy_name)`` for the first matching strategy, or ``(None, None)``."""
    for name, strategy in BLOB_STRATEGIES:
        blob = strategy(soup, html)
        if blob is not None:
            return blob, name
    return None, None


def find_web_player_url(soup: BeautifulSoup) -> Optional[str]:
    for script in soup.select("script[src]"):
        src = script.get("src")
        if isinstance(src, str) and "web-player" in src and src.endswith(".js"):
            return src
    return None


def extract_config_blob(html: str) -> Extraction:
    soup = BeautifulSoup(html, "html.parser")
    blob, strategy = find_config_blob(soup, html)
    return Extraction(blob=blob, web_player_url=find_web_player_url(soup), strategy=strategy)
