from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import requests
from playwright.async_api import async_playwright, Error as PlaywrightError

from web_version_tracker.config import (
    DEFAULT_TIMEOUT,
    FALLBACK_USER_AGENT,
    USER_AGENT_API,
    TrackerConfig,
)
from web_version_tracker.errors import FetchError
from web_version_tracker.reporter import NullReporter, Reporter


TEXT_CONTENT_MARKERS = ("text/", "html", "xml", "json", "javascript")


def resolve_user_agent(
    session: Optional[requests.Session] = None,
    api_url: str = USER_AGENT_API,
    fallback: str = FALLBACK_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
    reporter: Optional[Reporter] = None,
) -> str:
    """
    Fetch the list of current browser User-Agents and return the first one.

    Never raises: any network or parse problem yields ``fallback``.
    """
    reporter = reporter or NullReporter()
    http = session or requests.Session()
    try:
        resp = http.get(api_url, timeout=timeout)
        resp.raise_for_status()
        agents = resp.json()
    except requests.exceptions.Timeout:
        reporter.warning("User-Agent lookup timed out, using fallback")
        return fallback
    except (requests.exceptions.RequestException, ValueError) as e:
        reporter.warning(f"Failed to get UA from API ({e}), using fallback")
        return fallback

    if isinstance(agents, list) and agents and isinstance(agents[0], str) and agents[0].strip():
        return agents[0]

    reporter.warning("UA API returned no usable entries, using fallback")
    return fallback


def _is_text_response(resp: requests.Response) -> bool:
    content_type = (resp.headers.get("Content-Type") or "").lower()
    if not content_type:
        return True
    return any(marker in content_type for marker in TEXT_CONTENT_MARKERS)


def _body_encoding(resp: requests.Response) -> str:
    # requests falls back to ISO-8859-1 for text/* without a charset; pages are UTF-8
    content_type = (resp.headers.get("Content-Type") or "").lower()
    if "charset=" in content_type and resp.encoding:
        return resp.encoding
    return "utf-8"


def fetch_page(
    url: str,
    user_agent: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    reporter: Optional[Reporter] = None,
) -> str:
    """
    GET ``url`` with the given User-Agent and return the body as text.

    An error status is only a warning: block and maintenance pages still get
    parsed, and a missing config tag is reported in-band.
    """
    reporter = reporter or NullReporter()
    http = session or requests.Session()
    try:
        resp = http.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise FetchError(f"Request to {url} timed out after {timeout}s") from e
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    if not _is_text_response(resp):
        raise FetchError(f"Unexpected non-text response from {url}: {resp.headers.get('Content-Type')}")

    if resp.status_code >= 400:
        reporter.warning(f"HTTP {resp.status_code} from {url}, parsing the body anyway")

    encoding = _body_encoding(resp)
    try:
        return resp.content.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise FetchError(f"Could not decode response body from {url} as {encoding}: {e}") from e


async def fetch_html_with_playwright(
    url: str,
    user_agent: str,
    timeout: float = DEFAULT_TIMEOUT,
    headless: bool = True,
) -> str:
    """Render ``url`` in headless Chromium and return the final DOM as HTML."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            context = await browser.new_context(user_agent=user_agent, accept_downloads=False)
            page = await context.new_page()
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)
            return await page.content()
        finally:
            await browser.close()


def fetch_page_rendered(url: str, user_agent: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    try:
        return asyncio.run(fetch_html_with_playwright(url, user_agent, timeout=timeout))
    except PlaywrightError as e:
        raise FetchError(f"Browser fetch of {url} failed: {e}") from e


def fetch_target(
    config: TrackerConfig,
    user_agent: str,
    session: Optional[requests.Session] = None,
    reporter: Optional[Reporter] = None,
) -> str:
    if config.fetch_backend == "browser":
        return fetch_page_rendered(config.target_url, user_agent, timeout=config.timeout)
    return fetch_page(config.target_url, user_agent, session=session, timeout=config.timeout, reporter=reporter)


def dump_html(path: Path, html: str, reporter: Optional[Reporter] = None) -> bool:
    """Write the fetched page to disk for later inspection. Failure is only a warning."""
    reporter = reporter or NullReporter()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as e:
        reporter.warning(f"Could not save HTML to {path}: {e}")
        return False
    reporter.info(f"HTML saved to {path}")
    return True
