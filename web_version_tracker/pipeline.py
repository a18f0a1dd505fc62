"""
One tracker run: fetch -> extract -> decode -> store -> result.

Reportable failures come back as ``{"success": False, ...}`` results. Fetch
failures and an unreadable ledger raise (FetchError / LedgerError) so the
caller can abort without emitting a result.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import requests

from web_version_tracker import store
from web_version_tracker.config import TrackerConfig
from web_version_tracker.decoder import decode_and_validate
from web_version_tracker.errors import LedgerSaveError, ValidationError
from web_version_tracker.extractor import extract_config_blob
from web_version_tracker.fetcher import dump_html, fetch_target, resolve_user_agent
from web_version_tracker.reporter import (
    NullReporter,
    Reporter,
    added_result,
    existing_result,
    failure_result,
)


TAG_NOT_FOUND = "appServerConfig tag not found"


def record_version(
    html: str,
    ledger: store.Ledger,
    ledger_path: Path,
    reporter: Reporter,
    html_dump_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """Everything after the fetch: extract, decode, and insert into ``ledger`` if the key is new."""
    reporter.info("Parsing HTML document...")
    extraction = extract_config_blob(html)

    if extraction.web_player_url:
        reporter.success(f"Web-player: {extraction.web_player_url}")
    else:
        reporter.info("No web-player script found")

    if extraction.blob is None:
        reporter.error("Tag 'appServerConfig' not found in HTML!")
        if html_dump_path is not None:
            reporter.warning(f"Check {html_dump_path} for diagnostics")
        return failure_result(TAG_NOT_FOUND)

    reporter.success(f"Tag found: {extraction.strategy}")

    try:
        fields = decode_and_validate(extraction.blob)
    except ValidationError as e:
        reporter.error(str(e))
        return failure_result(str(e))

    reporter.success(f"Base64 string decoded ({len(extraction.blob)} characters)")
    reporter.success(f"clientVersion: {fields.client_version}")
    if fields.build_date:
        reporter.success(f"buildDate: {fields.build_date}")
    if fields.build_version:
        reporter.success(f"buildVersion: {fields.build_version}")

    key = store.version_key(fields.client_version)
    if store.contains(ledger, key):
        reporter.info(f"Version {key} already recorded")
        return existing_result(key)

    record = store.VersionRecord(
        client_version=fields.client_version,
        build_date=fields.build_date,
        build_version=fields.build_version,
        web_player=extraction.web_player_url,
    )
    store.insert(ledger, key, record)

    reporter.info(f"Saving data to {ledger_path}...")
    try:
        store.save(ledger_path, ledger)
    except LedgerSaveError as e:
        reporter.error(str(e))
        return failure_result(str(e))

    reporter.success(f"Data successfully added to {ledger_path.name}")
    return added_result(key, record, ledger_path.name)


def run(
    config: TrackerConfig,
    reporter: Optional[Reporter] = None,
    session: Optional[requests.Session] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    reporter = reporter or NullReporter()
    http = session or requests.Session()

    ledger_path = config.ledger_file
    ledger = store.load(ledger_path)
    reporter.info(f"Loaded {len(ledger)} known versions from {ledger_path}")

    if user_agent is None:
        reporter.info("Getting current User-Agent...")
        user_agent = resolve_user_agent(
            http,
            api_url=config.user_agent_api,
            fallback=config.fallback_user_agent,
            timeout=config.timeout,
            reporter=reporter,
        )
    reporter.success(f"User-Agent set: {user_agent}")

    reporter.info(f"Sending request to {config.target_url}")
    html = fetch_target(config, user_agent, session=http, reporter=reporter)
    reporter.success(f"HTML received ({len(html.encode('utf-8'))} bytes)")

    dump_path = Path(config.html_dump_path) if config.html_dump_path else None
    if dump_path is not None:
        dump_html(dump_path, html, reporter)

    return record_version(html, ledger, ledger_path, reporter, html_dump_path=dump_path)
