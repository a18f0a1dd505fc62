from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from web_version_tracker import __version__
from web_version_tracker.config import CONFIG_PATH, FETCH_BACKENDS, TrackerConfig
from web_version_tracker.errors import FetchError, LedgerError
from web_version_tracker.logconfig import setup_logging
from web_version_tracker.pipeline import run
from web_version_tracker.reporter import LoggingReporter, emit_result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="web-version-tracker",
        description="Check a web page for its embedded client version and record new versions to a JSON ledger.",
    )
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="JSON config file (optional)")
    parser.add_argument("--url", dest="target_url", help="Page to inspect")
    parser.add_argument("--ledger", dest="ledger_path", help="Ledger JSON file to update")
    parser.add_argument("--timeout", type=float, help="Network timeout in seconds")
    parser.add_argument("--backend", dest="fetch_backend", choices=FETCH_BACKENDS, help="How to fetch the page")
    parser.add_argument("--dump-html", dest="html_dump_path", help="Save the fetched HTML here for diagnostics")
    parser.add_argument("--user-agent", help="Use this User-Agent instead of looking one up")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Debug output on stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = TrackerConfig.load(args.config).with_overrides(
        target_url=args.target_url,
        ledger_path=args.ledger_path,
        timeout=args.timeout,
        fetch_backend=args.fetch_backend,
        html_dump_path=args.html_dump_path,
        verbose=args.verbose,
    )
    setup_logging(verbose=config.verbose, quiet=args.quiet)
    reporter = LoggingReporter()
    reporter.info("Starting ...")

    try:
        result = run(config, reporter=reporter, user_agent=args.user_agent)
    except FetchError as e:
        reporter.error(f"Fetch failed: {e}")
        return 1
    except LedgerError as e:
        reporter.error(f"Ledger is unreadable, refusing to overwrite it: {e}")
        return 1
    except KeyboardInterrupt:
        reporter.warning("Interrupted")
        return 130

    emit_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
