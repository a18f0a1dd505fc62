from __future__ import annotations

import contextlib
import json
import os
import re
from dataclasses import dataclass
from functools import cmp_to_key
from pathlib import Path
from typing import Any, Dict, List, Optional

from web_version_tracker.errors import LedgerError, LedgerSaveError


MAX_KEY_COMPONENTS = 4

_NUMERIC_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class VersionRecord:
    client_version: str
    build_date: str
    build_version: Optional[str] = None
    web_player: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {"buildDate": self.build_date}
        if self.build_version is not None:
            data["buildVersion"] = self.build_version
        data["clientVersion"] = self.client_version
        if self.web_player is not None:
            data["webPlayer"] = self.web_player
        return data

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "VersionRecord":
        client_version = item.get("clientVersion")
        build_date = item.get("buildDate")
        if not isinstance(client_version, str) or not isinstance(build_date, str):
            raise ValueError("entry needs string 'clientVersion' and 'buildDate'")
        build_version = item.get("buildVersion")
        web_player = item.get("webPlayer")
        return cls(
            client_version=client_version,
            build_date=build_date,
            build_version=build_version if isinstance(build_version, str) else None,
            web_player=web_player if isinstance(web_player, str) else None,
        )


Ledger = Dict[str, VersionRecord]


def load(path: Path) -> Ledger:
    """Read the ledger; a missing file is an empty ledger, a broken one is an error."""
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise LedgerError(f"Cannot read ledger {path}: {e}") from e
    if not isinstance(raw, dict):
        raise LedgerError(f"Ledger {path} must hold a JSON object, got {type(raw).__name__}")

    ledger: Ledger = {}
    for key, item in raw.items():
        if not isinstance(item, dict):
            raise LedgerError(f"Ledger entry {key!r} in {path} is not an object")
        try:
            ledger[key] = VersionRecord.from_dict(item)
        except ValueError as e:
            raise LedgerError(f"Ledger entry {key!r} in {path} is invalid: {e}") from e
    return ledger


def version_key(client_version: str) -> str:
    return ".".join(client_version.split(".")[:MAX_KEY_COMPONENTS])


def _numeric_components(key: str) -> List[int]:
    return [int(part) for part in key.split(".") if _NUMERIC_RE.fullmatch(part)]


def compare_keys_desc(a: str, b: str) -> int:
    """
    Comparator for ``sorted(..., key=cmp_to_key(...))``: greater versions first.

    Only purely numeric components take part; "1.x.3" compares like "1.3".
    """
    left, right = _numeric_components(a), _numeric_components(b)
    if left > right:
        return -1
    if left < right:
        return 1
    return 0


def sorted_keys(ledger: Ledger) -> List[str]:
    return sorted(ledger, key=cmp_to_key(compare_keys_desc))


def contains(ledger: Ledger, key: str) -> bool:
    return key in ledger


def insert(ledger: Ledger, key: str, record: VersionRecord) -> None:
    ledger[key] = record


def serialize(ledger: Ledger) -> str:
    ordered = {key: ledger[key].to_dict() for key in sorted_keys(ledger)}
    return json.dumps(ordered, ensure_ascii=False, indent=2) + "\n"


def save(path: Path, ledger: Ledger) -> None:
    """Rewrite the whole ledger file, newest version first."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(serialize(ledger), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise LedgerSaveError(f"Failed to save ledger: {e}") from e
