from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from web_version_tracker.errors import (
    Base64Error,
    EmptyBlobError,
    JsonError,
    MissingFieldError,
    Utf8Error,
)


@dataclass(frozen=True)
class VersionFields:
    client_version: str
    build_date: str
    build_version: Optional[str] = None


def _string_field(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def decode_and_validate(blob: str) -> VersionFields:
    """
    Decode the base64 appServerConfig blob and pull out the version fields.

    Raises a ValidationError subclass naming the step that failed.
    """
    candidate = blob.strip()
    if not candidate:
        raise EmptyBlobError()

    try:
        raw = base64.b64decode(candidate, validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64Error(str(e)) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8Error(str(e)) from e

    try:
        payload = json.loads(text)
    except ValueError as e:
        raise JsonError(str(e)) from e
    if not isinstance(payload, dict):
        raise JsonError(f"expected an object, got {type(payload).__name__}")

    client_version = _string_field(payload, "clientVersion")
    build_date = _string_field(payload, "buildDate")
    if client_version is None or build_date is None:
        raise MissingFieldError()

    return VersionFields(
        client_version=client_version,
        build_date=build_date,
        build_version=_string_field(payload, "buildVersion"),
    )
