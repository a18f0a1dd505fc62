"""
Shared fixtures for the tracker tests.

Nothing here touches the network: FakeSession answers requests from a
URL -> response table.
"""

import base64
import json
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

from web_version_tracker.config import TrackerConfig


TARGET_URL = "https://example.test/"
UA_API_URL = "https://ua.example.test/user-agents.json"


def make_blob(payload: Any) -> str:
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


def make_page(blob: Optional[str] = None, scripts: Optional[List[str]] = None) -> str:
    script_tags = "".join(f'<script src="{src}"></script>' for src in (scripts or []))
    config_tag = ""
    if blob is not None:
        config_tag = f'<script id="appServerConfig" type="text/plain">{blob}</script>'
    return f"<!DOCTYPE html><html><head>{config_tag}{script_tags}</head><body></body></html>"


def make_response(
    body: Union[str, bytes] = b"",
    status: int = 200,
    content_type: Optional[str] = "text/html; charset=utf-8",
    url: str = TARGET_URL,
) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Error"
    resp.url = url
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    if content_type is not None:
        resp.headers["Content-Type"] = content_type
        resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
    return resp


class FakeSession:
    """Stands in for requests.Session; seed with {url: Response | Exception}."""

    def __init__(self, routes: Dict[str, Union[requests.Response, Exception]]):
        self.routes = routes
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, timeout: Optional[float] = None):
        self.calls.append({"url": url, "headers": headers or {}, "timeout": timeout})
        answer = self.routes.get(url)
        if answer is None:
            raise requests.exceptions.ConnectionError(f"no route for {url}")
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def payload() -> Dict[str, str]:
    return {
        "clientVersion": "1.2.48.405.gf2c48e6f",
        "buildDate": "2024-10-28",
        "buildVersion": "web-player_2024-10-28_1730000000000_gf2c48e6",
    }


@pytest.fixture
def config(tmp_path) -> TrackerConfig:
    return TrackerConfig(
        target_url=TARGET_URL,
        user_agent_api=UA_API_URL,
        ledger_path=str(tmp_path / "versions_web.json"),
        timeout=5,
    )
