from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Literal, Optional, Dict, Any


CONFIG_PATH = Path("web_version_tracker.json")

DEFAULT_TARGET_URL = "https://open.spotify.com"
USER_AGENT_API = "https://jnrbsn.github.io/user-agents/user-agents.json"
FALLBACK_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)
DEFAULT_LEDGER_PATH = "versions_web.json"
DEFAULT_TIMEOUT = 30


FetchBackend = Literal["requests", "browser"]
FETCH_BACKENDS = ("requests", "browser")


@dataclass
class TrackerConfig:
    target_url: str = DEFAULT_TARGET_URL
    user_agent_api: str = USER_AGENT_API
    fallback_user_agent: str = FALLBACK_USER_AGENT
    ledger_path: str = DEFAULT_LEDGER_PATH
    timeout: float = DEFAULT_TIMEOUT
    fetch_backend: FetchBackend = "requests"
    html_dump_path: Optional[str] = None
    verbose: bool = False

    @classmethod
    def load(cls, path: Path = CONFIG_PATH) -> "TrackerConfig":
        if not path.exists():
            return cls()

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls()
        if not isinstance(raw, dict):
            return cls()

        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in raw.items() if k in known}
        config = cls(**{**asdict(cls()), **data})
        if config.fetch_backend not in FETCH_BACKENDS:
            config.fetch_backend = "requests"
        return config

    def save(self, path: Path = CONFIG_PATH) -> None:
        data: Dict[str, Any] = asdict(self)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def with_overrides(self, **overrides: Any) -> "TrackerConfig":
        """
        Return a copy with every non-None override applied (CLI flags win over the file).
        """
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return TrackerConfig(**data)

    @property
    def ledger_file(self) -> Path:
        return Path(self.ledger_path)
