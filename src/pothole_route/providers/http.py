from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


@dataclass
class HTTPClient:
    """Thin requests session with a fixed User-Agent. Single attempt per call."""

    user_agent: str
    timeout_s: int = 25

    def __post_init__(self) -> None:
        self.s = requests.Session()
        self.s.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/geo+json, application/json, */*;q=0.8",
            }
        )

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout_s: Optional[int] = None,
    ) -> Dict[str, Any]:
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        r = self.s.get(url, params=params, timeout=timeout)
        r.raise_for_status()
        return r.json()
