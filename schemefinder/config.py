from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv


DEFAULT_SITE = "https://www.myscheme.gov.in"
DEFAULT_GEOCODER = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Linux; KaiOS 2.5; rv:48.0) Gecko/48.0 Firefox/48.0"


def _to_int(v: str, default: int) -> int:
    try:
        return int(v)
    except Exception:
        return default


def _to_float(v: str, default: float) -> float:
    try:
        return float(v)
    except Exception:
        return default


@dataclass
class Config:
    site_base_url: str
    request_timeout: float
    user_agent: str
    geocoder_url: str
    geocoder_user_agent: str
    max_items: int
    curated_data_path: Optional[Path]
    api_host: str
    api_port: int
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        site = os.getenv("SITE_BASE_URL", DEFAULT_SITE).strip().rstrip("/") or DEFAULT_SITE

        request_timeout = _to_float(os.getenv("REQUEST_TIMEOUT", "15"), 15.0)
        if request_timeout <= 0:
            request_timeout = 15.0

        max_items = _to_int(os.getenv("MAX_ITEMS", "50"), 50)
        if max_items < 1:
            max_items = 50

        curated_env = os.getenv("CURATED_DATA_PATH", "").strip()

        return cls(
            site_base_url=site,
            request_timeout=request_timeout,
            user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT).strip() or DEFAULT_USER_AGENT,
            geocoder_url=os.getenv("GEOCODER_URL", DEFAULT_GEOCODER).strip() or DEFAULT_GEOCODER,
            geocoder_user_agent=os.getenv(
                "GEOCODER_USER_AGENT", "myscheme-locator/1.0 (+https://github.com/myscheme-locator)"
            ).strip(),
            max_items=max_items,
            curated_data_path=Path(curated_env) if curated_env else None,
            api_host=os.getenv("API_HOST", "127.0.0.1").strip(),
            api_port=_to_int(os.getenv("API_PORT", "8000"), 8000),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    @property
    def headers(self) -> Dict[str, str]:
        """Browser-like header set sent with every page fetch."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/json",
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": f"{self.site_base_url}/",
            # no-cache semantics for any intermediate cache
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }

    @property
    def geocoder_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.geocoder_user_agent,
            "Accept": "application/json",
        }
