from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from loguru import logger


class HttpClient:
    def __init__(self, headers: Dict[str, str], *, timeout: float = 15.0):
        self.session = requests.Session()
        self.session.headers.update(headers)
        self.timeout = timeout

    def fetch(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.session.get(url, params=params, timeout=self.timeout)

    def fetch_text(self, url: str) -> Optional[str]:
        """GET ``url`` and return the body, or None on any failure.

        Transport errors, non-2xx statuses and unexpected exceptions all
        collapse to None so callers only branch on None vs text.
        """
        try:
            resp = self.fetch(url)
            if not resp.ok:
                logger.warning(f"GET {url} -> HTTP {resp.status_code}")
                return None
            return resp.text
        except requests.RequestException as e:
            logger.warning(f"GET {url} failed: {e}")
            return None
        except Exception as e:
            logger.warning(f"GET {url} failed unexpectedly: {e!r}")
            return None

    def close(self) -> None:
        self.session.close()
