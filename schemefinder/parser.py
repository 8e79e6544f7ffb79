from __future__ import annotations

import json
import re
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from .models import SchemeItem


NEXT_DATA_RE = re.compile(r'id="__NEXT_DATA__"[^>]*>([\s\S]*?)</script>')
_ABSOLUTE_RE = re.compile(r"^https?://", re.IGNORECASE)

SCHEME_LINK_SELECTOR = 'a[href*="/scheme"], a[href*="/schemes"]'
CARD_TAGS = ["article", "li", "div", "section"]
MIN_DESCRIPTION_LEN = 20


class Parser:
    @staticmethod
    def extract_text(el) -> str:
        if el is None:
            return ""
        text = " ".join(el.stripped_strings)
        return re.sub(r"\s+", " ", text).strip()

    @staticmethod
    def extract_structured_data(html: Optional[str]) -> Optional[Any]:
        """Return the parsed ``__NEXT_DATA__`` blob embedded in ``html``, or None.

        Missing marker and malformed JSON are both expected outcomes and are
        reported as None.
        """
        if not html:
            return None
        m = NEXT_DATA_RE.search(html)
        if not m:
            return None
        try:
            return json.loads(m.group(1))
        except ValueError:
            return None

    @staticmethod
    def normalize_link(raw: str) -> str:
        raw = (raw or "").strip()
        if not raw:
            return ""
        if _ABSOLUTE_RE.match(raw):
            return raw
        return "/" + raw.lstrip("/")

    @staticmethod
    def card_description(a) -> Optional[str]:
        """First paragraph of the nearest block ancestor, if it says something."""
        card = a.find_parent(CARD_TAGS)
        if card is None:
            return None
        para = Parser.extract_text(card.find("p"))
        if len(para) > MIN_DESCRIPTION_LEN:
            return para
        return None

    @staticmethod
    def scan_markup(html: Optional[str], source_url: Optional[str] = None) -> List[SchemeItem]:
        if not html:
            return []
        soup = BeautifulSoup(html, "lxml")
        seen = set()
        out: List[SchemeItem] = []
        for a in soup.select(SCHEME_LINK_SELECTOR):
            href = Parser.normalize_link(a.get("href") or "")
            if not href or href in seen:
                continue
            title = Parser.extract_text(a)
            if not title:
                continue
            seen.add(href)
            out.append(
                SchemeItem(
                    title=title,
                    href=href,
                    description=Parser.card_description(a),
                    source_url=source_url,
                )
            )
        return out
