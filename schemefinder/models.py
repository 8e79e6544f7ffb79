"""Transient value types built per request: region queries, scheme items and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode


@dataclass(frozen=True)
class SchemeItem:
    title: str
    href: str
    description: Optional[str] = None
    source_url: Optional[str] = None

    def is_absolute(self) -> bool:
        return self.href.startswith("http")

    def absolute_href(self, site_base_url: str) -> str:
        if self.is_absolute():
            return self.href
        return f"{site_base_url.rstrip('/')}/{self.href.lstrip('/')}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title, "href": self.href}
        if self.description:
            out["description"] = self.description
        if self.source_url:
            out["sourceUrl"] = self.source_url
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemeItem":
        return cls(
            title=str(data.get("title") or "").strip(),
            href=str(data.get("href") or "").strip(),
            description=(str(data.get("description") or "").strip() or None),
            source_url=(str(data.get("sourceUrl") or data.get("source_url") or "").strip() or None),
        )


@dataclass(frozen=True)
class RegionQuery:
    state: str
    district: Optional[str] = None

    @property
    def search_query(self) -> str:
        state = (self.state or "").strip()
        district = (self.district or "").strip()
        return f"{state} {district}" if district else state

    def search_url(self, site_base_url: str) -> str:
        """Deep link into the site's search page; always computable."""
        return f"{site_base_url.rstrip('/')}/search?{urlencode({'q': self.search_query})}"


@dataclass
class SchemeResponse:
    items: List[SchemeItem]
    source_url: str
    note: Optional[str] = None
    error: Optional[str] = None
    strategy: Optional[str] = field(default=None, compare=False)

    def limited(self, max_items: int) -> List[SchemeItem]:
        return self.items[:max_items]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "items": [i.to_dict() for i in self.items],
            "sourceUrl": self.source_url,
        }
        if self.note:
            out["note"] = self.note
        if self.error:
            out["error"] = self.error
        return out


@dataclass
class ResolvedLocation:
    state: Optional[str]
    district: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"state": self.state, "district": self.district, "raw": self.raw}
