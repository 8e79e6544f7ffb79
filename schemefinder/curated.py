"""Hand-picked scheme lists for regions where live extraction is unreliable.

A dataset is a district match plus a fixed item list. The built-in one
covers Nagpur; ``load_curated`` swaps it for a JSON file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import quote

from loguru import logger

from .config import DEFAULT_SITE
from .models import RegionQuery, SchemeItem


@dataclass(frozen=True)
class CuratedDataset:
    match: str
    items: Tuple[SchemeItem, ...]
    note: str

    def matches(self, region: RegionQuery) -> bool:
        needle = (self.match or "").strip().lower()
        if not needle:
            return False
        return needle in (region.district or "").lower()


def _search_href(term: str, site: str = DEFAULT_SITE) -> str:
    return f"{site}/search?q={quote(f'{term} Nagpur Maharashtra', safe='')}"


_NAGPUR: List[Tuple[str, str, str]] = [
    (
        "Pradhan Mantri Awas Yojana (Urban)",
        "Pradhan Mantri Awas Yojana Urban",
        "Affordable housing benefits for eligible urban beneficiaries in Nagpur.",
    ),
    ("Ayushman Bharat - PM-JAY", "Ayushman Bharat PM-JAY", "Health insurance coverage for eligible families."),
    (
        "Pradhan Mantri Ujjwala Yojana",
        "Pradhan Mantri Ujjwala Yojana",
        "Subsidized LPG connections for eligible households.",
    ),
    ("PM-KISAN Samman Nidhi", "PM Kisan Samman Nidhi", "Income support for eligible farmers."),
    ("Atal Pension Yojana", "Atal Pension Yojana", "Voluntary pension scheme for unorganised sector workers."),
    ("Pradhan Mantri Mudra Yojana", "Pradhan Mantri Mudra Yojana", "Loans for micro/small enterprises."),
    ("Stand Up India Scheme", "Stand Up India", "Loans for women and SC/ST entrepreneurs."),
    ("Sukanya Samriddhi Yojana", "Sukanya Samriddhi Yojana", "Savings scheme for the girl child."),
    (
        "National Social Assistance Programme (Pension)",
        "National Social Assistance Pension",
        "Central pension support for eligible elderly/widow/disabled persons.",
    ),
    (
        "Mahatma Jyotiba Phule Jan Arogya Yojana (MJPJAY)",
        "Mahatma Jyotiba Phule Jan Arogya Yojana",
        "Maharashtra state health insurance scheme.",
    ),
    ("eShram Registration", "eShram", "National database for unorganised workers with benefits access."),
    ("Swachh Bharat Mission - Urban", "Swachh Bharat Mission Urban", "Urban sanitation and cleanliness initiatives."),
]


def nagpur_schemes(site: str = DEFAULT_SITE) -> CuratedDataset:
    site = (site or DEFAULT_SITE).rstrip("/")
    return CuratedDataset(
        match="nagpur",
        items=tuple(
            SchemeItem(title=title, href=_search_href(term, site), description=desc, source_url=site)
            for title, term, desc in _NAGPUR
        ),
        note="Showing curated Nagpur schemes (mock data).",
    )


NAGPUR_SCHEMES = nagpur_schemes()


def _read_dataset(path: Path) -> CuratedDataset:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    items = tuple(
        it
        for it in (SchemeItem.from_dict(d) for d in data.get("items") or [] if isinstance(d, dict))
        if it.title and it.href
    )
    return CuratedDataset(
        match=str(data.get("match") or ""),
        items=items,
        note=str(data.get("note") or "Showing curated schemes."),
    )


def load_curated(path: Optional[Path], site: str = DEFAULT_SITE) -> CuratedDataset:
    """Read a curated dataset from JSON, or return the built-in Nagpur list.

    Expected shape: ``{"match": str, "note": str, "items": [{title, href, description?}]}``.
    An unreadable or malformed file is logged and the built-in list is used.
    """
    if path is None:
        return nagpur_schemes(site)
    try:
        return _read_dataset(path)
    except (OSError, ValueError, TypeError) as e:
        logger.exception(f"Could not load curated dataset from {path}: {e}")
        return nagpur_schemes(site)
