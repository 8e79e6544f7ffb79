"""Generic search for scheme-like records inside an arbitrary JSON tree.

The embedded page data changes shape whenever the site is redeployed, so
instead of following a fixed path we walk every dict and list reachable
from the root and keep anything that looks like a scheme: a title-like
field plus a location-like field.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .models import SchemeItem


TITLE_KEYS = ("title", "name")
LOCATION_KEYS = ("slug", "path", "url")
DESCRIPTION_KEYS = ("description", "excerpt", "summary")

_ABSOLUTE_RE = re.compile(r"^https?://", re.IGNORECASE)
_SCHEME_ROUTE_RE = re.compile(r"^/*(schemes?/.*)$", re.DOTALL)


def _text(value: Any) -> str:
    # Only scalars count as text; nested objects are never titles or links.
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


def first_text(node: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        t = _text(node.get(key))
        if t:
            return t
    return ""


def looks_like_scheme(node: Mapping[str, Any]) -> bool:
    """True when ``node`` has both a title-like and a location-like field."""
    return bool(first_text(node, TITLE_KEYS)) and bool(first_text(node, LOCATION_KEYS))


def normalize_href(raw: str) -> str:
    """Absolute URLs pass through, scheme routes get one leading slash, anything else is ''."""
    raw = (raw or "").strip()
    if not raw:
        return ""
    if _ABSOLUTE_RE.match(raw):
        return raw
    m = _SCHEME_ROUTE_RE.match(raw)
    if m:
        return "/" + m.group(1)
    return ""


def to_item(node: Mapping[str, Any], source_url: Optional[str]) -> Optional[SchemeItem]:
    title = first_text(node, TITLE_KEYS)
    if not title:
        return None
    href = normalize_href(first_text(node, LOCATION_KEYS))
    if not href:
        return None
    description = first_text(node, DESCRIPTION_KEYS) or None
    return SchemeItem(title=title, href=href, description=description, source_url=source_url)


def _children(node: Any) -> Sequence[Any]:
    if isinstance(node, Mapping):
        return [v for v in node.values() if isinstance(v, (Mapping, list, tuple))]
    return [v for v in node if isinstance(v, (Mapping, list, tuple))]


def dedupe(items: Iterable[SchemeItem]) -> List[SchemeItem]:
    seen = set()
    out: List[SchemeItem] = []
    for it in items:
        if it.href in seen:
            continue
        seen.add(it.href)
        out.append(it)
    return out


def scan_for_items(root: Any, source_url: Optional[str] = None) -> List[SchemeItem]:
    """Depth-first walk of ``root`` collecting scheme-like records.

    Each container is visited at most once (tracked by ``id``), so shared
    or cyclic references cannot loop. Children are pushed in reverse so
    items come out in document order. Returns ``[]`` when nothing matches.
    """
    if not isinstance(root, (Mapping, list, tuple)):
        return []

    found: List[SchemeItem] = []
    visited: set[int] = set()
    stack: List[Any] = [root]

    while stack:
        node = stack.pop()
        if id(node) in visited:
            continue
        visited.add(id(node))

        if isinstance(node, Mapping) and looks_like_scheme(node):
            item = to_item(node, source_url)
            if item is not None:
                found.append(item)

        for child in reversed(_children(node)):
            if id(child) not in visited:
                stack.append(child)

    return dedupe(found)
