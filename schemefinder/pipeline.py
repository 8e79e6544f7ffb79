from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from .config import DEFAULT_SITE
from .curated import CuratedDataset, nagpur_schemes
from .http_client import HttpClient
from .models import RegionQuery, SchemeItem, SchemeResponse
from .parser import Parser
from .tree_scan import scan_for_items


DEGRADED_NOTE = (
    "Could not retrieve schemes programmatically right now. "
    "You can browse directly on myScheme using the link above."
)
ERROR_NOTE = "Unexpected error while fetching data."


class SchemePipeline:
    """Runs the extraction strategies for one region, first non-empty result wins.

    Strategies run sequentially and each fetches the search page on its
    own. Fetch, parse and empty-result failures all fall through to the
    next strategy; if none produce items the response carries a note and
    the search deep link instead.
    """

    def __init__(
        self,
        client: HttpClient,
        parser: Parser,
        *,
        site_base_url: str = DEFAULT_SITE,
        curated: Optional[Sequence[CuratedDataset]] = None,
    ):
        self.client = client
        self.parser = parser
        self.site_base_url = site_base_url.rstrip("/")
        self.curated = tuple(curated) if curated is not None else (nagpur_schemes(self.site_base_url),)
        self.strategies: List[Tuple[str, Callable[[str], List[SchemeItem]]]] = [
            ("structured-data", self.from_structured_data),
            ("markup", self.from_markup),
        ]

    def from_structured_data(self, url: str) -> List[SchemeItem]:
        html = self.client.fetch_text(url)
        if not html:
            return []
        data = self.parser.extract_structured_data(html)
        if data is None:
            return []
        return scan_for_items(data, url)

    def from_markup(self, url: str) -> List[SchemeItem]:
        html = self.client.fetch_text(url)
        if not html:
            return []
        return self.parser.scan_markup(html, url)

    def curated_for(self, region: RegionQuery) -> Optional[CuratedDataset]:
        for dataset in self.curated:
            if dataset.matches(region):
                return dataset
        return None

    def retrieve(self, region: RegionQuery) -> SchemeResponse:
        source_url = region.search_url(self.site_base_url)
        try:
            logger.info(f"Retrieving schemes: query={region.search_query!r}")

            dataset = self.curated_for(region)
            if dataset is not None:
                logger.info(f"Using curated dataset for district={region.district!r}")
                return SchemeResponse(
                    items=list(dataset.items),
                    source_url=source_url,
                    note=dataset.note,
                    strategy="curated",
                )

            for name, strategy in self.strategies:
                items = strategy(source_url)
                if items:
                    logger.info(f"Strategy {name}: {len(items)} items")
                    return SchemeResponse(items=items, source_url=source_url, strategy=name)
                logger.debug(f"Strategy {name}: no items")

            logger.warning(f"No schemes found for {region.search_query!r}, degrading")
            return SchemeResponse(items=[], source_url=source_url, note=DEGRADED_NOTE)
        except Exception as e:
            logger.exception(f"Unexpected error retrieving schemes for {region.search_query!r}")
            return SchemeResponse(
                items=[],
                source_url=source_url,
                note=ERROR_NOTE,
                error=str(e) or e.__class__.__name__,
            )
