from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .model import TenderRecord
from .config import BASE_URL, SELECTORS, LABELS, REQUIRE_OPENING_DATE
from .matchers import LabeledFieldMatcher, UpperCaseTextMatcher, first_match
import logging

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a panel lacks a field the parser cannot do without."""


class AlertaParser:
    def __init__(self, base_url: str = BASE_URL, require_opening_date: bool = REQUIRE_OPENING_DATE):
        self.base_url = base_url
        self.require_opening_date = require_opening_date

        self.organization_matchers = [
            LabeledFieldMatcher("organization", LABELS["organization"]),
            UpperCaseTextMatcher("organization", SELECTORS["list"]["organization_tags"]),
        ]
        self.opening_date_matcher = LabeledFieldMatcher("openingDate", LABELS["opening_date"])
        self.estimated_value_matcher = LabeledFieldMatcher("estimatedValue", LABELS["estimated_value"])

    def parse_results(self, html_content: str) -> List[TenderRecord]:
        """
        Parse the search results page into tender records.

        Every ``div.panel`` is one listing. Panels that fail to parse are
        logged and skipped; the remaining records keep page order.

        Args:
            html_content: HTML content of the results page

        Returns:
            List of TenderRecord (possibly empty)
        """
        soup = BeautifulSoup(html_content, 'lxml')
        panels = soup.select(SELECTORS['list']['panel'])
        logger.info(f"Found {len(panels)} listing panels")

        results = []
        for i, panel in enumerate(panels):
            try:
                results.append(self.parse_panel(panel))
            except Exception as e:
                logger.error(f"Error parsing panel {i}: {e}")
                continue

        logger.info(f"Parsed {len(results)}/{len(panels)} panels")
        return results

    def parse_panel(self, panel: Tag) -> TenderRecord:
        title_link = panel.select_one(SELECTORS['list']['title_link'])
        if title_link is None:
            raise ExtractionError("no title link in panel")

        title = title_link.get_text().strip()
        if not title:
            raise ExtractionError("title link has no text")
        link = self.resolve_link(title_link.get('href'))

        organization = first_match(self.organization_matchers, panel)

        opening_date = self.opening_date_matcher.match(panel)
        if opening_date is None and self.require_opening_date:
            raise ExtractionError(f"no opening date for '{title}'")

        estimated_value = self.estimated_value_matcher.match(panel)

        return TenderRecord(
            title=title,
            link=link,
            organization=organization,
            opening_date=opening_date,
            estimated_value=estimated_value,
        )

    def resolve_link(self, href: Optional[str]) -> str:
        # Plain concatenation; hrefs on the site are root-relative
        return self.base_url + (href or "")
