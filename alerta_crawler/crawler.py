from playwright.sync_api import sync_playwright, Page, TimeoutError as PlaywrightTimeoutError
from typing import List, Optional
import logging
from .config import (
    BASE_URL, TIMEOUT, RESULT_WAIT_TIMEOUT, HEADLESS, SELECTORS,
    RESULTS_DIR, ERROR_PAGE_FILE,
)
from .parser import AlertaParser
from .model import TenderRecord

logger = logging.getLogger(__name__)

from .storage import Storage


class BrowserSession:
    """
    Owns the Playwright driver, browser, context and page for one run.

    Use as a context manager; everything is released on exit, including
    when the body raises.
    """

    def __init__(self, headless: bool = HEADLESS):
        self.headless = headless
        self._playwright = None
        self.browser = None
        self.context = None
        self.page: Optional[Page] = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def open(self):
        if self._playwright is not None:
            logger.debug("Browser session already open")
            return
        logger.info(f"Launching browser (headless={self.headless})")
        self._playwright = sync_playwright().start()
        try:
            self.browser = self._playwright.chromium.launch(headless=self.headless)
            self.context = self.browser.new_context()
            self.page = self.context.new_page()
        except Exception:
            self.close()
            raise

    def close(self):
        """Release everything that was acquired. Safe to call more than once."""
        steps = [
            ("context", self.context, "close"),
            ("browser", self.browser, "close"),
            ("playwright", self._playwright, "stop"),
        ]
        for name, resource, method in steps:
            if resource is None:
                continue
            try:
                getattr(resource, method)()
            except Exception as e:
                logger.warning(f"Failed to release {name}: {e}")

        self.page = None
        self.context = None
        self.browser = None
        self._playwright = None


class AlertaCrawler:
    def __init__(self, session: BrowserSession, parser: Optional[AlertaParser] = None):
        self.session = session
        self.parser = parser or AlertaParser()

    def search(self, keyword: str) -> List[TenderRecord]:
        """
        Search the site for ``keyword`` and parse the listing panels.

        Never raises: on failure the page markup is dumped to ERROR_PAGE_FILE
        and an empty list is returned.
        """
        page = self.session.page
        try:
            logger.info(f"Searching for: {keyword}")
            page.goto(BASE_URL, timeout=TIMEOUT)

            search = SELECTORS['search']
            search_input = page.get_by_role(search['input_role'], name=search['input_name'])
            search_input.fill(keyword)

            search_btn = page.get_by_role(search['button_role'], name=search['button_name'], exact=True)
            search_btn.first.click()

            page.wait_for_load_state('networkidle')
            self._wait_for_panels(page)

            return self.parser.parse_results(page.content())

        except Exception as e:
            logger.error(f"Error during search: {e}", exc_info=True)
            self._dump_error_page(page)
            return []

    def _wait_for_panels(self, page: Page):
        logger.info("Waiting for listing panels...")
        try:
            page.locator(SELECTORS['list']['panel']).first.wait_for(state="visible", timeout=RESULT_WAIT_TIMEOUT)
        except PlaywrightTimeoutError:
            logger.warning("Timeout waiting for listing panels. The search may have no results.")

    def _dump_error_page(self, page: Optional[Page]):
        if page is None:
            return
        try:
            html = page.content()
            with open(ERROR_PAGE_FILE, "w", encoding="utf-8") as f:
                f.write(html)
            logger.info(f"Saved {ERROR_PAGE_FILE}")
        except Exception as e:
            logger.error(f"Failed to save {ERROR_PAGE_FILE}: {e}")

    def run(self, keyword: str, results_dir: str = RESULTS_DIR) -> List[TenderRecord]:
        """Search once and write the results as JSON and, if any, as Excel."""
        results = self.search(keyword)

        timestamp = Storage.timestamp()
        # JSON is the primary output; a failure here ends the run
        Storage.save_json(results, Storage.results_path(timestamp, "json", results_dir))

        if results:
            excel_filename = Storage.results_path(timestamp, "xlsx", results_dir)
            try:
                Storage.save_excel(results, excel_filename)
                logger.info(f"{len(results)} results found and saved to Excel")
            except Exception as e:
                logger.error(f"Error saving to Excel: {e}")
        else:
            logger.warning("No results found")

        return results
