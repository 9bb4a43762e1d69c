import logging
from contextlib import contextmanager

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from ..errors import ExtractionError
from ..models import Platform
from .base import (
    STATE_SCRIPT_ID,
    BaseFetcher,
    direct_download_url,
    fill_from_item,
    item_struct_from_state,
    metadata_from_fields,
    require_media,
    selectors_for,
)

logger = logging.getLogger(__name__)

READ_STATE_JS = """
(scriptId) => {
    const el = document.getElementById(scriptId);
    return el ? el.textContent : null;
}
"""


def read_selector(page, selector):
    element = page.query_selector(selector.css)
    if element is None:
        return None
    if selector.attribute:
        return element.get_attribute(selector.attribute)
    return element.text_content()


class RenderedPageFetcher(BaseFetcher):
    """
    Loads the page in headless Chromium so JavaScript-rendered state is present.

    One browser per request. It is closed on every exit path, errors included.
    """

    name = "rendered"

    def __init__(self, settings, playwright_factory=sync_playwright):
        super().__init__(settings)
        self.playwright_factory = playwright_factory

    @contextmanager
    def open_browser(self):
        with self.playwright_factory() as playwright:
            try:
                browser = playwright.chromium.launch(headless=True)
            except PlaywrightError as e:
                raise ExtractionError(f"Could not launch Chromium: {e}") from e
            try:
                yield browser
            finally:
                try:
                    browser.close()
                except PlaywrightError as e:
                    logger.warning("Closing Chromium failed: %s", e)
                else:
                    logger.debug("Browser closed")

    def fetch(self, url, platform=Platform.TIKTOK):
        try:
            with self.open_browser() as browser:
                return self._extract(browser, url, platform)
        except PlaywrightError as e:
            raise ExtractionError(f"Rendering {url} failed: {e}") from e

    def _extract(self, browser, url, platform):
        page = browser.new_page(user_agent=self.settings.user_agent)
        page.goto(url, wait_until="networkidle", timeout=self.settings.browser_timeout_ms)

        fields = {
            name: read_selector(page, selector)
            for name, selector in selectors_for(platform).items()
        }
        metadata = metadata_from_fields(url, platform, fields)

        if metadata.platform is Platform.TIKTOK:
            item = item_struct_from_state(page.evaluate(READ_STATE_JS, STATE_SCRIPT_ID))
            download_url = direct_download_url(item)
            if download_url:
                metadata.video_url = download_url
            fill_from_item(metadata, item)

        return require_media(metadata)
