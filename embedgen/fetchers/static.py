import logging

import requests
from bs4 import BeautifulSoup

from ..errors import ExtractionError
from ..models import Platform
from .base import (
    STATE_SCRIPT_ID,
    BaseFetcher,
    browser_headers,
    fill_from_item,
    item_struct_from_state,
    metadata_from_fields,
    require_media,
    selectors_for,
)

logger = logging.getLogger(__name__)


def select_value(soup, selector):
    element = soup.select_one(selector.css)
    if element is None:
        return None
    if selector.attribute:
        return element.get(selector.attribute)
    return element.get_text()


class StaticFetcher(BaseFetcher):
    """
    Plain GET of the page, fields pulled out of the HTML with BeautifulSoup.
    """

    name = "static"

    def __init__(self, settings, session_factory=requests.Session):
        super().__init__(settings)
        self.session_factory = session_factory

    def fetch(self, url, platform=Platform.TIKTOK):
        with self.session_factory() as session:
            try:
                response = session.get(
                    url,
                    headers=browser_headers(self.settings.user_agent),
                    timeout=self.settings.request_timeout,
                )
                response.raise_for_status()
            except requests.RequestException as e:
                raise ExtractionError(f"GET {url} failed: {e}") from e

        soup = BeautifulSoup(response.text, 'html.parser')
        fields = {
            name: select_value(soup, selector)
            for name, selector in selectors_for(platform).items()
        }
        metadata = metadata_from_fields(url, platform, fields)

        if metadata.platform is Platform.TIKTOK:
            state = soup.find('script', id=STATE_SCRIPT_ID)
            if state is not None:
                fill_from_item(metadata, item_struct_from_state(state.string))

        logger.debug("Static extraction of %s: video=%s thumbnail=%s",
                     url, metadata.video_url, metadata.thumbnail_url)
        return require_media(metadata)
