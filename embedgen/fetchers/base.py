import json
import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import ExtractionError
from ..models import Platform, VideoMetadata
from ..parsing import parse_likes

logger = logging.getLogger(__name__)

STATE_SCRIPT_ID = "__UNIVERSAL_DATA_FOR_REHYDRATION__"
COUNT_FIELDS = ("likes", "comments")


@dataclass(frozen=True)
class Selector:
    """A CSS selector plus the attribute to read (None reads the text)."""
    css: str
    attribute: Optional[str] = None


TIKTOK_SELECTORS = {
    "title": Selector("title"),
    "description": Selector('meta[name="description"]', "content"),
    "likes": Selector('strong[data-e2e="like-count"]'),
    "comments": Selector('strong[data-e2e="comment-count"]'),
    "username": Selector('[data-e2e="browse-username"]'),
    "video_url": Selector('meta[property="og:video"]', "content"),
    "thumbnail_url": Selector('meta[property="og:image"]', "content"),
}

YOUTUBE_SELECTORS = {
    "title": Selector('meta[property="og:title"]', "content"),
    "description": Selector('meta[property="og:description"]', "content"),
    "username": Selector('link[itemprop="name"]', "content"),
    "video_url": Selector('meta[property="og:video:url"]', "content"),
    "thumbnail_url": Selector('meta[property="og:image"]', "content"),
}

SELECTOR_TABLES = {
    Platform.TIKTOK: TIKTOK_SELECTORS,
    Platform.YOUTUBE: YOUTUBE_SELECTORS,
}


def selectors_for(platform):
    return SELECTOR_TABLES[Platform(platform)]


def browser_headers(user_agent):
    return {
        'User-Agent': user_agent,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.5',
        'DNT': '1',
        'Connection': 'keep-alive',
        'Upgrade-Insecure-Requests': '1',
    }


def metadata_from_fields(url, platform, fields):
    """
    Build VideoMetadata from raw selector results.

    Blank strings become None and counter fields go through parse_likes.
    """
    values = {}
    for name, raw in fields.items():
        if isinstance(raw, str):
            raw = raw.strip() or None
        if name in COUNT_FIELDS:
            raw = parse_likes(raw)
        values[name] = raw
    return VideoMetadata(source_url=url, platform=Platform(platform), **values)


def _mapping(value):
    return value if isinstance(value, dict) else {}


def item_struct_from_state(state_text):
    """
    Pull `itemInfo.itemStruct` out of TikTok's rehydration state script.

    Returns None when the script is absent or does not describe a video.
    """
    if not state_text:
        return None
    try:
        data = json.loads(state_text)
    except ValueError:
        logger.debug("Rehydration state is not valid JSON")
        return None

    scope = _mapping(_mapping(data).get("__DEFAULT_SCOPE__"))
    detail = _mapping(scope.get("webapp.video-detail"))
    item = _mapping(detail.get("itemInfo")).get("itemStruct")
    return item if isinstance(item, dict) else None


def direct_download_url(item):
    video = _mapping(_mapping(item).get("video"))
    return video.get("downloadAddr") or video.get("playAddr") or None


def fill_from_item(metadata, item):
    """Fill fields the selectors missed from the rehydration item struct."""
    if not isinstance(item, dict) or not item:
        return metadata

    author = item.get("author")
    stats = _mapping(item.get("statsV2")) or _mapping(item.get("stats"))
    video = _mapping(item.get("video"))

    if metadata.username is None:
        if isinstance(author, dict):
            metadata.username = author.get("uniqueId") or None
        elif author:
            metadata.username = str(author)
    if metadata.likes is None:
        metadata.likes = parse_likes(stats.get("diggCount"))
    if metadata.comments is None:
        metadata.comments = parse_likes(stats.get("commentCount"))
    if metadata.description is None:
        metadata.description = item.get("desc") or None
    if metadata.video_url is None:
        metadata.video_url = direct_download_url(item)
    if metadata.thumbnail_url is None:
        metadata.thumbnail_url = video.get("cover") or None
    return metadata


def require_media(metadata):
    if not metadata.video_url and not metadata.cover_url:
        raise ExtractionError(f"No media found on {metadata.source_url}")
    return metadata


class BaseFetcher:
    """A metadata extraction strategy. Subclasses implement fetch()."""

    name = "base"

    def __init__(self, settings):
        self.settings = settings

    def fetch(self, url, platform=Platform.TIKTOK):
        raise NotImplementedError
