import re
import urllib.parse

from .errors import InvalidURLError
from .models import Platform

TIKTOK_PATTERN = re.compile(r"^https://(www\.)?tiktok\.com/.+")
YOUTUBE_PATTERNS = (
    re.compile(r"^https://(www\.|m\.)?youtube\.com/watch\?(.*&)?v=[\w-]+"),
    re.compile(r"^https://youtu\.be/[\w-]+"),
)

TIKTOK_ONLY_MESSAGE = "Invalid TikTok URL"
DUAL_PLATFORM_MESSAGE = "Invalid TikTok or YouTube URL"


def decode_target(raw_path):
    """
    Turn a path-captured request (`/https%3A%2F%2Fwww.tiktok.com%2F...`)
    into the target URL.
    """
    if raw_path is None:
        return ""
    return urllib.parse.unquote(raw_path.lstrip("/"))


def is_favicon_probe(target):
    return bool(target) and target.endswith("favicon.ico")


def validate_url(target, allow_youtube=False):
    """
    Check `target` against the allow-list before anything touches the network.

    Returns the matching Platform, raises InvalidURLError otherwise.
    """
    message = DUAL_PLATFORM_MESSAGE if allow_youtube else TIKTOK_ONLY_MESSAGE
    if not target:
        raise InvalidURLError(message, target)

    if TIKTOK_PATTERN.match(target):
        return Platform.TIKTOK
    if allow_youtube and any(pattern.match(target) for pattern in YOUTUBE_PATTERNS):
        return Platform.YOUTUBE

    raise InvalidURLError(message, target)
