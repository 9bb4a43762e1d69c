"""Turn TikTok (and optionally YouTube) links into Discord embed payloads."""

from .embed import build_embed
from .models import MediaKind, Platform, Resource, VideoMetadata
from .parsing import parse_likes
from .service import EmbedResponse, EmbedService

__version__ = "1.0.0"

__all__ = [
    "EmbedResponse",
    "EmbedService",
    "MediaKind",
    "Platform",
    "Resource",
    "VideoMetadata",
    "build_embed",
    "parse_likes",
]
