from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Platform(str, Enum):
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"


class MediaKind(str, Enum):
    VIDEO = "video"
    PHOTO = "photo"
    SLIDESHOW = "slideshow"


@dataclass
class VideoMetadata:
    """Fields scraped from a single page. Built per request, never shared."""
    source_url: Optional[str] = None
    platform: Platform = Platform.TIKTOK
    title: Optional[str] = None
    description: Optional[str] = None
    username: Optional[str] = None
    likes: Optional[int] = None
    comments: Optional[int] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    kind: MediaKind = MediaKind.VIDEO
    images: List[str] = field(default_factory=list)

    @property
    def cover_url(self):
        if self.thumbnail_url:
            return self.thumbnail_url
        return self.images[0] if self.images else None


@dataclass(frozen=True)
class Resource:
    """One candidate download link returned by the token exchange."""
    url: str
    index: int
