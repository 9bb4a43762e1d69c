"""Discord embed construction. Everything here is pure: metadata in, dict out."""

from .models import MediaKind, Platform
from .parsing import format_count

EMBED_COLOR = 16657493
VIDEO_WIDTH, VIDEO_HEIGHT = 1080, 1920
THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT = 630, 630

PROVIDER_NAMES = {
    Platform.TIKTOK: "Naainz Embed.Gen - TikTok",
    Platform.YOUTUBE: "Naainz Embed.Gen - YouTube",
}


def stats_layout(metadata):
    """Caption as the title, counters as the body."""
    likes, comments = format_count(metadata.likes), format_count(metadata.comments)
    return metadata.description, f"{likes} likes, {comments} comments"


def creator_layout(metadata):
    """Creator and counters as the title, caption as the body."""
    likes, comments = format_count(metadata.likes), format_count(metadata.comments)
    title = f"{metadata.username or ''} {likes} 👍, {comments} 💬".strip()
    return title, metadata.description


LAYOUTS = {
    "stats": stats_layout,
    "creator": creator_layout,
}


def build_embed(metadata, layout="stats"):
    """
    Map extracted metadata onto the embed payload Discord renders.

    Keys whose value is missing are left out, the same way a JSON encoder
    drops undefined values.
    """
    title, description = LAYOUTS[layout](metadata)
    is_video = metadata.kind is MediaKind.VIDEO and bool(metadata.video_url)
    cover = metadata.cover_url

    embed = {
        "type": "video" if metadata.kind is MediaKind.VIDEO else "image",
        "url": metadata.video_url if is_video else cover,
        "title": title,
        "description": description,
        "color": EMBED_COLOR,
        "provider": {
            "name": PROVIDER_NAMES[metadata.platform],
        },
    }
    embed = {key: value for key, value in embed.items() if value is not None}

    if is_video:
        embed["video"] = {
            "url": metadata.video_url,
            "width": VIDEO_WIDTH,
            "height": VIDEO_HEIGHT,
        }
    if cover:
        embed["thumbnail"] = {
            "url": cover,
            "proxy_url": cover,
            "width": THUMBNAIL_WIDTH,
            "height": THUMBNAIL_HEIGHT,
        }

    return {"embeds": [embed]}
