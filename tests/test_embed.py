import json

from embedgen.embed import EMBED_COLOR, build_embed
from embedgen.models import MediaKind, Platform, VideoMetadata


def _metadata(**overrides):
    values = dict(
        source_url="https://www.tiktok.com/@catlover/video/1",
        title="Cat does a backflip | TikTok",
        description="cat backflip #cats",
        username="catlover",
        likes=12300,
        comments=57,
        video_url="https://example.com/v.mp4",
        thumbnail_url="https://example.com/t.jpg",
    )
    values.update(overrides)
    return VideoMetadata(**values)


def test_stats_layout_matches_discord_shape():
    payload = build_embed(_metadata())

    assert payload == {
        "embeds": [
            {
                "type": "video",
                "url": "https://example.com/v.mp4",
                "title": "cat backflip #cats",
                "description": "12300 likes, 57 comments",
                "color": 16657493,
                "provider": {"name": "Naainz Embed.Gen - TikTok"},
                "video": {"url": "https://example.com/v.mp4", "width": 1080, "height": 1920},
                "thumbnail": {
                    "url": "https://example.com/t.jpg",
                    "proxy_url": "https://example.com/t.jpg",
                    "width": 630,
                    "height": 630,
                },
            }
        ]
    }


def test_creator_layout():
    embed = build_embed(_metadata(), layout="creator")["embeds"][0]
    assert embed["title"] == "catlover 12300 👍, 57 💬"
    assert embed["description"] == "cat backflip #cats"


def test_missing_counts_render_as_zero():
    embed = build_embed(_metadata(likes=None, comments=None))["embeds"][0]
    assert embed["description"] == "0 likes, 0 comments"


def test_missing_fields_are_left_out():
    embed = build_embed(_metadata(description=None, thumbnail_url=None))["embeds"][0]
    assert "title" not in embed
    assert "thumbnail" not in embed
    assert embed["color"] == EMBED_COLOR


def test_thumbnail_only_page_has_no_video_block():
    embed = build_embed(_metadata(video_url=None))["embeds"][0]
    assert "video" not in embed
    assert embed["url"] == "https://example.com/t.jpg"


def test_slideshow_uses_first_image():
    metadata = _metadata(
        video_url=None,
        thumbnail_url=None,
        kind=MediaKind.SLIDESHOW,
        images=["https://example.com/1.jpg", "https://example.com/2.jpg"],
    )
    embed = build_embed(metadata)["embeds"][0]
    assert embed["type"] == "image"
    assert embed["url"] == "https://example.com/1.jpg"
    assert embed["thumbnail"]["url"] == "https://example.com/1.jpg"
    assert "video" not in embed


def test_youtube_provider_name():
    embed = build_embed(_metadata(platform=Platform.YOUTUBE))["embeds"][0]
    assert embed["provider"] == {"name": "Naainz Embed.Gen - YouTube"}


def test_build_embed_is_pure():
    metadata = _metadata()
    first = json.dumps(build_embed(metadata))
    second = json.dumps(build_embed(metadata))
    assert first == second
