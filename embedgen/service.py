import json
import logging
from dataclasses import dataclass
from typing import Optional

from .embed import build_embed
from .errors import InvalidURLError
from .fetchers import create_fetcher
from .validator import is_favicon_probe, validate_url

logger = logging.getLogger(__name__)

TIKTOK_FAILURE = "Failed to fetch TikTok data"
DUAL_PLATFORM_FAILURE = "Failed to fetch video data"


@dataclass(frozen=True)
class EmbedResponse:
    status: int
    body: Optional[dict] = None

    def to_bytes(self):
        if self.body is None:
            return b""
        return json.dumps(self.body).encode()


class EmbedService:
    """
    validate -> fetch -> build embed, mapped onto an HTTP status.

    Holds no per-request state, so one instance serves every request.
    """

    def __init__(self, settings, fetcher=None):
        self.settings = settings
        self.fetcher = fetcher or create_fetcher(settings)

    @property
    def failure_message(self):
        return DUAL_PLATFORM_FAILURE if self.settings.allow_youtube else TIKTOK_FAILURE

    def handle(self, target):
        if is_favicon_probe(target):
            return EmbedResponse(204)

        try:
            platform = validate_url(target, allow_youtube=self.settings.allow_youtube)
        except InvalidURLError as e:
            logger.warning("Validation failed for URL: %r", target, extra={"event": "embed.invalid_url"})
            return EmbedResponse(400, {"error": e.message})

        try:
            metadata = self.fetcher.fetch(target, platform)
            payload = build_embed(metadata, layout=self.settings.layout)
        except Exception:
            logger.exception("Extraction failed for %s via %s", target, self.fetcher.name,
                             extra={"event": "embed.extraction_failed"})
            return EmbedResponse(500, {"error": self.failure_message})

        logger.info("Built %s embed for %s", metadata.kind.value, target, extra={"event": "embed.built"})
        return EmbedResponse(200, payload)
