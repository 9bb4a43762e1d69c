class EmbedGenError(Exception):
    """Base class for every error raised by embedgen."""


class ConfigError(EmbedGenError):
    """Raised when settings cannot be loaded."""


class InvalidURLError(EmbedGenError):
    """The requested URL is not on the allow-list. Maps to HTTP 400."""

    def __init__(self, message, url=None):
        super().__init__(message)
        self.message = message
        self.url = url


class ExtractionError(EmbedGenError):
    """Fetching or parsing the remote page failed. Maps to HTTP 500."""


class TokenExchangeError(ExtractionError):
    """The SnapTik token exchange returned something we could not use."""
