from .base import BaseFetcher, Selector, SELECTOR_TABLES, selectors_for
from .rendered import RenderedPageFetcher
from .snaptik import SnapTikFetcher
from .static import StaticFetcher

FETCHERS = {
    "static": StaticFetcher,
    "rendered": RenderedPageFetcher,
    "snaptik": SnapTikFetcher,
}


def create_fetcher(settings):
    """Build the one strategy this instance is configured for."""
    return FETCHERS[settings.strategy](settings)


__all__ = [
    "BaseFetcher",
    "FETCHERS",
    "RenderedPageFetcher",
    "SELECTOR_TABLES",
    "Selector",
    "SnapTikFetcher",
    "StaticFetcher",
    "create_fetcher",
    "selectors_for",
]
