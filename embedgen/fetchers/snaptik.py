import json
import logging
import re
import urllib.parse

import requests
from bs4 import BeautifulSoup

from ..errors import TokenExchangeError
from ..models import MediaKind, Platform, Resource, VideoMetadata
from ..parsing import decode_token_payload
from .base import BaseFetcher, require_media

logger = logging.getLogger(__name__)

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ+/"

# }("<payload>",<unused>,"<alphabet>",<offset>,<base>,<unused>))
PACKED_ARGS = re.compile(r'\}\("(\w+)",\s*(\d+),\s*"(\w+)",\s*(\d+),\s*(\d+),\s*(\d+)\)\)')
INNER_HTML = re.compile(r'innerHTML\s*=\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)
ALERT = re.compile(r'showAlert\(\s*"((?:[^"\\]|\\.)*)"')


def _to_int(digits, base):
    """Read `digits` in `base`, ignoring characters outside the base."""
    table = DIGITS[:base]
    value = 0
    for position, char in enumerate(reversed(digits)):
        index = table.find(char)
        if index != -1:
            value += index * base ** position
    return value


def unpack_script(script):
    """
    Decode SnapTik's packed response without running it.

    The response is `eval(function(h,u,n,t,e,r){...}(payload, _, alphabet, offset, base, _))`.
    Chunks of `payload` are separated by `alphabet[base]`; each chunk spells a
    number in `base` using `alphabet` as digits, and `number - offset` is a char code.
    """
    match = PACKED_ARGS.search(script or "")
    if not match:
        raise TokenExchangeError("SnapTik response is not a packed script")

    payload, _, alphabet, offset, base, _ = match.groups()
    offset, base = int(offset), int(base)
    if base >= len(alphabet):
        raise TokenExchangeError("SnapTik packed script has an invalid alphabet")
    delimiter = alphabet[base]

    chars = []
    for chunk in payload.split(delimiter)[:-1]:
        for position, symbol in enumerate(alphabet):
            chunk = chunk.replace(symbol, str(position))
        code = _to_int(chunk, base) - offset
        if not 0 <= code < 0x110000:
            raise TokenExchangeError("SnapTik packed script decoded out of range")
        chars.append(chr(code))

    decoded = "".join(chars)
    try:
        return decoded.encode("latin-1").decode("utf-8")
    except UnicodeError as e:
        raise TokenExchangeError(f"SnapTik packed script is not UTF-8: {e}") from e


def extract_fragment(script):
    """Return the HTML the decoded script assigns with `innerHTML = "..."`."""
    match = INNER_HTML.search(script)
    if not match:
        alert = ALERT.search(script)
        if alert:
            raise TokenExchangeError(f"SnapTik refused the request: {alert.group(1)}")
        raise TokenExchangeError("SnapTik script carries no download markup")

    literal = match.group(1).replace("\\'", "'")
    try:
        return json.loads(f'"{literal}"')
    except ValueError as e:
        raise TokenExchangeError(f"SnapTik markup is not a valid string literal: {e}") from e


def classify(soup):
    if soup.select_one("div.render-wrapper") is None:
        return MediaKind.VIDEO
    photos = soup.select("div.photo")
    if not photos:
        raise TokenExchangeError("SnapTik photo result has no photos")
    return MediaKind.PHOTO if len(photos) == 1 else MediaKind.SLIDESHOW


class SnapTikFetcher(BaseFetcher):
    """
    Token exchange against SnapTik:
    landing page token -> form POST -> packed script -> HD token.
    """

    name = "snaptik"

    def __init__(self, settings, session_factory=requests.Session):
        super().__init__(settings)
        self.session_factory = session_factory
        self.base_url = settings.snaptik_base_url

    def fetch(self, url, platform=Platform.TIKTOK):
        with self.session_factory() as session:
            session.headers.update({'User-Agent': self.settings.user_agent})
            try:
                token = self.get_token(session)
                script = self.submit(session, url, token)
                soup = BeautifulSoup(extract_fragment(unpack_script(script)), 'html.parser')
                kind = classify(soup)
                if kind is MediaKind.VIDEO:
                    metadata = self.video_metadata(session, soup, url)
                else:
                    metadata = self.photo_metadata(soup, url, kind)
            except requests.Timeout as e:
                raise TokenExchangeError(f"SnapTik timed out: {e}") from e
            except requests.RequestException as e:
                raise TokenExchangeError(f"SnapTik request failed: {e}") from e

        logger.info("SnapTik resolved %s as %s", url, metadata.kind.value)
        return require_media(metadata)

    def get_token(self, session):
        response = session.get(f"{self.base_url}/", timeout=self.settings.request_timeout)
        response.raise_for_status()

        soup = BeautifulSoup(response.text, 'html.parser')
        token_input = soup.find('input', {'name': 'token'})
        if token_input is None or not token_input.get('value'):
            raise TokenExchangeError("SnapTik landing page has no form token")
        return token_input['value']

    def submit(self, session, url, token):
        # multipart/form-data, as the site's own form sends it
        form = {
            'url': (None, url),
            'token': (None, token),
        }
        headers = {
            'Origin': self.base_url,
            'Referer': f"{self.base_url}/",
        }
        response = session.post(
            f"{self.base_url}/abc2.php",
            files=form,
            headers=headers,
            timeout=self.settings.request_timeout,
        )
        response.raise_for_status()
        return response.text

    def resources(self, soup):
        links = []
        for anchor in soup.select("div.video-links a[href]"):
            href = anchor['href'].strip()
            if not href or href == "/":
                continue
            links.append(urllib.parse.urljoin(f"{self.base_url}/", href))
        return [Resource(url=link, index=index) for index, link in enumerate(links)]

    def hd_url(self, session, token):
        payload = decode_token_payload(token)
        if payload.get("url"):
            return payload["url"]

        response = session.get(
            f"{self.base_url}/getHdLink.php",
            params={'token': token},
            timeout=self.settings.request_timeout,
        )
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            raise TokenExchangeError("SnapTik HD link response is not JSON") from e
        if not data.get("url"):
            raise TokenExchangeError("SnapTik HD link response has no url")
        return data["url"]

    def video_metadata(self, session, soup, url):
        resources = self.resources(soup)
        button = soup.select_one("[data-tokenhd]")
        video_url = None
        if button is not None and button.get("data-tokenhd"):
            video_url = self.hd_url(session, button["data-tokenhd"])
        elif resources:
            video_url = resources[0].url
        if not video_url:
            raise TokenExchangeError("SnapTik result has neither an HD token nor download links")

        return VideoMetadata(
            source_url=url,
            description=_text(soup.select_one("div.video-title")),
            username=_text(soup.select_one("div.info span")),
            video_url=video_url,
            thumbnail_url=_attr(soup.select_one("img"), "src"),
            kind=MediaKind.VIDEO,
        )

    def photo_metadata(self, soup, url, kind):
        images = []
        for photo in soup.select("div.photo"):
            src = _attr(photo.select_one('img[alt="Photo"]'), "src")
            if src:
                images.append(Resource(url=src, index=len(images)))
        if not images:
            raise TokenExchangeError("SnapTik photo result has no image sources")

        return VideoMetadata(
            source_url=url,
            description=_text(soup.select_one("div.video-title")),
            username=_text(soup.select_one("div.info span")),
            kind=kind,
            images=[resource.url for resource in images],
        )


def _text(element):
    if element is None:
        return None
    return element.get_text(strip=True) or None


def _attr(element, name):
    if element is None:
        return None
    return element.get(name) or None
