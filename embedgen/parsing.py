import base64
import binascii
import json
import re
from decimal import Decimal, InvalidOperation

from .errors import TokenExchangeError

_NUMBER_PREFIX = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*([KMB])?\b", re.IGNORECASE)
_SUFFIXES = {
    "K": 1_000,
    "M": 1_000_000,
    "B": 1_000_000_000,
}


def parse_likes(text):
    """
    Parse a TikTok counter such as "12.3K", "1.2M" or "57" into an int.

    Returns None when the text has no leading number.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return int(text)
    if not isinstance(text, str):
        return None

    cleaned = text.strip().replace(",", "")
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return None

    try:
        value = Decimal(match.group(1))
    except InvalidOperation:
        return None

    suffix = match.group(2)
    if suffix:
        value *= _SUFFIXES[suffix.upper()]
    return int(value)


def format_count(value):
    return "0" if value is None else str(value)


def decode_token_payload(token):
    """
    Decode the middle segment of a JWT-like token as base64 JSON.
    """
    if not token:
        raise TokenExchangeError("Empty download token")

    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        raise TokenExchangeError("Download token is not in header.payload form")

    segment = parts[1]
    segment += "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(segment)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise TokenExchangeError(f"Could not decode download token: {e}") from e

    if not isinstance(payload, dict):
        raise TokenExchangeError("Download token payload is not an object")
    return payload
