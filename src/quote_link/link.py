"""Shareable quote links.

Token Format: urlsafe_b64(zlib(canonical_json(compact_quote))) without padding
Link Format:  <base_url>/<prefix>/<token>

encode_quote() and decode_quote() raise typed codec errors. The link-level
helpers generate_shareable_link() and decode_quote_from_url() are the
boundary used by callers that render links: they never raise, they log.
"""

from datetime import date
from urllib.parse import unquote, urlparse

from loguru import logger

from .catalog import TemplateCatalog
from .codec import (
    DecodeFailure,
    EncodeFailure,
    MalformedTokenError,
    StructuralError,
    UnknownTemplateError,
    build_compact_quote,
    compress_model,
    decode_frame,
    decompress_model,
    encode_frame,
    expand_compact_quote,
)
from .codec.compact import CompactQuote
from .config import Config
from .models import QuotePayload


def encode_quote(
    payload: QuotePayload, catalog: TemplateCatalog, today: date | None = None
) -> str:
    """
    Encode a quote into a URL-safe token.

    Args:
        payload: Client, packages and creation time
        catalog: Template catalog the packages were built from
        today: Reference date for effective-date diffing (default: today)

    Returns:
        Token text using only [A-Za-z0-9_-]

    Raises:
        EncodeFailure: If a package is not in the catalog or serialization fails
    """
    compact = build_compact_quote(payload, catalog, today)
    return encode_frame(compress_model(compact.to_wire()))


def decode_quote(
    token: str, catalog: TemplateCatalog, today: date | None = None
) -> QuotePayload:
    """
    Decode a token produced by encode_quote().

    Args:
        token: Token text, padded or unpadded
        catalog: Template catalog the token was issued against
        today: Date used to derive effective dates (default: today)

    Returns:
        Reconstructed QuotePayload with fresh ids

    Raises:
        MalformedTokenError: Empty, oversized, corrupt or foreign token
        StructuralError: Payload decompressed but has the wrong shape
        UnknownTemplateError: Payload references a template the catalog lacks
    """
    if not token:
        raise MalformedTokenError("Token is empty")
    if len(token) > Config.MAX_TOKEN_LENGTH:
        raise MalformedTokenError(
            f"Token length {len(token)} exceeds limit of {Config.MAX_TOKEN_LENGTH}"
        )

    wire = decompress_model(decode_frame(token))
    compact = CompactQuote.from_wire(wire)
    return expand_compact_quote(compact, catalog, today)


def build_link(token: str, base_url: str | None = None) -> str:
    if base_url is None:
        base_url = Config.BASE_URL
    return f"{base_url.rstrip('/')}/{Config.PATH_PREFIX.strip('/')}/{token}"


def generate_shareable_link(
    payload: QuotePayload, catalog: TemplateCatalog, base_url: str | None = None
) -> str:
    """
    Build the shareable link for a quote.

    On failure the error is logged and a link carrying the error token
    (Config.ERROR_TOKEN) is returned, which decode_quote_from_url() maps
    back to "not found".

    Args:
        payload: Quote to share
        catalog: Template catalog the packages were built from
        base_url: Link origin (default: Config.BASE_URL)

    Returns:
        "<base_url>/<prefix>/<token>"
    """
    try:
        token = encode_quote(payload, catalog)
    except EncodeFailure as e:
        logger.error(f"Quote link encoding failed: {e}")
        token = Config.ERROR_TOKEN
    else:
        logger.info(
            f"Generated quote link: {len(payload.packages)} package(s), "
            f"token length {len(token)}"
        )
    return build_link(token, base_url)


def decode_quote_from_url(
    token: str, catalog: TemplateCatalog, today: date | None = None
) -> QuotePayload | None:
    """
    Decode a token taken from a link, or return None if it cannot be used.

    Every failure ends up as None for the caller ("quote not found"). The
    log keeps them apart: unknown template references are errors because
    they point at catalog drift, everything else is a warning about bad input.

    Args:
        token: Token path segment (may still be percent-encoded)
        catalog: Template catalog
        today: Date used to derive effective dates

    Returns:
        QuotePayload, or None
    """
    if token is None:
        return None
    token = unquote(token).strip()
    if token == Config.ERROR_TOKEN:
        logger.info("Quote link carries the error token; nothing to decode")
        return None

    try:
        return decode_quote(token, catalog, today)
    except UnknownTemplateError as e:
        logger.error(f"Quote link references unknown template: {e}")
    except MalformedTokenError as e:
        logger.warning(f"Quote link token is malformed: {e}")
    except StructuralError as e:
        logger.warning(f"Quote link payload is incomplete: {e}")
    except DecodeFailure as e:
        logger.warning(f"Quote link could not be decoded: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error decoding quote link: {e}")
    return None


def extract_token(url: str) -> str | None:
    """
    Pull the token out of a full link or a bare path.

    The token is the segment right after the last "<prefix>" segment.

    Examples:
        >>> extract_token("https://quotes.example.com/quote/eJyrVkpW")
        'eJyrVkpW'
        >>> extract_token("/quote/eJyrVkpW/")
        'eJyrVkpW'
        >>> extract_token("https://quotes.example.com/agents") is None
        True
    """
    if not url:
        return None

    segments = [segment for segment in urlparse(url).path.split("/") if segment]
    prefix = Config.PATH_PREFIX.strip("/")
    for position in range(len(segments) - 2, -1, -1):
        if segments[position] == prefix:
            return unquote(segments[position + 1])
    return None
