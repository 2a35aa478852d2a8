"""Canonical serialization and zlib compression of the compact quote model."""

import json
import zlib
from typing import Any

from ..config import Config
from .errors import EncodeFailure, MalformedTokenError


def canonical_json(wire: dict[str, Any]) -> str:
    """
    Serialize a wire dict to its canonical JSON text.

    The same structure always yields the same text: no whitespace, keys in
    the order the compact model builds them, non-ASCII kept as UTF-8.
    """
    return json.dumps(wire, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def compress_model(wire: dict[str, Any], level: int | None = None) -> bytes:
    """
    Serialize and deflate a compact quote wire dict.

    Args:
        wire: Output of CompactQuote.to_wire()
        level: zlib compression level (default: Config.COMPRESSION_LEVEL)

    Returns:
        zlib-framed deflate stream

    Raises:
        EncodeFailure: If the structure cannot be serialized or compressed
    """
    if level is None:
        level = Config.COMPRESSION_LEVEL

    try:
        text = canonical_json(wire)
        return zlib.compress(text.encode("utf-8"), level)
    except (TypeError, ValueError, zlib.error) as e:
        raise EncodeFailure(f"Failed to serialize quote: {e}") from e


def decompress_model(data: bytes, max_bytes: int | None = None) -> Any:
    """
    Inflate and parse a compressed compact quote.

    Inflation stops at `max_bytes` of output so a small hostile token cannot
    expand into an arbitrarily large buffer.

    Args:
        data: zlib stream produced by compress_model()
        max_bytes: Output limit (default: Config.MAX_DECOMPRESSED_BYTES)

    Returns:
        Parsed JSON value (shape is checked later by CompactQuote.from_wire)

    Raises:
        MalformedTokenError: If the stream is corrupt, truncated, followed by
            trailing bytes, too large, or not UTF-8 JSON
    """
    if max_bytes is None:
        max_bytes = Config.MAX_DECOMPRESSED_BYTES

    inflater = zlib.decompressobj()
    try:
        raw = inflater.decompress(data, max_bytes)
    except zlib.error as e:
        raise MalformedTokenError(f"Token payload is not a valid compressed stream: {e}") from e

    if inflater.unconsumed_tail:
        raise MalformedTokenError(f"Decompressed payload exceeds {max_bytes} bytes")
    if not inflater.eof:
        raise MalformedTokenError("Compressed payload is truncated")
    if inflater.unused_data:
        raise MalformedTokenError("Unexpected trailing data after compressed payload")

    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise MalformedTokenError(f"Decompressed payload is not valid JSON: {e}") from e
