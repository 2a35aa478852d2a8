"""URL-safe text framing for compressed quote payloads.

Bytes are encoded with the base64 alphabet, `+` and `/` are swapped for
`-` and `_`, and trailing `=` padding is dropped so the token can sit in a
URL path segment as-is.
"""

import base64
import binascii
import re

from .errors import MalformedTokenError

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


def encode_frame(data: bytes) -> str:
    """
    Encode bytes as unpadded URL-safe base64 text.

    Args:
        data: Arbitrary bytes (may be empty)

    Returns:
        Token text using only [A-Za-z0-9_-]
    """
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode_frame(text: str) -> bytes:
    """
    Decode URL-safe base64 text, padded or unpadded.

    Args:
        text: Token text

    Returns:
        Decoded bytes

    Raises:
        MalformedTokenError: If the text uses characters outside the URL-safe
            alphabet or its length cannot come from any byte sequence
    """
    if not _TOKEN_PATTERN.match(text):
        raise MalformedTokenError("Token contains characters outside the URL-safe alphabet")

    body = text.rstrip("=")
    if len(body) % 4 == 1:
        raise MalformedTokenError(f"Token length {len(body)} is not a valid base64 length")

    padded = body + "=" * (-len(body) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedTokenError(f"Token is not valid base64: {e}") from e
