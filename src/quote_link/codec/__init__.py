"""Quote link codec.

Pipeline, leaves first:
- diff: plan overrides relative to template defaults
- compact: positional wire model of a quote
- compressor: canonical JSON + zlib
- framing: URL-safe base64 without padding
- expansion: rebuild packages from the catalog plus overrides
"""

from .compact import CompactQuote, build_compact_quote
from .compressor import compress_model, decompress_model
from .diff import DIFFABLE_FIELDS, UNSET, PlanOverride, diff_package, diff_plan
from .effective_dates import effective_date_for
from .errors import (
    DecodeFailure,
    EncodeFailure,
    MalformedTokenError,
    QuoteLinkError,
    StructuralError,
    UnknownPackageError,
    UnknownTemplateError,
)
from .expansion import expand_compact_quote
from .framing import decode_frame, encode_frame

__all__ = [
    "CompactQuote",
    "DIFFABLE_FIELDS",
    "DecodeFailure",
    "EncodeFailure",
    "MalformedTokenError",
    "PlanOverride",
    "QuoteLinkError",
    "StructuralError",
    "UNSET",
    "UnknownPackageError",
    "UnknownTemplateError",
    "build_compact_quote",
    "compress_model",
    "decode_frame",
    "decompress_model",
    "diff_package",
    "diff_plan",
    "effective_date_for",
    "encode_frame",
    "expand_compact_quote",
]
