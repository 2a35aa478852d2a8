"""Quote Link - compact, URL-safe tokens for insurance quotes."""

__version__ = "0.1.0"

from .catalog import PackageTemplate, TemplateCatalog, load_default_catalog
from .link import (
    decode_quote,
    decode_quote_from_url,
    encode_quote,
    extract_token,
    generate_shareable_link,
)
from .models import Client, InsurancePlan, Package, PlanType, QuotePayload

__all__ = [
    "Client",
    "InsurancePlan",
    "Package",
    "PackageTemplate",
    "PlanType",
    "QuotePayload",
    "TemplateCatalog",
    "__version__",
    "decode_quote",
    "decode_quote_from_url",
    "encode_quote",
    "extract_token",
    "generate_shareable_link",
    "load_default_catalog",
]
