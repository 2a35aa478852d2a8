"""FastMCP server exposing the quote link codec as tools.

Tools:
- generate_quote_link: Build the shareable link for a quote
- decode_quote_link: Rebuild a quote from a link or bare token
- list_package_templates: Describe the catalog quotes are built from
"""

import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from loguru import logger

from .catalog import load_default_catalog
from .config import Config
from .link import decode_quote_from_url, extract_token, generate_shareable_link
from .models import QuotePayload

SERVER_NAME = "QuoteLink"
NOT_FOUND_MESSAGE = "Quote not found. The link may have expired or be invalid."

quote_server = FastMCP(SERVER_NAME)


def generate_quote_link(quote: dict[str, Any], base_url: str | None = None) -> str:
    """
    Build the shareable link for a quote.

    Args:
        quote: {"client": {...}, "packages": [...], "created_at": ISO-8601}
        base_url: Link origin (default: QUOTE_LINK_BASE_URL)

    Returns:
        "<base_url>/quote/<token>", or ".../quote/error" if the quote
        cannot be encoded

    Raises:
        ToolError: If the quote dict is missing required fields
    """
    try:
        payload = QuotePayload.from_dict(quote)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ToolError(f"Invalid quote: {e}")

    return generate_shareable_link(payload, load_default_catalog(), base_url)


def decode_quote_link(link: str) -> dict[str, Any]:
    """
    Rebuild a quote from a shareable link or a bare token.

    Args:
        link: Full link, path ("/quote/<token>") or token

    Returns:
        {"client": {...}, "packages": [...], "created_at": ISO-8601}

    Raises:
        ToolError: If the link does not decode to a quote
    """
    token = extract_token(link) if "/" in link else link
    payload = decode_quote_from_url(token, load_default_catalog())
    if payload is None:
        raise ToolError(NOT_FOUND_MESSAGE)
    return payload.to_dict()


def list_package_templates() -> list[dict[str, Any]]:
    """
    Describe the package templates in catalog order.

    Returns:
        [{"index", "name", "description", "plans": [plan names]}, ...]
    """
    return [
        {
            "index": index,
            "name": template.name,
            "description": template.description,
            "plans": [plan.name for plan in template.default_plans],
        }
        for index, template in enumerate(load_default_catalog())
    ]


for _tool in (generate_quote_link, decode_quote_link, list_package_templates):
    quote_server.tool()(_tool)


def main():
    """
    Main entry point for the quote link server.

    Configures:
    - Loguru for structured logging
    - HTTP/SSE transport
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>",
        level=Config.LOG_LEVEL,
    )

    if Config.LOG_FILE:
        logger.add(
            Config.LOG_FILE,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            level="DEBUG",
        )

    try:
        Config.validate()
        catalog = load_default_catalog()
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    logger.info(f"Starting {SERVER_NAME} with {len(catalog)} package templates...")

    try:
        quote_server.run(transport="sse", host=Config.HOST, port=Config.PORT)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
