"""Centralized configuration for the quote link codec."""

import os


class Config:
    """
    Quote link configuration with environment variable overrides.

    All configuration values are centralized here with sensible defaults.
    Values can be overridden via environment variables.
    """

    @staticmethod
    def _parse_port(port_str: str) -> int:
        """Parse and validate port number from string."""
        try:
            port = int(port_str)
            if not (1 <= port <= 65535):
                raise ValueError(f"Port must be 1-65535, got {port}")
            return port
        except ValueError as e:
            raise ValueError(f"Invalid PORT environment variable: {e}")

    # ========================================================================
    # Server Configuration
    # ========================================================================
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _parse_port.__func__(os.getenv("PORT", "8001"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "quote_link.log")  # empty disables file logging

    # ========================================================================
    # Link Layout
    # ========================================================================
    BASE_URL: str = os.getenv("QUOTE_LINK_BASE_URL", "")
    PATH_PREFIX: str = os.getenv("QUOTE_LINK_PATH_PREFIX", "quote")
    ERROR_TOKEN: str = os.getenv("QUOTE_LINK_ERROR_TOKEN", "error")

    # ========================================================================
    # Codec Limits
    # ========================================================================
    MAX_TOKEN_LENGTH: int = int(os.getenv("QUOTE_LINK_MAX_TOKEN_LENGTH", "8192"))
    MAX_DECOMPRESSED_BYTES: int = int(
        os.getenv("QUOTE_LINK_MAX_DECOMPRESSED_BYTES", str(256 * 1024))
    )
    COMPRESSION_LEVEL: int = int(os.getenv("QUOTE_LINK_COMPRESSION_LEVEL", "9"))

    # ========================================================================
    # Template Catalog
    # ========================================================================
    # None means the catalog bundled with the package
    CATALOG_PATH: str | None = os.getenv("QUOTE_LINK_CATALOG_PATH") or None

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - Codec limits are positive
        - Compression level is a valid zlib level
        - Path prefix and error token are usable as URL path segments

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if cls.MAX_TOKEN_LENGTH <= 0:
            errors.append(f"MAX_TOKEN_LENGTH must be > 0, got {cls.MAX_TOKEN_LENGTH}")

        if cls.MAX_DECOMPRESSED_BYTES <= 0:
            errors.append(
                f"MAX_DECOMPRESSED_BYTES must be > 0, got {cls.MAX_DECOMPRESSED_BYTES}"
            )

        if not (0 <= cls.COMPRESSION_LEVEL <= 9):
            errors.append(
                f"COMPRESSION_LEVEL must be between 0 and 9, got {cls.COMPRESSION_LEVEL}"
            )

        if not cls.PATH_PREFIX or "/" in cls.PATH_PREFIX.strip("/"):
            errors.append(f"PATH_PREFIX must be a single path segment, got {cls.PATH_PREFIX!r}")

        if not cls.ERROR_TOKEN or "/" in cls.ERROR_TOKEN:
            errors.append(f"ERROR_TOKEN must be a single path segment, got {cls.ERROR_TOKEN!r}")

        if cls.CATALOG_PATH is not None and not os.path.exists(cls.CATALOG_PATH):
            errors.append(f"CATALOG_PATH does not exist: {cls.CATALOG_PATH}")

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
