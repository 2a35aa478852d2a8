"""Error taxonomy for quote link encoding and decoding."""


class QuoteLinkError(Exception):
    """Base class for all codec failures."""


class EncodeFailure(QuoteLinkError):
    """Serialization or compression failed for a quote."""


class UnknownPackageError(EncodeFailure):
    """A package's name has no matching template in the catalog."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package '{package_name}' has no matching catalog template")


class DecodeFailure(QuoteLinkError):
    """A token could not be turned back into a quote."""


class MalformedTokenError(DecodeFailure):
    """Framing, decompression or JSON parsing failed (corrupt, truncated or foreign token)."""


class StructuralError(DecodeFailure):
    """The decompressed structure is missing required fields or has the wrong shape."""


class UnknownTemplateError(DecodeFailure):
    """A package index does not map to any catalog template."""

    def __init__(self, index: int, catalog_size: int):
        self.index = index
        self.catalog_size = catalog_size
        super().__init__(
            f"Package index {index} is outside the template catalog (size {catalog_size})"
        )
