"""Compact positional model of a quote.

Wire shape (keys in this order):

    {
        "c": [name, zip_code, date_of_birth, email, phone, note?],
        "p": [catalog_index, ...],
        "m": {"<package_ordinal>_<plan_ordinal>": {alias: value, ...}},  # optional
        "t": created_at_epoch_ms
    }

"m" is left out entirely when no plan carries an override.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

from ..catalog import TemplateCatalog
from ..models import Client, QuotePayload
from .diff import PlanOverride, diff_package
from .errors import EncodeFailure, StructuralError, UnknownPackageError

CLIENT_FIELDS = ("name", "zip_code", "date_of_birth", "email", "phone", "additional_info")
MIN_CLIENT_FIELDS = 5

_OVERRIDE_KEY = re.compile(r"^(\d+)_(\d+)$")


def override_key(package_ordinal: int, plan_ordinal: int) -> str:
    return f"{package_ordinal}_{plan_ordinal}"


def parse_override_key(key: str) -> tuple[int, int]:
    """
    Split an override key into (package_ordinal, plan_ordinal).

    Raises:
        StructuralError: If the key is not "<int>_<int>"
    """
    match = _OVERRIDE_KEY.match(key)
    if not match:
        raise StructuralError(f"Malformed override key '{key}'")
    return int(match.group(1)), int(match.group(2))


@dataclass
class CompactQuote:
    """
    Ephemeral wire model built on every encode and parsed on every decode.

    Invariants:
    - c holds 5 or 6 strings; the sixth (note) is never empty
    - p is non-empty and holds catalog indices
    - every override in m is non-empty
    """

    c: list[str]
    p: list[int]
    t: int
    m: dict[tuple[int, int], PlanOverride] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"c": list(self.c), "p": list(self.p)}
        if self.m:
            wire["m"] = {
                override_key(*ordinals): self.m[ordinals].to_wire()
                for ordinals in sorted(self.m)
            }
        wire["t"] = self.t
        return wire

    @classmethod
    def from_wire(cls, data: Any) -> "CompactQuote":
        """
        Validate and parse a decompressed wire structure.

        Raises:
            StructuralError: If any required field is missing or ill-typed
        """
        if not isinstance(data, dict):
            raise StructuralError(f"Quote payload must be an object, got {type(data).__name__}")

        client = data.get("c")
        if not isinstance(client, list) or not (
            MIN_CLIENT_FIELDS <= len(client) <= len(CLIENT_FIELDS)
        ):
            raise StructuralError(
                f"Client tuple must hold {MIN_CLIENT_FIELDS}-{len(CLIENT_FIELDS)} fields"
            )
        if not all(isinstance(value, str) for value in client):
            raise StructuralError("Client fields must be strings")

        packages = data.get("p")
        if not isinstance(packages, list) or not packages:
            raise StructuralError("Package index list must be a non-empty list")
        if not all(isinstance(i, int) and not isinstance(i, bool) for i in packages):
            raise StructuralError("Package indices must be integers")

        timestamp = data.get("t")
        if not isinstance(timestamp, int) or isinstance(timestamp, bool):
            raise StructuralError("Timestamp must be an integer")

        raw_overrides = data.get("m", {})
        if not isinstance(raw_overrides, dict):
            raise StructuralError("Override map must be an object")

        overrides = {}
        for key, value in raw_overrides.items():
            override = PlanOverride.from_wire(value)
            if not override.is_empty():
                overrides[parse_override_key(key)] = override

        return cls(c=client, p=packages, t=timestamp, m=overrides)


def client_to_tuple(client: Client) -> list[str]:
    values = [client.name, client.zip_code, client.date_of_birth, client.email, client.phone]
    if client.additional_info:
        values.append(client.additional_info)
    return values


def client_from_tuple(values: list[str]) -> Client:
    client = Client(**dict(zip(CLIENT_FIELDS, values)))
    client.additional_info = client.additional_info or None
    return client


def to_epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(round(moment.timestamp() * 1000))


def from_epoch_ms(timestamp: int) -> datetime:
    """
    Convert epoch milliseconds to an aware UTC datetime.

    Raises:
        StructuralError: If the timestamp is outside the representable range
    """
    try:
        return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise StructuralError(f"Timestamp {timestamp} is out of range") from e


def build_compact_quote(
    payload: QuotePayload, catalog: TemplateCatalog, today: date | None = None
) -> CompactQuote:
    """
    Build the compact model for a quote.

    Package identity is the package's position in `catalog`. A package whose
    name is not in the catalog cannot be rebuilt from a link, so encoding
    fails instead of dropping it.

    Args:
        payload: Client, packages and creation time
        catalog: Template catalog the packages were built from
        today: Reference date for effective-date diffing

    Returns:
        CompactQuote ready for compression

    Raises:
        EncodeFailure: If the quote has no packages
        UnknownPackageError: If a package name has no catalog template
    """
    if not payload.packages:
        raise EncodeFailure("Quote has no packages to link")

    indices = []
    overrides = {}
    for package_ordinal, package in enumerate(payload.packages):
        index = catalog.index_of(package.name)
        if index is None:
            raise UnknownPackageError(package.name)
        indices.append(index)

        template = catalog.at(index)
        for plan_ordinal, override in diff_package(package, template, today).items():
            overrides[(package_ordinal, plan_ordinal)] = override

    return CompactQuote(
        c=client_to_tuple(payload.client),
        p=indices,
        t=to_epoch_ms(payload.created_at),
        m=overrides,
    )
