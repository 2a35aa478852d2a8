"""
Quote data models.

Defines Client, InsurancePlan, Package and QuotePayload, the quote-shaped
values the codec consumes and produces.

Identifiers (`InsurancePlan.id`, `Package.id`) exist only for in-memory
addressing. They are never part of a token and are regenerated on decode.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


class PlanType(str, Enum):
    """Kind of coverage a plan provides."""

    HEALTH = "health"
    KONNECT = "konnect"
    DENTAL = "dental"
    VISION = "vision"
    LIFE = "life"
    CANCER = "cancer"
    HEART = "heart"
    OUT_OF_POCKET = "outOfPocket"
    BREEZE = "breeze"
    DISABILITY = "disability"


def generate_id() -> str:
    """Return a fresh opaque identifier for a plan or package."""
    return uuid.uuid4().hex[:12]


@dataclass
class Client:
    """
    Client the quote is prepared for.

    All fields are strings. `additional_info` is the optional free-text note;
    an empty note is treated the same as a missing one.
    """

    name: str
    zip_code: str
    date_of_birth: str  # ISO date, e.g. "1990-01-01"
    email: str
    phone: str
    additional_info: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "name": self.name,
            "zip_code": self.zip_code,
            "date_of_birth": self.date_of_birth,
            "email": self.email,
            "phone": self.phone,
        }
        if self.additional_info:
            data["additional_info"] = self.additional_info
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Client":
        return cls(
            name=data["name"],
            zip_code=data["zip_code"],
            date_of_birth=data["date_of_birth"],
            email=data["email"],
            phone=data["phone"],
            additional_info=data.get("additional_info") or None,
        )


@dataclass
class InsurancePlan:
    """
    A single plan inside a package.

    Invariants:
    - type, name and provider are fixed by the template the plan came from
    - only the diffable fields (premium, deductible, coinsurance, copays,
      out_of_pocket_max, coverage, details, effective_date, brochure_url)
      may differ from the template default
    """

    type: PlanType
    name: str
    provider: str
    monthly_premium: float = 0
    deductible: Optional[float] = None
    coinsurance: Optional[float] = None  # member share, percent
    primary_care_copay: Optional[float] = None
    specialist_copay: Optional[float] = None
    generic_drug_copay: Optional[float] = None
    out_of_pocket_max: Optional[float] = None
    coverage: Optional[str] = None
    details: Optional[str] = None
    effective_date: Optional[str] = None  # ISO date
    brochure_url: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "type": self.type.value,
            "name": self.name,
            "provider": self.provider,
            "monthly_premium": self.monthly_premium,
        }
        for key in _OPTIONAL_PLAN_FIELDS:
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InsurancePlan":
        return cls(
            type=PlanType(data["type"]),
            name=data["name"],
            provider=data["provider"],
            monthly_premium=data.get("monthly_premium", 0),
            **{key: data.get(key) for key in _OPTIONAL_PLAN_FIELDS},
        )


_OPTIONAL_PLAN_FIELDS = (
    "deductible",
    "coinsurance",
    "primary_care_copay",
    "specialist_copay",
    "generic_drug_copay",
    "out_of_pocket_max",
    "coverage",
    "details",
    "effective_date",
    "brochure_url",
    "id",
)


@dataclass
class Package:
    """
    A package instance built from a catalog template.

    `name` is the template name and is the package's identity on the wire.
    The total premium is always derived from the plans.
    """

    name: str
    description: str
    plans: list[InsurancePlan] = field(default_factory=list)
    id: Optional[str] = None

    @property
    def total_monthly_premium(self) -> float:
        return sum(plan.monthly_premium or 0 for plan in self.plans)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "name": self.name,
            "description": self.description,
            "plans": [plan.to_dict() for plan in self.plans],
            "total_monthly_premium": self.total_monthly_premium,
        }
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Package":
        # total_monthly_premium in the input is ignored on purpose
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            plans=[InsurancePlan.from_dict(plan) for plan in data.get("plans", [])],
            id=data.get("id"),
        )


@dataclass
class QuotePayload:
    """
    The part of a quote that a link carries: client, packages, creation time.

    The caller wraps a decoded payload in its own quote identity (id, agent,
    status); none of those travel in the token.
    """

    client: Client
    packages: list[Package]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "client": self.client.to_dict(),
            "packages": [package.to_dict() for package in self.packages],
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuotePayload":
        created_at = data.get("created_at")
        if created_at is None:
            created = datetime.now(timezone.utc)
        else:
            created = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
            if created.tzinfo is None:
                created = created.replace(tzinfo=timezone.utc)
        return cls(
            client=Client.from_dict(data["client"]),
            packages=[Package.from_dict(package) for package in data.get("packages", [])],
            created_at=created,
        )
