"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The wire payload of the graph manager is parsed straight into these models,
  including the `__typename` discriminator.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from pydantic.config import ConfigDict

from core.config import DEFAULT_VARIANT

FEDERATED_TYPENAME = "FederatedImplementingServices"
NON_FEDERATED_TYPENAME = "NonFederatedImplementingService"


class GraphReference(BaseModel):
    """Identifies the graph (and variant) being inspected."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Graph id in the graph manager.",
    )
    variant: str = Field(
        default=DEFAULT_VARIANT,
        min_length=1,
        description="Variant (tag) under which the composition is evaluated.",
    )

    def __str__(self) -> str:
        return f"{self.id}@{self.variant}"


class ServiceRecord(BaseModel):
    """One member service of a federated graph, as returned by the graph manager."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    graph_id: str = Field(
        ...,
        alias="graphID",
        description="Graph the service belongs to.",
    )
    graph_variant: str = Field(
        ...,
        alias="graphVariant",
        description="Variant the service is registered under.",
    )
    name: str = Field(
        ...,
        description="Service name.",
    )
    url: str | None = Field(
        default=None,
        description="Routing URL of the service, if one was registered.",
    )
    updated_at: datetime = Field(
        ...,
        alias="updatedAt",
        description="Last time the service's schema was published.",
    )


class FederatedImplementingServices(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    typename: Literal["FederatedImplementingServices"] = Field(
        default=FEDERATED_TYPENAME,
        alias="__typename",
    )
    services: tuple[ServiceRecord, ...] = Field(
        default=(),
        description="Member services in the order returned by the service.",
    )

    @field_validator("services", mode="before")
    @classmethod
    def _null_services(cls, value: object) -> object:
        return () if value is None else value


class NonFederatedImplementingService(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    typename: Literal["NonFederatedImplementingService"] = Field(
        default=NON_FEDERATED_TYPENAME,
        alias="__typename",
    )


ImplementingServicesResult = Annotated[
    Union[FederatedImplementingServices, NonFederatedImplementingService],
    Field(discriminator="typename"),
]

implementing_services_adapter: TypeAdapter[
    FederatedImplementingServices | NonFederatedImplementingService
] = TypeAdapter(ImplementingServicesResult)


@dataclass(frozen=True)
class Classification:
    """Verdict on an implementing-services result."""

    federated: bool
    services: tuple[ServiceRecord, ...]

    @property
    def is_empty(self) -> bool:
        return self.federated and len(self.services) == 0


DISPLAY_COLUMNS: tuple[str, str, str] = ("Name", "URL", "Last Updated")


@dataclass(frozen=True)
class DisplayRow:
    """A table row derived from a `ServiceRecord`; recomputed on every render."""

    name: str
    url: str
    last_updated_display: str

    def cells(self) -> tuple[str, str, str]:
        return (self.name, self.url, self.last_updated_display)


@dataclass(frozen=True)
class Footer:
    message: str | None
    link: str

    @property
    def top_margin(self) -> int:
        # Only leave a gap above the link when there is no message.
        return 0 if self.message else 1
