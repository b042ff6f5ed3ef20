"""Contract for the graph manager collaborator.

Why Protocol:
- Structural (duck-typed) contract without rigid inheritance.
- The fetch controller can be driven by the real GraphQL client or by an
  in-memory fake in tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import (
    FederatedImplementingServices,
    NonFederatedImplementingService,
)
from core.domain.queries import ListServicesQuery


@runtime_checkable
class ImplementingServicesSource(Protocol):
    """Minimal contract for resolving a `ListServicesQuery`.

    Design rules:
    - `list_implementing_services` is async because it does network I/O.
    - Returns the parsed result unmodified, or `None` when the graph reports
      no implementing-services value.
    - Failures are raised as `core.errors.FetchError` subclasses.
    """

    async def list_implementing_services(
        self, query: ListServicesQuery
    ) -> FederatedImplementingServices | NonFederatedImplementingService | None:
        ...
