"""GraphQL query descriptors.

A descriptor binds a `GraphReference` into a fixed document. It is pure data:
adapters decide how (and where) it is sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from core.domain.models import GraphReference

LIST_SERVICES_DOCUMENT = """
query ListServices($id: ID!, $graphVariant: String! = "current") {
  service(id: $id) {
    implementingServices(graphVariant: $graphVariant) {
      __typename
      ... on FederatedImplementingServices {
        services {
          graphID
          graphVariant
          name
          url
          updatedAt
        }
      }
    }
  }
}
""".strip()


@dataclass(frozen=True)
class ListServicesQuery:
    """Fully-bound `ListServices` request."""

    operation_name: ClassVar[str] = "ListServices"
    document: ClassVar[str] = LIST_SERVICES_DOCUMENT

    graph_id: str
    graph_variant: str

    @property
    def variables(self) -> dict[str, str]:
        return {"id": self.graph_id, "graphVariant": self.graph_variant}

    def to_payload(self) -> dict[str, Any]:
        """JSON body for a GraphQL-over-HTTP POST."""

        return {
            "operationName": self.operation_name,
            "query": self.document,
            "variables": self.variables,
        }


def build_list_services_query(ref: GraphReference) -> ListServicesQuery:
    return ListServicesQuery(graph_id=ref.id, graph_variant=ref.variant)
