"""Error hierarchy for graphctl.

Fatal conditions are modeled as exceptions and converted into a non-zero exit
code at the CLI boundary. Empty or non-federated graphs are *not* errors.
"""

from __future__ import annotations


class GraphctlError(Exception):
    """Base class for every fatal condition raised by graphctl."""


class PreconditionError(GraphctlError):
    """Raised before any network call when required input is missing."""


class FetchError(GraphctlError):
    """The graph manager could not be queried or answered with a failure."""


class TransportError(FetchError):
    """Network failure or non-successful HTTP status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteServiceError(FetchError):
    """The service answered, but with GraphQL errors or an unexpected payload."""

    def __init__(self, message: str, *, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class GraphNotFoundError(FetchError):
    """The requested graph id does not exist or is not visible with this key."""
