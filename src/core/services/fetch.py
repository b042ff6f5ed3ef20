"""Fetch state machine for a single `ListServices` request.

The controller exposes three states (Loading / Succeeded / Failed) and notifies
subscribers synchronously on every transition, so a UI layer can redraw
without polling. One controller serves exactly one request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from core.domain.models import (
    FederatedImplementingServices,
    GraphReference,
    NonFederatedImplementingService,
)
from core.domain.queries import build_list_services_query
from core.interfaces.graph_source import ImplementingServicesSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    ref: GraphReference


@dataclass(frozen=True)
class Succeeded:
    ref: GraphReference
    result: FederatedImplementingServices | NonFederatedImplementingService | None


@dataclass(frozen=True)
class Failed:
    ref: GraphReference
    error: BaseException


FetchState = Union[Loading, Succeeded, Failed]
StateListener = Callable[[FetchState], None]


class FetchController:
    """Runs one query against an `ImplementingServicesSource`."""

    def __init__(self, source: ImplementingServicesSource) -> None:
        self._source = source
        self._listeners: list[StateListener] = []
        self._state: FetchState | None = None

    @property
    def state(self) -> FetchState | None:
        return self._state

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def _transition(self, state: FetchState) -> None:
        self._state = state
        for listener in self._listeners:
            listener(state)

    async def fetch(self, ref: GraphReference) -> FetchState:
        """Resolve the query; returns `Succeeded` or re-raises the failure.

        `Loading` is published before the source is awaited. On failure the
        controller publishes `Failed` and the original exception propagates.
        """

        if self._state is not None:
            raise RuntimeError("FetchController is single-use; create a new one per request")

        self._transition(Loading(ref=ref))
        query = build_list_services_query(ref)
        logger.debug("Fetching implementing services for %s", ref)

        try:
            result = await self._source.list_implementing_services(query)
        except Exception as exc:
            logger.info("Fetch for %s failed: %s", ref, exc)
            self._transition(Failed(ref=ref, error=exc))
            raise

        logger.debug("Fetch for %s resolved with %s", ref, type(result).__name__)
        state = Succeeded(ref=ref, result=result)
        self._transition(state)
        return state
