from __future__ import annotations

import asyncio
import logging

import httpx

from .errors import LayoutEngineFailure, TransportFailure
from .fetch import fetch_metadata
from .focus import NEUTRAL, compute_directive, focus, reset_focus
from .graph import finalize_graph
from .layout_engine import GrandalfLayoutEngine, LayoutEngine
from .pipeline import prepare_layout, run_layout
from .theme import FocusColors
from .types import FocusState, LayoutOptions, PositionedGraph, VisualDirective

logger = logging.getLogger(__name__)


class MetadataExplorer:
    """Holds the currently displayed graph and its focus state.

    Each load runs fetch → resolve → prepare → layout → finalize in order.
    The fetch and the layout call are the only awaits. Loads are numbered;
    a load that finishes after a newer one has started is discarded, so
    the displayed graph always belongs to the most recent request.
    """

    def __init__(
        self,
        engine: LayoutEngine | None = None,
        options: LayoutOptions | None = None,
        client: httpx.AsyncClient | None = None,
        colors: FocusColors | None = None,
    ) -> None:
        self.engine = engine or GrandalfLayoutEngine()
        self.options = options
        self.client = client
        self.colors = colors
        self._generation = 0
        self._graph = PositionedGraph()
        self._state = NEUTRAL

    @property
    def graph(self) -> PositionedGraph:
        return self._graph

    @property
    def focus_state(self) -> FocusState:
        return self._state

    @property
    def directive(self) -> VisualDirective:
        return compute_directive(self._graph, self._state, self.colors)

    async def load(self, url: str) -> PositionedGraph | None:
        """Fetch and display a service's metadata.

        Returns the new graph (empty when fetching or layout failed), or None
        when a newer load superseded this one.
        """
        generation = self._next_generation()
        try:
            document = await fetch_metadata(url, client=self.client)
        except TransportFailure as err:
            logger.warning("No data for %s: %s", url, err)
            return self._apply(generation, PositionedGraph())

        if generation != self._generation:
            logger.debug("Discarding stale load of %s", url)
            return None
        return await self._lay_out(generation, document.text)

    async def load_text(self, text: str | bytes) -> PositionedGraph | None:
        """Display an already-fetched metadata document."""
        generation = self._next_generation()
        return await self._lay_out(generation, text)

    def select(self, node_id: str) -> VisualDirective:
        self._state = focus(self._state, self._graph, node_id)
        return self.directive

    def reset(self) -> VisualDirective:
        self._state = reset_focus(self._state)
        return self.directive

    async def _lay_out(self, generation: int, text: str | bytes) -> PositionedGraph | None:
        prepared, request = prepare_layout(text, self.options)
        try:
            result = await asyncio.to_thread(run_layout, self.engine, request)
        except LayoutEngineFailure as err:
            logger.warning("Layout failed: %s", err)
            return self._apply(generation, PositionedGraph())

        if generation != self._generation:
            logger.debug("Discarding stale layout (generation %d)", generation)
            return None
        return self._apply(generation, finalize_graph(prepared, result, self.options))

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _apply(self, generation: int, graph: PositionedGraph) -> PositionedGraph | None:
        if generation != self._generation:
            return None
        self._graph = graph
        self._state = NEUTRAL
        return graph
