"""
Graph session.

The single owner of the current Graph. Ingestion, re-layout and filtering
each swap in a new Graph under one lock, so they never interleave and a
debounced search always filters whatever graph is current when it fires.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional

from .config import Settings
from .core.exceptions import IngestionError
from .core.result import Ok, Result
from .core.types import Graph, GraphStats
from .ingest.pipeline import IngestionReport, ingest_bytes, ingest_source, ingest_workbook
from .ingest.source import TabularSource
from .layout.orchestrator import LayoutOrchestrator
from .layout.sizing import NodeSizer
from .notify import ResultNotifier
from .search.debounce import DebouncedSearch, SearchState, TimerFactory
from .search.engine import apply_filter

logger = logging.getLogger(__name__)

GraphListener = Callable[[Graph], None]


class GraphSession:
    """
    Holds the graph handed to the renderer and the active search query.

    Listeners are called with every newly published graph.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        orchestrator: Optional[LayoutOrchestrator] = None,
        notifier: Optional[ResultNotifier] = None,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.settings = settings or Settings()
        self.orchestrator = orchestrator or LayoutOrchestrator.from_settings(
            self.settings.layout, NodeSizer(settings=self.settings.sizing)
        )
        self.notifier = notifier or ResultNotifier()
        self.listeners: List[GraphListener] = []

        self._lock = threading.RLock()
        self._graph = Graph()
        self._query = ""
        self._search = DebouncedSearch(
            self._evaluate,
            interval=self.settings.search.debounce_seconds,
            timer_factory=timer_factory,
        )

    # =========================================================================
    # State
    # =========================================================================

    @property
    def graph(self) -> Graph:
        with self._lock:
            return self._graph

    @property
    def query(self) -> str:
        """The query whose result is currently applied."""
        with self._lock:
            return self._query

    @property
    def search_state(self) -> SearchState:
        return self._search.state

    @property
    def is_filtering(self) -> bool:
        return self._search.state != SearchState.IDLE

    def stats(self) -> GraphStats:
        return self.graph.stats()

    # =========================================================================
    # Ingestion
    # =========================================================================

    def ingest_workbook(self, path: Path) -> Result[IngestionReport, IngestionError]:
        return self._load(ingest_workbook(path, max_bytes=self.settings.ingest.max_workbook_bytes))

    def ingest_bytes(self, data: bytes, name: str = "<workbook>") -> Result[IngestionReport, IngestionError]:
        return self._load(ingest_bytes(data, name=name, max_bytes=self.settings.ingest.max_workbook_bytes))

    def ingest_source(self, source: TabularSource) -> Result[IngestionReport, IngestionError]:
        return self._load(ingest_source(source))

    def _load(self, result: Result[IngestionReport, IngestionError]) -> Result[IngestionReport, IngestionError]:
        """
        Lay out a freshly built graph and make it current.

        On failure the previous graph stays in place.
        """
        if isinstance(result, Ok):
            report = result.value
            laid_out = self.orchestrator.layout(report.graph)
            result = Ok(report.model_copy(update={"graph": laid_out}))

            self._search.cancel()
            with self._lock:
                self._graph = laid_out
                self._query = ""
                self._publish()

        self.notifier.notify(result)
        return result

    # =========================================================================
    # Layout
    # =========================================================================

    def relayout(self) -> Graph:
        """Re-run layout on the current graph and re-apply the active query."""
        with self._lock:
            if self._graph.is_empty():
                return self._graph
            graph = self.orchestrator.layout(self._graph)
            if self._query:
                graph = apply_filter(graph, self._query)
            self._graph = graph
            self._publish()
            return graph

    # =========================================================================
    # Search
    # =========================================================================

    def search(self, query: str) -> None:
        """Debounced: only the last query submitted in a burst is applied."""
        self._search.submit(query)

    def search_now(self, query: str) -> Graph:
        """Apply ``query`` immediately, superseding anything pending."""
        self._search.cancel()
        with self._lock:
            return self._apply(query)

    def flush_search(self) -> None:
        self._search.flush()

    def wait_for_search(self, timeout: Optional[float] = None) -> bool:
        return self._search.wait_idle(timeout)

    def _evaluate(self, query: str, is_current: Callable[[], bool]) -> None:
        with self._lock:
            if not is_current():
                logger.debug(f"Discarding superseded search {query!r}")
                return
            self._apply(query)

    def _apply(self, query: str) -> Graph:
        # Always the graph current at this moment, never one captured earlier.
        graph = apply_filter(self._graph, query)
        self._graph = graph
        self._query = query
        self._publish()
        stats = graph.stats()
        logger.debug(f"Search {query!r}: {stats.visible_nodes}/{stats.total_nodes} nodes visible")
        return graph

    def _publish(self) -> None:
        for listener in self.listeners:
            listener(self._graph)
