"""Controller that owns the loaded catalog and drives facets and rendering."""
import logging
import threading
from typing import Dict, List, Optional

from freegames import FreeToGameClient, LoadResult, CatalogLoadError
from .facet_service import ALL_GENRES, build_facets, facet_options, filter_by_genre
from .view_service import RenderedView, render

STATE_IDLE = 'idle'
STATE_LOADING = 'loading'
STATE_LOADED = 'loaded'
STATE_LOAD_FAILED = 'load_failed'


class CatalogBrowser:
    """Holds the item collection for one page view.

    Lifecycle: ``idle -> loading -> loaded | load_failed``.  Both end states
    are *ready*; a failed load behaves exactly like a successful one that
    returned no games.  There is no retry.

    Rules
    -----
    * The collection is replaced wholesale by :meth:`load`, never merged.
    * Facets and their select options are rebuilt from scratch on each load.
    * :meth:`on_facet_change` only reads the collection.
    * The network call runs outside the lock; readers see either the old or
      the new collection.
    """

    def __init__(self, client: FreeToGameClient, strings: Dict[str, str]) -> None:
        """
        Args:
            client:  Catalog API client (its ``indicator`` is the loading flag).
            strings: Localized catalog strings from
                     :meth:`~app.repositories.locale_repository.LocaleRepository.strings`.
        """
        self._client = client
        self._strings = strings
        self._lock = threading.Lock()
        self._log = logging.getLogger('freegames.browser')

        self.state = STATE_IDLE
        self.last_error: Optional[CatalogLoadError] = None
        self.selected_genre = ALL_GENRES
        self._items: List[Dict] = []
        self.facets: List[str] = [ALL_GENRES]
        self.facet_options: List[Dict[str, str]] = facet_options(self.facets, strings)
        self.view: RenderedView = render([], strings)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def items(self) -> List[Dict]:
        """A copy of the current collection."""
        with self._lock:
            return list(self._items)

    @property
    def strings(self) -> Dict[str, str]:
        return self._strings

    @property
    def loading(self) -> bool:
        return self._client.indicator.visible

    @property
    def is_ready(self) -> bool:
        return self.state in (STATE_LOADED, STATE_LOAD_FAILED)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(self) -> LoadResult:
        """Fetch the catalog once, then rebuild facets and render everything.

        Never raises for API failures: the error is kept in ``last_error``
        and the browser continues with an empty collection.
        """
        self.state = STATE_LOADING
        result = self._client.load()

        with self._lock:
            self._items = list(result.items) if result.ok else []
            self.last_error = result.error
            self.facets = build_facets(self._items)
            self.facet_options = facet_options(self.facets, self._strings)
            self.selected_genre = ALL_GENRES
            self.view = render(self._items, self._strings)
            self.state = STATE_LOADED if result.ok else STATE_LOAD_FAILED

        if result.ok:
            self._log.info("Catalog ready: %d games, %d genres",
                           len(self._items), len(self.facets) - 1)
        else:
            self._log.warning("Catalog unavailable, showing empty list: %s", result.error)
        return result

    def on_facet_change(self, selected: str) -> RenderedView:
        """Render the games matching *selected* (``"all"`` for every game).

        Matching is exact and case-sensitive.  An unknown genre renders the
        empty-state placeholder.
        """
        with self._lock:
            subset = filter_by_genre(self._items, selected)
            self.selected_genre = selected
            self.view = render(subset, self._strings)
            return self.view

    def status(self) -> Dict:
        """Summary used by the status endpoint."""
        with self._lock:
            return {
                'state': self.state,
                'ready': self.is_ready,
                'loading': self.loading,
                'total': len(self._items),
                'selected_genre': self.selected_genre,
                'error': str(self.last_error) if self.last_error else None,
            }
