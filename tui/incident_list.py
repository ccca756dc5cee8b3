"""
Incident list view controller - composes the held collection, sort state and page state.

The collection is only ever replaced wholesale, through a CollectionReplaced
event. Sort and page state survive replacements; the page number is
reconciled against the new collection size.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from src.core.config import DEFAULT_PAGE_SIZE, MAX_SORT_KEYS
from src.core.schema import Incident
from util.logging import logger
from .pagination import PageView, PaginationController
from .sort_controller import SortColumn, SortController, SortIndicator
from .store_client import StoreError


class IncidentStore(Protocol):
    def list_all(self) -> List[Incident]: ...
    def create(self, data: Dict[str, Any]) -> Incident: ...
    def update(self, incident_id: int, data: Dict[str, Any]) -> Incident: ...
    def delete(self, incident_id: int) -> Any: ...


@dataclass(frozen=True)
class CollectionReplaced:
    """The store was re-fetched; `records` is the full new collection."""
    records: Sequence[Incident]


@dataclass
class ListView:
    indicators: Dict[SortColumn, SortIndicator] = field(default_factory=dict)
    page: PageView = field(default_factory=PageView)
    last_error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.page.total_items == 0


class IncidentListController:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, max_sort_keys: int = MAX_SORT_KEYS):
        self.sorter = SortController(max_keys=max_sort_keys)
        self.pager = PaginationController(page_size=page_size)
        self._records: List[Incident] = []
        self.last_error: Optional[str] = None

    @property
    def records(self) -> List[Incident]:
        return list(self._records)

    def dispatch(self, event: CollectionReplaced) -> None:
        if isinstance(event, CollectionReplaced):
            self.on_collection_replaced(event.records)
        else:
            raise TypeError(f"Unsupported list view event: {event!r}")

    def on_collection_replaced(self, records: Sequence[Incident]) -> None:
        self._records = list(records)
        before = self.pager.state.current_page
        after = self.pager.reconcile(len(self._records))
        logger.log_list_view_event("collection_replaced", {
            "total_items": len(self._records),
            "page_before": before,
            "page_after": after,
        })

    def click_column(self, column: SortColumn) -> None:
        self.sorter.on_column_clicked(column)

    def set_page_size(self, page_size: int) -> None:
        self.pager.set_page_size(page_size)

    def first_page(self) -> None:
        self.pager.first()

    def previous_page(self) -> None:
        self.pager.previous()

    def next_page(self) -> None:
        self.pager.next()

    def last_page(self) -> None:
        self.pager.last()

    def sorted_records(self) -> List[Incident]:
        return self.sorter.sort(self._records)

    def view(self) -> ListView:
        return ListView(
            indicators=self.sorter.indicators(),
            page=self.pager.derive(self.sorted_records()),
            last_error=self.last_error,
        )

    def refresh(self, store: IncidentStore) -> None:
        """Re-fetch the collection. On failure the previous collection stays in place."""
        try:
            records = store.list_all()
        except StoreError as e:
            self.last_error = str(e)
            logger.warning(f"Incident refresh failed, keeping {len(self._records)} cached records: {e}")
            raise
        self.last_error = None
        self.dispatch(CollectionReplaced(records))

    def _refresh_after_mutation(self, store: IncidentStore, operation: str) -> None:
        """Re-fetch after a successful write; a failed fetch leaves last_error set instead of raising."""
        try:
            self.refresh(store)
        except StoreError as e:
            logger.warning(f"Incident {operation} applied but the list could not be refreshed: {e}")

    def create(self, store: IncidentStore, data: Dict[str, Any]) -> Incident:
        incident = store.create(data)
        self._refresh_after_mutation(store, "create")
        return incident

    def update(self, store: IncidentStore, incident_id: int, data: Dict[str, Any]) -> Incident:
        incident = store.update(incident_id, data)
        self._refresh_after_mutation(store, "update")
        return incident

    def delete(self, store: IncidentStore, incident_id: int) -> None:
        store.delete(incident_id)
        self._refresh_after_mutation(store, "delete")
