"""
Incident list view - page state, page slicing and page reconciliation.
"""

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from src.core.config import PAGE_SIZE_OPTIONS, DEFAULT_PAGE_SIZE
from src.core.schema import Incident
from util.logging import logger


@dataclass
class PaginationState:
    page_size: int = DEFAULT_PAGE_SIZE
    current_page: int = 1


@dataclass
class PageView:
    """One page of the sorted collection plus everything the controls need."""
    records: List[Incident] = field(default_factory=list)
    start_index: int = 0
    end_index: int = 0
    total_items: int = 0
    current_page: int = 1
    total_pages: int = 1
    can_first: bool = False
    can_previous: bool = False
    can_next: bool = False
    can_last: bool = False

    @property
    def summary(self) -> str:
        if self.total_items == 0:
            return "0 items"
        return f"{self.start_index + 1}–{self.end_index} of {self.total_items}"

    @property
    def page_label(self) -> str:
        return f"{self.current_page} / {self.total_pages}"


def page_count(total_items: int, page_size: int) -> int:
    """Pages needed for total_items; 0 for an empty collection."""
    return math.ceil(total_items / page_size) if total_items > 0 else 0


def reconcile(total_items: int, page_size: int, current_page: int) -> int:
    """Return current_page clamped to the last page; unchanged for an empty collection."""
    pages = page_count(total_items, page_size)
    if total_items > 0 and current_page > pages:
        return pages
    return max(1, current_page)


def derive_page(sorted_records: Sequence[Incident], state: PaginationState) -> PageView:
    total_items = len(sorted_records)
    nav_pages = page_count(total_items, state.page_size)
    display_pages = max(1, nav_pages)

    start = min((state.current_page - 1) * state.page_size, total_items)
    end = min(state.current_page * state.page_size, total_items)

    return PageView(
        records=list(sorted_records[start:end]),
        start_index=start,
        end_index=end,
        total_items=total_items,
        current_page=min(state.current_page, display_pages),
        total_pages=display_pages,
        can_first=nav_pages > 0 and state.current_page > 1,
        can_previous=nav_pages > 0 and state.current_page > 1,
        can_next=nav_pages > 0 and state.current_page < nav_pages,
        can_last=nav_pages > 0 and state.current_page < nav_pages,
    )


class PaginationController:
    """Owns the page state of one list view session."""

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {list(PAGE_SIZE_OPTIONS)}")
        self.state = PaginationState(page_size=page_size, current_page=1)
        self.total_items = 0

    @property
    def total_pages(self) -> int:
        return page_count(self.total_items, self.state.page_size)

    def set_page_size(self, page_size: int) -> None:
        page_size = int(page_size)
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {list(PAGE_SIZE_OPTIONS)}")
        self.state.page_size = page_size
        self.state.current_page = 1
        logger.log_list_view_event("page_size", {"page_size": page_size})

    def reconcile(self, total_items: int) -> int:
        self.total_items = total_items
        self.state.current_page = reconcile(total_items, self.state.page_size, self.state.current_page)
        return self.state.current_page

    def derive(self, sorted_records: Sequence[Incident]) -> PageView:
        return derive_page(sorted_records, self.state)

    def _go_to(self, page: int, action: str) -> None:
        self.state.current_page = page
        logger.log_list_view_event("navigate", {"action": action, "page": page})

    def first(self) -> None:
        if self.total_pages > 0 and self.state.current_page > 1:
            self._go_to(1, "first")

    def previous(self) -> None:
        if self.total_pages > 0 and self.state.current_page > 1:
            self._go_to(max(1, self.state.current_page - 1), "previous")

    def next(self) -> None:
        if self.total_pages > 0 and self.state.current_page < self.total_pages:
            self._go_to(min(self.total_pages, self.state.current_page + 1), "next")

    def last(self) -> None:
        if self.total_pages > 0 and self.state.current_page < self.total_pages:
            self._go_to(self.total_pages, "last")
