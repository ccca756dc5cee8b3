"""
Incident list view - multi-key sort state machine and comparator.

The active sort keys form a small stack (at most MAX_SORT_KEYS entries, no
column twice). Position 0 is the primary key, position 1 the secondary key.
The stack only changes in response to a column click, through one of three
transition rules:

    toggle_primary  clicked column is primary: asc -> desc, desc -> removed
    promote         clicked column is further down: move to top as asc
    push            clicked column is absent: insert on top as asc, evict tail
"""

from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional, Tuple

from src.core.config import MAX_SORT_KEYS
from src.core.schema import Incident
from util.logging import logger


class SortColumn(str, Enum):
    TIMESTAMP = "timestamp"
    SEVERITY = "severity"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortKey:
    column: SortColumn
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class SortIndicator:
    """Display state of one sortable column; both fields are None when unsorted."""
    priority: Optional[int] = None
    direction: Optional[SortDirection] = None

    @property
    def label(self) -> str:
        if self.priority is None:
            return "↕"
        arrow = "▲" if self.direction == SortDirection.ASC else "▼"
        return f"{arrow}{self.priority}"


SortStack = Tuple[SortKey, ...]


def position_of(stack: SortStack, column: SortColumn) -> Optional[int]:
    for index, key in enumerate(stack):
        if key.column == column:
            return index
    return None


def toggle_primary(stack: SortStack) -> SortStack:
    """Flip an ascending primary key to descending, or drop a descending one."""
    primary = stack[0]
    if primary.direction == SortDirection.ASC:
        return (SortKey(primary.column, SortDirection.DESC),) + stack[1:]
    return stack[1:]


def promote(stack: SortStack, position: int) -> SortStack:
    """Move the key at `position` to the top, reset to ascending."""
    column = stack[position].column
    rest = stack[:position] + stack[position + 1:]
    return (SortKey(column, SortDirection.ASC),) + rest


def push(stack: SortStack, column: SortColumn, max_keys: int = MAX_SORT_KEYS) -> SortStack:
    """Insert a new ascending key on top, evicting the oldest keys beyond max_keys."""
    return ((SortKey(column, SortDirection.ASC),) + stack)[:max_keys]


def apply_column_click(stack: SortStack, column: SortColumn, max_keys: int = MAX_SORT_KEYS) -> SortStack:
    """Pure transition of the sort stack for a click on `column`."""
    position = position_of(stack, column)
    if position == 0:
        return toggle_primary(stack)
    if position is not None:
        return promote(stack, position)
    return push(stack, column, max_keys)


def _compare_column(column: SortColumn, a: Incident, b: Incident) -> float:
    if column == SortColumn.TIMESTAMP:
        return (a.timestamp - b.timestamp).total_seconds()
    return a.severity.rank - b.severity.rank


def build_comparator(stack: SortStack) -> Callable[[Incident, Incident], float]:
    """Comparator over incidents for the given stack; 0 when every key ties."""
    keys = tuple(stack)

    def compare(a: Incident, b: Incident) -> float:
        for key in keys:
            diff = _compare_column(key.column, a, b)
            if key.direction == SortDirection.DESC:
                diff = -diff
            if diff:
                return diff
        return 0

    return compare


class SortController:
    """Owns the sort stack of one list view session."""

    def __init__(self, max_keys: int = MAX_SORT_KEYS):
        if max_keys < 1:
            raise ValueError("max_keys must be >= 1")
        self.max_keys = max_keys
        self._stack: SortStack = ()

    @property
    def stack(self) -> SortStack:
        return self._stack

    def on_column_clicked(self, column: SortColumn) -> SortStack:
        column = SortColumn(column)
        self._stack = apply_column_click(self._stack, column, self.max_keys)
        logger.log_list_view_event("sort", {
            "column": column.value,
            "stack": [(k.column.value, k.direction.value) for k in self._stack],
        })
        return self._stack

    def comparator(self) -> Callable[[Incident, Incident], float]:
        return build_comparator(self._stack)

    def sort(self, records: Iterable[Incident]) -> List[Incident]:
        """Return a new, stably sorted list; input order breaks remaining ties."""
        if not self._stack:
            return list(records)
        return sorted(records, key=cmp_to_key(self.comparator()))

    def indicator(self, column: SortColumn) -> SortIndicator:
        position = position_of(self._stack, SortColumn(column))
        if position is None:
            return SortIndicator()
        return SortIndicator(priority=position + 1, direction=self._stack[position].direction)

    def indicators(self) -> dict:
        return {column: self.indicator(column) for column in SortColumn}
